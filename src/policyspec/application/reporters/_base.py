"""Base reporter: one ValidationReport in, text on a stream out."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from policyspec.domain.model.report import ValidationReport


class BaseReporter(ABC):
    """Base class for reporters implementing ReporterProtocol.

    The output stream is resolved at construction, so a reporter built
    while stdout is redirected keeps writing to the redirect target.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
        """
        self._output = output if output is not None else sys.stdout

    @abstractmethod
    def report(self, report: ValidationReport) -> None:
        """Write one document's validation result to the output stream."""
