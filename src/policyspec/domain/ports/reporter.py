"""Reporter protocol for output formatting.

Users extend policyspec by implementing this Protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from policyspec.domain.model.report import ValidationReport


class ReporterProtocol(Protocol):
    """Contract for reporters.

    policyspec provides PlainTextReporter, JSONReporter and ConsoleReporter.
    A CI gate typically uses JSONReporter and the report exit code.
    """

    def report(self, report: ValidationReport) -> None:
        """Report one document's validation result.

        Implementation decides output format and destination.

        Args:
            report: Validation report (errors, fatal error or document)
        """
        ...
