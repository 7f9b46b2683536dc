"""JSON reporter for machine-readable output.

Stdlib-only reporter for CI gates and other tooling.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TextIO

from policyspec.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from policyspec.domain.exceptions import LexError, ParseError, ValidationError
    from policyspec.domain.model.location import SourceLocation
    from policyspec.domain.model.report import ValidationReport


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    One JSON object per report, followed by a newline.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        super().__init__(output)
        self._indent = indent

    def report(self, report: ValidationReport) -> None:
        """Report validation result as JSON.

        Args:
            report: Validation report
        """
        json.dump(report_to_dict(report), self._output, indent=self._indent)
        self._output.write("\n")


def report_to_dict(report: ValidationReport) -> dict[str, object]:
    """Convert ValidationReport to JSON-serializable dict."""
    document = report.document
    return {
        "source": report.source,
        "passed": report.passed,
        "exit_code": report.exit_code,
        "summary": {
            "error_count": report.error_count,
            "by_code": report.counts_by_code(),
            "block_count": len(document) if document is not None else None,
        },
        "fatal": _fatal_to_dict(report.fatal) if report.fatal is not None else None,
        "errors": [_error_to_dict(e) for e in report.errors],
        "enforcement": (
            {level.value: [str(ref) for ref in refs] for level, refs in document.enforcement_levels().items()}
            if document is not None
            else None
        ),
    }


def _location_to_dict(location: SourceLocation) -> dict[str, object]:
    return {
        "source": location.source,
        "line": location.line,
        "column": location.column,
    }


def _fatal_to_dict(error: LexError | ParseError) -> dict[str, object]:
    return {
        "type": type(error).__name__,
        "message": error.reason,
        "location": _location_to_dict(error.location),
    }


def _error_to_dict(error: ValidationError) -> dict[str, object]:
    return {
        "code": error.code,
        "subject": error.subject,
        "path": error.path,
        "message": error.message,
        "location": _location_to_dict(error.location),
    }
