"""Plain text reporter using print().

Stdlib-only reporter for simple text output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from policyspec.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from policyspec.domain.exceptions import ValidationError
    from policyspec.domain.model.report import ValidationReport

_RULE = "=" * 70
_THIN_RULE = "-" * 70


class PlainTextReporter(BaseReporter):
    """Plain text reporter using print().

    Outputs to stdout by default, can be configured for any TextIO.
    """

    def report(self, report: ValidationReport) -> None:
        """Report validation result as plain text.

        Args:
            report: Validation report
        """
        self._report_header(report)
        self._report_summary(report)

        if report.fatal is not None:
            self._report_fatal(report)
        elif report.errors:
            self._report_errors(report.errors)

        self._report_footer(report)

    def _write(self, text: str = "") -> None:
        """Write line to output."""
        print(text, file=self._output)

    def _report_header(self, report: ValidationReport) -> None:
        self._write(_RULE)
        self._write(f"Policy Document Check: {report.source or '<string>'}")
        self._write(_RULE)

    def _report_summary(self, report: ValidationReport) -> None:
        self._write()
        self._write("Summary:")
        if report.document is not None:
            self._write(f"  Sections: {len(report.document.sections)}")
            self._write(f"  Blocks: {len(report.document)}")
        self._write(f"  Errors: {report.error_count}")
        for code, count in report.counts_by_code().items():
            self._write(f"    {code}: {count}")
        self._write(f"  Status: {'PASS' if report.passed else 'FAIL'}")

    def _report_fatal(self, report: ValidationReport) -> None:
        fatal = report.fatal
        self._write()
        self._write(_THIN_RULE)
        self._write(f"{type(fatal).__name__}: {fatal.reason}")  # type: ignore[union-attr]
        self._write(f"   at {fatal.location}")  # type: ignore[union-attr]
        self._write(_THIN_RULE)

    def _report_errors(self, errors: tuple[ValidationError, ...]) -> None:
        self._write()
        self._write(_THIN_RULE)
        self._write(f"Validation errors ({len(errors)}):")
        self._write(_THIN_RULE)

        for i, error in enumerate(errors, start=1):
            where = f"{error.subject}.{error.path}" if error.path else error.subject
            self._write()
            self._write(f"{i}. [{error.code}] {where}")
            self._write(f"   {error.message}")
            self._write(f"   at {error.location}")

    def _report_footer(self, report: ValidationReport) -> None:
        self._write()
        self._write(_RULE)
        self._write(f"Result: {'PASSED' if report.passed else 'FAILED'}")
        self._write(_RULE)
