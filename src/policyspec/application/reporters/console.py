"""Console reporter: ValidationReport → rich formatted output."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from policyspec.application.reporters._base import BaseReporter
from policyspec.domain.model.enums import Enforcement

if TYPE_CHECKING:
    from policyspec.domain.model.document import PolicyDocument
    from policyspec.domain.model.report import ValidationReport

_LEVEL_STYLES = {
    Enforcement.MANDATORY: "bold red",
    Enforcement.RECOMMENDED: "yellow",
    Enforcement.WARNING: "cyan",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        width: Console width in characters.
        color: Emit ANSI styles.
        max_errors: Max errors to display. None = unlimited.
        show_enforcement: Show enforcement table for valid documents.
    """

    width: int = 120
    color: bool = True
    max_errors: int | None = None
    show_enforcement: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")
        if self.max_errors is not None and self.max_errors < 1:
            raise ValueError(f"max_errors must be >= 1, got {self.max_errors}")


class ConsoleReporter(BaseReporter):
    """Console reporter: rich tables for errors and enforcement levels.

    render() returns the text; report() writes it to the output stream.
    """

    def __init__(self, output: TextIO | None = None, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            output: Output stream for report() (default: sys.stdout)
            config: Reporter configuration. Uses defaults if None.
        """
        super().__init__(output)
        self._config = config or ConsoleConfig()

    def report(self, report: ValidationReport) -> None:
        self._output.write(self.render(report))

    def render(self, report: ValidationReport) -> str:
        """Format validation report as rich formatted string.

        Args:
            report: Validation report to format.

        Returns:
            Formatted string, with ANSI styles when color is enabled.
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.color,
            no_color=not self._config.color,
            width=self._config.width,
        )

        console.print()
        console.rule(f"[bold]{escape(report.source or '<string>')}[/bold]")
        console.print()

        if report.fatal is not None:
            console.print(f"[bold red]{type(report.fatal).__name__}[/bold red] at {escape(str(report.fatal.location))}")
            console.print(f"  {report.fatal.reason}", markup=False)
        elif report.errors:
            self._render_errors(console, report)
        elif report.document is not None:
            self._render_document(console, report.document)

        console.print()
        status = "[bold green]PASSED[/bold green]" if report.passed else "[bold red]FAILED[/bold red]"
        console.print(f"Result: {status}")
        return output.getvalue()

    def _render_errors(self, console: Console, report: ValidationReport) -> None:
        errors = report.errors
        if self._config.max_errors is not None:
            errors = errors[: self._config.max_errors]

        table = Table(title=f"Validation errors ({len(report.errors)})", show_lines=False)
        table.add_column("Location", style="dim", no_wrap=True)
        table.add_column("Code", style="magenta")
        table.add_column("Subject")
        table.add_column("Message")
        for error in errors:
            where = f"{error.subject}.{error.path}" if error.path else error.subject
            table.add_row(
                f"{error.location.line}:{error.location.column}",
                error.code,
                Text(where),
                Text(error.message),
            )
        console.print(table)

        hidden = len(report.errors) - len(errors)
        if hidden:
            console.print(f"[dim]... {hidden} more error(s) not shown[/dim]")

    def _render_document(self, console: Console, document: PolicyDocument) -> None:
        console.print(f"[bold]Sections:[/bold] {len(document.sections)}  [bold]Blocks:[/bold] {len(document)}")
        if not self._config.show_enforcement:
            return

        console.print()
        table = Table(title="Enforcement levels")
        table.add_column("Level")
        table.add_column("Count", justify="right")
        table.add_column("Blocks")
        for level, refs in document.enforcement_levels().items():
            table.add_row(
                f"[{_LEVEL_STYLES[level]}]{level.value}[/{_LEVEL_STYLES[level]}]",
                str(len(refs)),
                Text(", ".join(str(ref) for ref in refs)),
            )
        console.print(table)
