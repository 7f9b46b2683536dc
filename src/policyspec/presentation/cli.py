"""Command line interface.

    policyspec check FILE... [--format text|json|rich]
    policyspec dump FILE [--format json|dsl]

Exit codes: 0 all documents valid, 1 validation errors, 2 lex/parse,
I/O or configuration errors.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from policyspec.application.reporters import ConsoleReporter, JSONReporter, PlainTextReporter
from policyspec.application.services import check_path, document_to_json, dump_document, load_path
from policyspec.domain.exceptions import ConfigError, DocumentValidationError, LexError, ParseError
from policyspec.domain.model.configuration import PolicySpecConfig
from policyspec.domain.model.enums import DuplicateSectionPolicy
from policyspec.infrastructure.config_file import load_config

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_FATAL = 2

app = typer.Typer(add_completion=False, help="Parse and validate coding-standards policy documents.")

logger = logging.getLogger(__name__)


class ReportFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    RICH = "rich"


class DumpFormat(str, Enum):
    JSON = "json"
    DSL = "dsl"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _resolve_config(
    config_path: Path | None,
    strict_keys: bool | None,
    merge_sections: bool | None,
) -> PolicySpecConfig:
    """pyproject.toml settings, overridden by command line flags."""
    try:
        config = load_config(config_path=config_path)
    except ConfigError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL) from exc

    duplicate_sections = config.duplicate_sections
    if merge_sections is not None:
        duplicate_sections = DuplicateSectionPolicy.MERGE if merge_sections else DuplicateSectionPolicy.REJECT

    return PolicySpecConfig(
        duplicate_sections=duplicate_sections,
        strict_keys=config.strict_keys if strict_keys is None else strict_keys,
        comment_markers=config.comment_markers,
        schema=config.schema,
    )


@app.command()
def check(
    files: List[Path] = typer.Argument(..., help="Policy documents to check."),
    output_format: ReportFormat = typer.Option(ReportFormat.TEXT, "--format", "-f"),
    strict_keys: Optional[bool] = typer.Option(
        None,
        "--strict-keys/--no-strict-keys",
        help="Report attribute keys the schema does not name.",
    ),
    merge_sections: Optional[bool] = typer.Option(
        None,
        "--merge-sections/--reject-duplicate-sections",
        help="Merge repeated section headers instead of rejecting them.",
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="TOML file with [tool.policyspec]."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Parse and validate documents, print every error, exit nonzero on failure."""
    _configure_logging(verbose)
    config = _resolve_config(config_path, strict_keys, merge_sections)

    match output_format:
        case ReportFormat.JSON:
            reporter = JSONReporter()
        case ReportFormat.RICH:
            reporter = ConsoleReporter()
        case _:
            reporter = PlainTextReporter()

    exit_code = EXIT_OK
    for path in files:
        try:
            report = check_path(path, config=config)
        except (OSError, UnicodeDecodeError) as exc:
            typer.echo(f"error: cannot read {path}: {exc}", err=True)
            exit_code = EXIT_FATAL
            continue
        logger.info("%s: %s", path, "passed" if report.passed else "failed")
        reporter.report(report)
        exit_code = max(exit_code, report.exit_code)

    raise typer.Exit(code=exit_code)


@app.command()
def dump(
    file: Path = typer.Argument(..., help="Policy document to load."),
    output_format: DumpFormat = typer.Option(DumpFormat.JSON, "--format", "-f"),
    merge_sections: Optional[bool] = typer.Option(None, "--merge-sections/--reject-duplicate-sections"),
    config_path: Optional[Path] = typer.Option(None, "--config"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the validated document model as JSON or canonical DSL."""
    _configure_logging(verbose)
    config = _resolve_config(config_path, None, merge_sections)

    try:
        document = load_path(file, config=config)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"error: cannot read {file}: {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL) from exc
    except (LexError, ParseError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL) from exc
    except DocumentValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_INVALID) from exc

    if output_format is DumpFormat.DSL:
        typer.echo(dump_document(document), nl=False)
    else:
        typer.echo(document_to_json(document))


def main() -> None:
    """Console script entry point."""
    app()
