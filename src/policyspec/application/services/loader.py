"""Loader facade: text or file → validated PolicyDocument.

The whole parse + validate call is one synchronous unit of work.
Lex/parse errors abort immediately; validation errors are collected
and reported together. A failed validation never yields a model.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from policyspec.application.services.parser import parse_text
from policyspec.application.validators import validate_document
from policyspec.domain.exceptions import DocumentValidationError, LexError, ParseError
from policyspec.domain.model.document import PolicyDocument
from policyspec.domain.model.report import ValidationReport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from policyspec.domain.model.configuration import PolicySpecConfig
    from policyspec.domain.ports.validator import ValidatorProtocol

logger = logging.getLogger(__name__)


def check_text(
    text: str,
    *,
    source: str | None = None,
    config: PolicySpecConfig | None = None,
    validators: Sequence[ValidatorProtocol] | None = None,
) -> ValidationReport:
    """Parse and validate, never raising for document problems.

    Args:
        text: Document text.
        source: Document name used in locations.
        config: Loader configuration. None = defaults.
        validators: Explicit validators. None = registry from config.

    Returns:
        Report with the document, the validation errors, or the fatal error.
    """
    try:
        parsed = parse_text(text, source=source, config=config)
    except (LexError, ParseError) as exc:
        logger.debug("fatal error in %s: %s", source or "<string>", exc)
        return ValidationReport(source=source, fatal=exc)

    errors = validate_document(parsed, config=config, validators=validators)
    if errors:
        return ValidationReport(source=source, errors=errors)
    return ValidationReport(source=source, document=PolicyDocument.from_parsed(parsed))


def check_path(
    path: Path | str,
    *,
    config: PolicySpecConfig | None = None,
    validators: Sequence[ValidatorProtocol] | None = None,
) -> ValidationReport:
    """Read a UTF-8 document and check it.

    Raises:
        OSError: File cannot be read.
        UnicodeDecodeError: File is not UTF-8.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return check_text(text, source=str(path), config=config, validators=validators)


def load_text(
    text: str,
    *,
    source: str | None = None,
    config: PolicySpecConfig | None = None,
    validators: Sequence[ValidatorProtocol] | None = None,
) -> PolicyDocument:
    """Parse and validate, returning the immutable document model.

    Raises:
        LexError: Malformed token.
        ParseError: Structural violation.
        DocumentValidationError: One or more schema violations (all of them).
    """
    report = check_text(text, source=source, config=config, validators=validators)
    if report.fatal is not None:
        raise report.fatal
    if report.document is None:
        raise DocumentValidationError(report.errors)
    return report.document


def load_path(
    path: Path | str,
    *,
    config: PolicySpecConfig | None = None,
    validators: Sequence[ValidatorProtocol] | None = None,
) -> PolicyDocument:
    """Read a UTF-8 document and load it.

    Raises:
        OSError: File cannot be read.
        LexError: Malformed token.
        ParseError: Structural violation.
        DocumentValidationError: One or more schema violations.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return load_text(text, source=str(path), config=config, validators=validators)
