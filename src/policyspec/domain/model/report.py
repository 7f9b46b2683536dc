"""Validation report aggregate for one document."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from policyspec.domain.exceptions import LexError, ParseError, ValidationError
    from policyspec.domain.model.document import PolicyDocument


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Result of checking one document.

    Immutable aggregate used by ReporterProtocol.report().
    Exactly one of three outcomes:
        - fatal set: lex/parse failure, no errors, no document
        - errors set: schema violations, no document
        - document set: valid

    Attributes:
        source: Document name, None for anonymous text
        errors: All validation errors (empty if valid or fatal)
        document: Validated document (None unless passed)
        fatal: Lex or parse error that stopped processing
    """

    source: str | None
    errors: tuple[ValidationError, ...] = ()
    document: PolicyDocument | None = None
    fatal: LexError | ParseError | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.fatal is not None and (self.errors or self.document is not None):
            raise ValueError("fatal report must not carry errors or a document")
        if self.errors and self.document is not None:
            raise ValueError("failed validation must not carry a document")
        if self.fatal is None and not self.errors and self.document is None:
            raise ValueError("passed report requires a document")

    @property
    def passed(self) -> bool:
        """Document parsed and validated cleanly."""
        return self.document is not None

    @property
    def error_count(self) -> int:
        """Validation errors plus the fatal error, if any."""
        return len(self.errors) + (1 if self.fatal is not None else 0)

    def counts_by_code(self) -> dict[str, int]:
        """Validation error count per code, sorted by code."""
        counts = Counter(error.code for error in self.errors)
        return dict(sorted(counts.items()))

    @property
    def exit_code(self) -> int:
        """CI gate exit code: 0 passed, 1 validation errors, 2 fatal."""
        if self.fatal is not None:
            return 2
        return 0 if self.passed else 1
