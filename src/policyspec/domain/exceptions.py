"""Domain exceptions: all public errors of policyspec.

All exceptions visible to users are defined in the domain.
Infrastructure/Application raise these, they do not define their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from policyspec.domain.model.location import SourceLocation


class PolicySpecError(Exception):
    """Base for all policyspec exceptions.

    Allows: except PolicySpecError to catch all library errors.
    """


class LexError(PolicySpecError, ValueError):
    """Malformed token in document text.

    Fatal for the current document: tokenizing stops at the first one.

    Attributes:
        location: Where the bad token starts.
        reason: Error description.
    """

    def __init__(self, location: SourceLocation, reason: str) -> None:
        """Initialize with location and reason."""
        if not reason:
            raise ValueError("reason must be non-empty string")
        self.location = location
        self.reason = reason
        super().__init__(f"{location}: {reason}")

    @property
    def line(self) -> int:
        """Line of the offending token."""
        return self.location.line


class ParseError(PolicySpecError, ValueError):
    """Structural violation in the token stream.

    Unexpected token, unbalanced brackets, duplicate block name.
    Fatal for the current document.

    Attributes:
        location: Offending token location.
        reason: Error description.
    """

    def __init__(self, location: SourceLocation, reason: str) -> None:
        """Initialize with location and reason."""
        if not reason:
            raise ValueError("reason must be non-empty string")
        self.location = location
        self.reason = reason
        super().__init__(f"{location}: {reason}")

    @property
    def line(self) -> int:
        """Line of the offending token."""
        return self.location.line


class ValidationError(PolicySpecError):
    """Schema violation in a single block.

    Collected, not raised one by one: validators return tuples of these
    and DocumentValidationError carries them all.

    Attributes:
        location: Location of the offending value (or block when absent).
        code: Stable machine-readable error code (e.g. "invalid-choice").
        subject: Qualified block name "DEFINE_KIND(name)" or section path.
        path: Dotted attribute path inside the block, "" for the block itself.
        message: Human-readable description.
    """

    def __init__(
        self,
        *,
        location: SourceLocation,
        code: str,
        subject: str,
        message: str,
        path: str = "",
    ) -> None:
        """Initialize with location, code, subject and message."""
        if not code:
            raise ValueError("code must not be empty")
        if not subject:
            raise ValueError("subject must not be empty")
        if not message:
            raise ValueError("message must not be empty")
        self.location = location
        self.code = code
        self.subject = subject
        self.path = path
        self.message = message
        where = f"{subject}.{path}" if path else subject
        super().__init__(f"{location}: [{code}] {where}: {message}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple[object, ...]:
        return (self.location, self.code, self.subject, self.path, self.message)


class DocumentValidationError(PolicySpecError):
    """Document failed schema validation.

    Raised by load_text()/load_path() after every validator ran.

    Attributes:
        errors: All collected validation errors, in document order.
    """

    def __init__(self, errors: tuple[ValidationError, ...]) -> None:
        if not errors:
            raise ValueError("DocumentValidationError requires at least one error")

        self.errors = errors

        msg_parts = [f"Found {len(errors)} validation error(s):"]
        msg_parts.extend(str(e) for e in errors)
        super().__init__("\n".join(msg_parts))


class NotFoundError(PolicySpecError, KeyError):
    """Lookup in the document model found nothing.

    Inherits KeyError for semantic correctness.

    Attributes:
        what: Description of the missing entry.
    """

    def __init__(self, what: str) -> None:
        """Initialize with description of the missing entry."""
        self.what = what
        super().__init__(what)

    def __str__(self) -> str:
        return f"not found: {self.what}"


class ConfigError(PolicySpecError, ValueError):
    """Invalid configuration value.

    Attributes:
        option: Name of the offending option.
        reason: Why the value is invalid.
    """

    def __init__(self, option: str, reason: str) -> None:
        """Initialize with option name and reason."""
        self.option = option
        self.reason = reason
        super().__init__(f"Invalid option '{option}': {reason}")
