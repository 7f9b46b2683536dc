"""Source location value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position in a policy document.

    Attributes:
        line: Line number (1-based, must be > 0)
        column: Column number (1-based, must be > 0)
        source: Document name (file path or label), None for anonymous text
    """

    line: int
    column: int
    source: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.column <= 0:
            raise ValueError(f"column must be > 0, got {self.column}")

    def __str__(self) -> str:
        """Format as source:line:column."""
        prefix = self.source if self.source is not None else "<string>"
        return f"{prefix}:{self.line}:{self.column}"
