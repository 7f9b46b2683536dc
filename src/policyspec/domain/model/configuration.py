"""Loader configuration.

User-provided options for tokenizing, parsing and validating a document.
None = use built-in default.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from policyspec.domain.exceptions import ConfigError
from policyspec.domain.model.enums import DuplicateSectionPolicy
from policyspec.domain.model.schema import SchemaTable

DEFAULT_COMMENT_MARKERS: tuple[str, ...] = ("#", "//")

# Characters that already mean something to the tokenizer
_RESERVED_MARKER_CHARS = re.compile(r"""["'{}\[\]()=:,;\w.%-]""")


@dataclass(frozen=True, slots=True)
class PolicySpecConfig:
    """Immutable configuration with FAIL-FIRST validation.

    Attributes:
        duplicate_sections: Policy for a section path declared twice.
            REJECT raises ParseError, MERGE appends later blocks.
        strict_keys: Attribute keys missing from the schema are reported
            as validation errors.
        comment_markers: Prefixes that start a comment running to end of line.
        schema: Schema table. None = built-in default schema.
    """

    duplicate_sections: DuplicateSectionPolicy = DuplicateSectionPolicy.REJECT
    strict_keys: bool = False
    comment_markers: tuple[str, ...] = DEFAULT_COMMENT_MARKERS
    schema: SchemaTable | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.duplicate_sections, DuplicateSectionPolicy):
            raise ConfigError(
                "duplicate_sections",
                f"expected DuplicateSectionPolicy, got {type(self.duplicate_sections).__name__}",
            )
        if not self.comment_markers:
            raise ConfigError("comment_markers", "at least one marker is required")
        for marker in self.comment_markers:
            if not marker or marker.isspace():
                raise ConfigError("comment_markers", "markers must be non-blank")
            if _RESERVED_MARKER_CHARS.match(marker):
                raise ConfigError("comment_markers", f"marker {marker!r} starts with a DSL token character")
