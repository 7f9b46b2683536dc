"""Blocks, sections and the parsed (not yet validated) block forest."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from policyspec.domain.model.values import MapValue

if TYPE_CHECKING:
    from collections.abc import Iterator

    from policyspec.domain.model.enums import BlockKind
    from policyspec.domain.model.location import SourceLocation

MANIFEST_KEY = "manifest"
ROOT_SECTION = ""


def format_section(path: str) -> str:
    """Display form of a section path. Root section is <root>."""
    return path if path else "<root>"


@dataclass(frozen=True, slots=True)
class BlockRef:
    """Qualified block identity: (kind, name).

    Unique within a document.
    """

    kind: BlockKind
    name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")

    def __str__(self) -> str:
        """Format as DEFINE_KIND(name)."""
        return f"{self.kind.keyword}({self.name})"


@dataclass(frozen=True, slots=True)
class Block:
    """Typed declaration: DEFINE_KIND(name) { attributes }.

    Attributes:
        kind: Declaration keyword
        name: Identifier, unique within its kind
        section: Dotted path of the enclosing section ("" for root)
        attributes: Attribute map, including the reserved manifest sub-map
        location: Position of the DEFINE_ keyword
    """

    kind: BlockKind
    name: str
    section: str
    attributes: MapValue
    location: SourceLocation | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not isinstance(self.attributes, MapValue):
            raise TypeError(f"attributes must be MapValue, got {type(self.attributes).__name__}")

    @property
    def ref(self) -> BlockRef:
        """(kind, name) identity."""
        return BlockRef(self.kind, self.name)

    @property
    def manifest(self) -> MapValue | None:
        """Reserved manifest sub-map. None if absent or not a map."""
        value = self.attributes.get(MANIFEST_KEY)
        return value if isinstance(value, MapValue) else None

    def __str__(self) -> str:
        return str(self.ref)


@dataclass(frozen=True, slots=True)
class Section:
    """Named grouping of blocks, identified by a dotted path.

    Attributes:
        path: Dotted path, "" for blocks declared before any header
        blocks: Block identities in declaration order
        attributes: Loose key/value entries (opaque vocabulary lists)
        location: Position of the header, None for the root section
    """

    path: str
    blocks: tuple[BlockRef, ...] = ()
    attributes: MapValue = field(default_factory=MapValue)
    location: SourceLocation | None = field(default=None, compare=False)

    @property
    def display_path(self) -> str:
        """Path for messages. Root section is <root>."""
        return format_section(self.path)

    @property
    def block_names(self) -> tuple[str, ...]:
        """Names of declared blocks, in order."""
        return tuple(ref.name for ref in self.blocks)


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Block forest produced by the parser, before validation.

    Invariants (FAIL-FIRST):
        - section paths unique
        - (kind, name) unique
        - every section block reference resolves to a block
    """

    sections: tuple[Section, ...]
    blocks: tuple[Block, ...]
    source: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        paths = [s.path for s in self.sections]
        if len(paths) != len(set(paths)):
            raise ValueError("section paths must be unique")
        refs = [b.ref for b in self.blocks]
        if len(refs) != len(set(refs)):
            raise ValueError("(kind, name) pairs must be unique")
        known = set(refs)
        for section in self.sections:
            for ref in section.blocks:
                if ref not in known:
                    raise ValueError(f"section {section.display_path!r} references unknown {ref}")

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)
