"""Document Model: validated, immutable policy document.

Query surface for external consumers (report renderers, rule engines,
CI gates). Built once per parse pass, never mutated afterwards, so it
is safe to read from multiple threads without synchronization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from policyspec.domain.exceptions import NotFoundError
from policyspec.domain.model.block import MANIFEST_KEY, BlockRef, format_section
from policyspec.domain.model.enums import BlockKind, Enforcement
from policyspec.domain.model.values import Scalar

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from policyspec.domain.model.block import Block, ParsedDocument, Section
    from policyspec.domain.model.values import MapValue, PlainValue


def _coerce_kind(kind: BlockKind | str) -> BlockKind:
    if isinstance(kind, BlockKind):
        return kind
    try:
        return BlockKind.parse(kind)
    except ValueError:
        raise NotFoundError(f"block kind {kind!r}") from None


@dataclass(frozen=True, slots=True)
class PolicyDocument:
    """Validated policy document.

    Attributes:
        sections: Sections in declaration order
        blocks: Blocks grouped by section, in section order
        source: Document name, None for anonymous text
    """

    sections: tuple[Section, ...]
    blocks: tuple[Block, ...]
    source: str | None = field(default=None, compare=False)
    _by_ref: Mapping[BlockRef, Block] = field(init=False, repr=False, compare=False)
    _by_path: Mapping[str, Section] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Build lookup indexes. FAIL-FIRST on duplicates and enforcement."""
        for block in self.blocks:
            _enforcement(block)
        by_ref = {block.ref: block for block in self.blocks}
        if len(by_ref) != len(self.blocks):
            raise ValueError("(kind, name) pairs must be unique")
        by_path = {section.path: section for section in self.sections}
        if len(by_path) != len(self.sections):
            raise ValueError("section paths must be unique")
        object.__setattr__(self, "_by_ref", MappingProxyType(by_ref))
        object.__setattr__(self, "_by_path", MappingProxyType(by_path))

    @classmethod
    def from_parsed(cls, parsed: ParsedDocument) -> PolicyDocument:
        """Wrap a parsed forest that passed validation."""
        return cls(sections=parsed.sections, blocks=parsed.blocks, source=parsed.source)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __contains__(self, ref: object) -> bool:
        return ref in self._by_ref

    def block(self, kind: BlockKind | str, name: str) -> Block:
        """Look up a block by (kind, name).

        Raises:
            NotFoundError: No such block.
        """
        ref = BlockRef(_coerce_kind(kind), name)
        try:
            return self._by_ref[ref]
        except KeyError:
            raise NotFoundError(str(ref)) from None

    def attributes(self, kind: BlockKind | str, name: str) -> MapValue:
        """Attribute map of a block.

        Raises:
            NotFoundError: No such block.
        """
        return self.block(kind, name).attributes

    def section(self, path: str) -> tuple[str, ...]:
        """Ordered block names declared under a section path.

        Raises:
            NotFoundError: No such section.
        """
        try:
            return self._by_path[path].block_names
        except KeyError:
            raise NotFoundError(f"section {format_section(path)}") from None

    def get_section(self, path: str) -> Section:
        """Section object by path.

        Raises:
            NotFoundError: No such section.
        """
        try:
            return self._by_path[path]
        except KeyError:
            raise NotFoundError(f"section {format_section(path)}") from None

    @property
    def section_paths(self) -> tuple[str, ...]:
        """All section paths in declaration order."""
        return tuple(section.path for section in self.sections)

    def blocks_of(self, kind: BlockKind | str) -> tuple[Block, ...]:
        """All blocks of one kind, in declaration order."""
        wanted = _coerce_kind(kind)
        return tuple(block for block in self.blocks if block.kind is wanted)

    def enforcement_of(self, kind: BlockKind | str, name: str) -> Enforcement:
        """Enforcement level of one block.

        Raises:
            NotFoundError: No such block.
        """
        return _enforcement(self.block(kind, name))

    def enforcement_levels(self) -> Mapping[Enforcement, tuple[BlockRef, ...]]:
        """Every enforcement level with the blocks declaring it.

        All levels are present as keys, possibly with an empty tuple.
        Blocks keep declaration order.
        """
        grouped: dict[Enforcement, list[BlockRef]] = {level: [] for level in Enforcement}
        for block in self.blocks:
            grouped[_enforcement(block)].append(block.ref)
        return MappingProxyType({level: tuple(refs) for level, refs in grouped.items()})

    def to_dict(self) -> dict[str, PlainValue | None]:
        """JSON-serializable representation."""
        return {
            "source": self.source,
            "sections": [
                {
                    "path": section.path,
                    "blocks": [{"kind": ref.kind.label, "name": ref.name} for ref in section.blocks],
                    "attributes": section.attributes.to_python(),
                }
                for section in self.sections
            ],
            "blocks": [
                {
                    "kind": block.kind.label,
                    "name": block.name,
                    "section": block.section,
                    "attributes": block.attributes.to_python(),
                }
                for block in self.blocks
            ],
            "enforcement": {
                level.value: [str(ref) for ref in refs]
                for level, refs in self.enforcement_levels().items()
            },
        }


def _enforcement(block: Block) -> Enforcement:
    """Read manifest.enforcement of a validated block."""
    manifest = block.manifest
    value = manifest.get("enforcement") if manifest is not None else None
    if not isinstance(value, Scalar) or not isinstance(value.value, str):
        raise ValueError(f"{block.ref} has no {MANIFEST_KEY}.enforcement; document was not validated")
    try:
        return Enforcement(value.value)
    except ValueError:
        allowed = ", ".join(sorted(Enforcement.values()))
        raise ValueError(f"{block.ref} enforcement {value.value!r} is not one of: {allowed}") from None
