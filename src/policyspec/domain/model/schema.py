"""Declarative schema table types.

One BlockSchema per block kind. The validators walk Value trees against
these entries; no reflection on the values is needed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from policyspec.domain.model.enums import BlockKind, ValueKind


@dataclass(frozen=True, slots=True)
class AttributeSpec:
    """Expected shape of one attribute.

    Attributes:
        kinds: Accepted value kinds (any of)
        required: Key must be present
        choices: Allowed string values, None = unrestricted
        non_negative: Numbers (or list items) must be >= 0
        item_kinds: Accepted kinds of list items, None = unrestricted
        fields: Nested schema for MAP values, None = opaque map
        description: Human-readable purpose, shown in messages
    """

    kinds: frozenset[ValueKind]
    required: bool = False
    choices: frozenset[str] | None = None
    non_negative: bool = False
    item_kinds: frozenset[ValueKind] | None = None
    fields: Mapping[str, AttributeSpec] | None = None
    description: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.kinds:
            raise ValueError("kinds must not be empty")
        if self.choices is not None and not self.choices:
            raise ValueError("choices must not be empty when set")
        if self.fields is not None:
            if ValueKind.MAP not in self.kinds:
                raise ValueError("fields requires MAP in kinds")
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))


@dataclass(frozen=True, slots=True)
class BlockSchema:
    """Attribute shape of one block kind.

    Attributes:
        kind: Block kind this schema applies to
        attributes: Key → spec, excluding the shared manifest
        allow_unknown: Keys not named in attributes are accepted
    """

    kind: BlockKind
    attributes: Mapping[str, AttributeSpec] = field(default_factory=dict)
    allow_unknown: bool = True

    def __post_init__(self) -> None:
        """Freeze attributes."""
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def required_keys(self) -> tuple[str, ...]:
        """Keys that must be present, in schema order."""
        return tuple(key for key, spec in self.attributes.items() if spec.required)


@dataclass(frozen=True, slots=True)
class SchemaTable:
    """Schema for a whole document.

    Attributes:
        manifest: Shape of the reserved manifest sub-map (shared by all kinds)
        blocks: Kind → BlockSchema. Kinds without an entry only get
            manifest validation.
    """

    manifest: Mapping[str, AttributeSpec]
    blocks: Mapping[BlockKind, BlockSchema] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for kind, schema in self.blocks.items():
            if schema.kind is not kind:
                raise ValueError(f"schema for {kind.keyword} declares kind {schema.kind.keyword}")
        object.__setattr__(self, "manifest", MappingProxyType(dict(self.manifest)))
        object.__setattr__(self, "blocks", MappingProxyType(dict(self.blocks)))

    def for_kind(self, kind: BlockKind) -> BlockSchema | None:
        """Schema for kind, None if the table has no entry."""
        return self.blocks.get(kind)
