"""Tests for domain/model/schema.py."""

import pytest

from policyspec.domain.model.enums import BlockKind, ValueKind
from policyspec.domain.model.schema import AttributeSpec, BlockSchema, SchemaTable


class TestAttributeSpec:
    """Tests for AttributeSpec FAIL-FIRST validation."""

    def test_defaults(self) -> None:
        spec = AttributeSpec(kinds=frozenset({ValueKind.STRING}))
        assert not spec.required
        assert spec.choices is None
        assert spec.fields is None

    def test_empty_kinds_raises(self) -> None:
        with pytest.raises(ValueError, match="kinds must not be empty"):
            AttributeSpec(kinds=frozenset())

    def test_empty_choices_raises(self) -> None:
        with pytest.raises(ValueError, match="choices must not be empty"):
            AttributeSpec(kinds=frozenset({ValueKind.STRING}), choices=frozenset())

    def test_fields_require_map(self) -> None:
        nested = {"a": AttributeSpec(kinds=frozenset({ValueKind.STRING}))}
        with pytest.raises(ValueError, match="fields requires MAP"):
            AttributeSpec(kinds=frozenset({ValueKind.LIST}), fields=nested)

    def test_fields_frozen(self) -> None:
        nested = {"a": AttributeSpec(kinds=frozenset({ValueKind.STRING}))}
        spec = AttributeSpec(kinds=frozenset({ValueKind.MAP}), fields=nested)
        nested["b"] = nested["a"]
        assert spec.fields is not None
        assert "b" not in spec.fields


class TestBlockSchema:
    """Tests for BlockSchema."""

    def test_required_keys_in_order(self) -> None:
        schema = BlockSchema(
            BlockKind.INTEGRATION,
            {
                "tool": AttributeSpec(kinds=frozenset({ValueKind.STRING}), required=True),
                "stage": AttributeSpec(kinds=frozenset({ValueKind.STRING})),
                "command": AttributeSpec(kinds=frozenset({ValueKind.STRING}), required=True),
            },
        )
        assert schema.required_keys == ("tool", "command")

    def test_allows_unknown_by_default(self) -> None:
        assert BlockSchema(BlockKind.ACTOR).allow_unknown


class TestSchemaTable:
    """Tests for SchemaTable."""

    def test_for_kind(self) -> None:
        stage = BlockSchema(BlockKind.STAGE)
        table = SchemaTable(manifest={}, blocks={BlockKind.STAGE: stage})
        assert table.for_kind(BlockKind.STAGE) is stage
        assert table.for_kind(BlockKind.METRIC) is None

    def test_mismatched_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="declares kind DEFINE_METRIC"):
            SchemaTable(manifest={}, blocks={BlockKind.STAGE: BlockSchema(BlockKind.METRIC)})
