"""Tests for validators/_registry.py."""

from __future__ import annotations

from typing import TYPE_CHECKING

from policyspec.application.services import parse_text
from policyspec.application.validators import (
    AttributeValidator,
    BaseValidator,
    ManifestValidator,
    ThresholdValidator,
    default_validators,
    validate_document,
    validators_from_config,
)
from policyspec.domain.exceptions import ValidationError
from policyspec.domain.model.configuration import PolicySpecConfig
from policyspec.domain.model.enums import BlockKind, ValueKind
from policyspec.domain.model.schema import AttributeSpec, BlockSchema, SchemaTable
from tests.factories import SAMPLE_DOCUMENT, SCENARIO_PRACTICE

if TYPE_CHECKING:
    from policyspec.domain.model.block import ParsedDocument

UNORDERED = """\
DEFINE_STAGE(a) {
    [manifest] { scope = "repo", enforcement = "mandatory" }
    order = -1
}
DEFINE_PRACTICE(b) {
    [manifest] { scope = "repo", enforcement = "urgent" }
}
"""


class NamesValidator(BaseValidator):
    """Reports every block, to observe what the registry passes in."""

    def validate(self, document: ParsedDocument, schema: SchemaTable) -> tuple[ValidationError, ...]:
        return tuple(
            ValidationError(location=block.location, code="seen", subject=str(block.ref), message="seen")
            for block in document.blocks
            if block.location is not None
        )


class TestRegistry:
    """Tests for validator factories."""

    def test_default_validators_in_order(self) -> None:
        types = [type(v) for v in default_validators()]
        assert types == [ManifestValidator, AttributeValidator, ThresholdValidator]

    def test_from_config(self) -> None:
        validators = validators_from_config(PolicySpecConfig(strict_keys=True))
        assert len(validators) == 3


class TestValidateDocument:
    """Tests for validate_document()."""

    def test_valid_document(self) -> None:
        assert validate_document(parse_text(SAMPLE_DOCUMENT)) == ()

    def test_enforcement_urgent_single_error(self) -> None:
        parsed = parse_text(SCENARIO_PRACTICE.replace("mandatory", "urgent"))
        errors = validate_document(parsed)
        assert [e.code for e in errors] == ["invalid-choice"]

    def test_missing_enforcement_single_error(self) -> None:
        parsed = parse_text('DEFINE_PRACTICE(x) { [manifest] { scope = ["function"] } }')
        errors = validate_document(parsed)
        assert len(errors) == 1
        assert errors[0].path == "manifest.enforcement"

    def test_missing_manifest_single_error(self) -> None:
        errors = validate_document(parse_text("DEFINE_METRIC(m) { threshold = 3 }"))
        assert [e.code for e in errors] == ["missing-manifest"]

    def test_errors_sorted_by_location(self) -> None:
        errors = validate_document(parse_text(UNORDERED))
        assert [(e.code, e.location.line) for e in errors] == [("negative-value", 3), ("invalid-choice", 6)]

    def test_exhaustive(self) -> None:
        text = UNORDERED + "DEFINE_METRIC(m) {\n    threshold = -1\n    target = 101%\n}\n"
        errors = validate_document(parse_text(text))
        assert [e.code for e in errors] == [
            "negative-value",
            "invalid-choice",
            "missing-manifest",
            "negative-value",
            "percentage-range",
        ]

    def test_strict_keys_config(self) -> None:
        parsed = parse_text(SCENARIO_PRACTICE.replace("} }", "} colour = 1 }"))
        assert validate_document(parsed) == ()
        errors = validate_document(parsed, config=PolicySpecConfig(strict_keys=True))
        assert [e.code for e in errors] == ["unknown-key"]

    def test_explicit_validators(self) -> None:
        parsed = parse_text(UNORDERED.replace("urgent", "warning"))
        errors = validate_document(parsed, validators=[NamesValidator()])
        assert [e.subject for e in errors] == ["DEFINE_STAGE(a)", "DEFINE_PRACTICE(b)"]

    def test_enforcement_checked_without_validators(self) -> None:
        errors = validate_document(parse_text(UNORDERED), validators=())
        assert [(e.code, e.subject, e.path) for e in errors] == [
            ("invalid-choice", "DEFINE_PRACTICE(b)", "manifest.enforcement"),
        ]

    def test_missing_manifest_checked_without_validators(self) -> None:
        errors = validate_document(parse_text("DEFINE_PRACTICE(x) { rule = 1 }"), validators=())
        assert [(e.code, e.message) for e in errors] == [
            ("missing-manifest", "block declares no manifest (requires enforcement)"),
        ]

    def test_enforcement_not_reported_twice(self) -> None:
        errors = validate_document(parse_text(UNORDERED))
        assert [e.code for e in errors].count("invalid-choice") == 1

    def test_schema_cannot_relax_enforcement(self) -> None:
        schema = SchemaTable(manifest={"enforcement": AttributeSpec(kinds=frozenset({ValueKind.ANY}))})
        parsed = parse_text('DEFINE_PRACTICE(x) { [manifest] { enforcement = "urgent" } }')
        errors = validate_document(parsed, config=PolicySpecConfig(schema=schema))
        assert [(e.code, e.path) for e in errors] == [("invalid-choice", "manifest.enforcement")]

    def test_configured_schema(self) -> None:
        schema = SchemaTable(
            manifest={"enforcement": AttributeSpec(kinds=frozenset({ValueKind.STRING}), required=True)},
            blocks={
                BlockKind.PRACTICE: BlockSchema(
                    BlockKind.PRACTICE,
                    {"owner": AttributeSpec(kinds=frozenset({ValueKind.STRING}), required=True)},
                ),
            },
        )
        parsed = parse_text('DEFINE_PRACTICE(x) { [manifest] { enforcement = "warning" } }')
        errors = validate_document(parsed, config=PolicySpecConfig(schema=schema))
        assert [(e.code, e.path) for e in errors] == [("missing-key", "owner")]
