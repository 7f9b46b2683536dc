"""Tests for validators/threshold_validator.py."""

from policyspec.application.schema import DEFAULT_SCHEMA
from policyspec.application.services import parse_text
from policyspec.application.validators import ThresholdValidator
from policyspec.domain.exceptions import ValidationError
from policyspec.domain.model.block import Block
from policyspec.domain.model.enums import BlockKind
from policyspec.domain.model.location import SourceLocation
from tests.factories import make_block, make_parsed


def _validate(*blocks: Block) -> tuple[ValidationError, ...]:
    return ThresholdValidator().validate(make_parsed(*blocks), DEFAULT_SCHEMA)


class TestNegativeMetricValues:
    """Tests for non-negative metric numbers."""

    def test_non_negative_metric_passes(self) -> None:
        block = make_block(BlockKind.METRIC, "complexity", threshold=10, warning_threshold=7.5)
        assert _validate(block) == ()

    def test_negative_threshold(self) -> None:
        errors = _validate(make_block(BlockKind.METRIC, "complexity", threshold=-5))
        assert len(errors) == 1
        assert errors[0].code == "negative-value"
        assert errors[0].path == "threshold"
        assert errors[0].message == "metric threshold must be non-negative, got -5"

    def test_nested_negative(self) -> None:
        block = make_block(BlockKind.METRIC, "complexity", thresholds={"rust": 12, "python": -1.5})
        errors = _validate(block)
        assert [(e.code, e.path) for e in errors] == [("negative-value", "thresholds.python")]

    def test_negative_in_list(self) -> None:
        errors = _validate(make_block(BlockKind.METRIC, "complexity", buckets=[1, -2]))
        assert [e.path for e in errors] == ["buckets[1]"]

    def test_other_kinds_may_be_negative(self) -> None:
        assert _validate(make_block(BlockKind.PRACTICE, "x", offset=-3)) == ()

    def test_metric_manifest_ignored(self) -> None:
        block = make_block(BlockKind.METRIC, "complexity", scope={"depth": -1})
        assert _validate(block) == ()


class TestPercentRange:
    """Tests for percentage literals in [0%, 100%]."""

    def test_in_range(self) -> None:
        parsed = parse_text("DEFINE_METRIC(cov) { target = 0%, warning_threshold = 100% }")
        assert ThresholdValidator().validate(parsed, DEFAULT_SCHEMA) == ()

    def test_out_of_range_any_kind(self) -> None:
        parsed = parse_text("DEFINE_PRACTICE(x) {\n    limits { upper = 120% }\n}")
        errors = ThresholdValidator().validate(parsed, DEFAULT_SCHEMA)
        assert len(errors) == 1
        assert errors[0].code == "percentage-range"
        assert errors[0].path == "limits.upper"
        assert errors[0].message == "percentage must be between 0% and 100%, got 120%"
        assert errors[0].location == SourceLocation(2, 22)

    def test_negative_percent_is_range_error(self) -> None:
        parsed = parse_text("DEFINE_METRIC(cov) { target = -5% }")
        errors = ThresholdValidator().validate(parsed, DEFAULT_SCHEMA)
        assert [e.code for e in errors] == ["percentage-range"]
