"""Threshold validator: metric numbers and percentages anywhere in a block."""

from __future__ import annotations

from typing import TYPE_CHECKING

from policyspec.application.validators._base import BaseValidator, ValueChecker
from policyspec.domain.model.block import MANIFEST_KEY
from policyspec.domain.model.enums import BlockKind, ScalarKind
from policyspec.domain.model.values import ListValue, MapValue, Scalar

if TYPE_CHECKING:
    from collections.abc import Iterator

    from policyspec.domain.exceptions import ValidationError
    from policyspec.domain.model.block import ParsedDocument
    from policyspec.domain.model.schema import SchemaTable
    from policyspec.domain.model.values import Value


def _walk(value: Value, path: str) -> Iterator[tuple[str, Scalar]]:
    """Yield (path, scalar) for every scalar in a value tree."""
    match value:
        case Scalar():
            yield path, value
        case ListValue():
            for index, item in enumerate(value):
                yield from _walk(item, f"{path}[{index}]")
        case MapValue():
            for key, item in value.items():
                yield from _walk(item, f"{path}.{key}" if path else key)


class ThresholdValidator(BaseValidator):
    """Numeric sanity independent of the schema table.

    - Every number inside a DEFINE_METRIC block (outside its manifest)
      must be non-negative, however deeply nested.
    - Every percentage literal in any block must lie in [0%, 100%].
    """

    def validate(
        self,
        document: ParsedDocument,
        schema: SchemaTable,
    ) -> tuple[ValidationError, ...]:
        errors: list[ValidationError] = []

        for block in document.blocks:
            checker = ValueChecker(subject=str(block.ref), fallback=block.location, source=document.source)
            is_metric = block.kind is BlockKind.METRIC

            for path, scalar in _walk(block.attributes, ""):
                if scalar.kind is ScalarKind.PERCENT:
                    if not 0.0 <= scalar.value <= 100.0:  # type: ignore[operator]
                        checker.error(
                            scalar,
                            "percentage-range",
                            path,
                            f"percentage must be between 0% and 100%, got {scalar.value:g}%",
                        )
                elif is_metric and scalar.is_number and scalar.value < 0:  # type: ignore[operator]
                    if not path.startswith(f"{MANIFEST_KEY}."):
                        checker.error(
                            scalar,
                            "negative-value",
                            path,
                            f"metric threshold must be non-negative, got {scalar.value}",
                        )

            errors.extend(checker.errors)

        return tuple(errors)
