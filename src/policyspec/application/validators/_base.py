"""Base validator class for schema validators.

Provides default implementation of ValidatorProtocol plus the shared
value checks every concrete validator needs.
Concrete validators inherit from this.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Self

from policyspec.domain.exceptions import ValidationError
from policyspec.domain.model.enums import ScalarKind, ValueKind
from policyspec.domain.model.location import SourceLocation
from policyspec.domain.model.values import ListValue, MapValue, Scalar

if TYPE_CHECKING:
    from collections.abc import Mapping

    from policyspec.domain.model.block import ParsedDocument
    from policyspec.domain.model.configuration import PolicySpecConfig
    from policyspec.domain.model.schema import AttributeSpec, SchemaTable
    from policyspec.domain.model.values import Value

PERCENT_STRING_RE = re.compile(r"\s*([+-]?\d+(?:\.\d+)?)\s*%\s*")

_SCALAR_KINDS: dict[ScalarKind, frozenset[ValueKind]] = {
    ScalarKind.STRING: frozenset({ValueKind.STRING}),
    ScalarKind.INTEGER: frozenset({ValueKind.INTEGER, ValueKind.NUMBER}),
    ScalarKind.FLOAT: frozenset({ValueKind.NUMBER}),
    ScalarKind.BOOLEAN: frozenset({ValueKind.BOOLEAN}),
    ScalarKind.PERCENT: frozenset({ValueKind.PERCENT}),
}


class BaseValidator(ABC):
    """Base class for validators implementing ValidatorProtocol.

    Concrete validators must:
    1. Implement `validate()` method
    2. Optionally override `from_config()` for conditional activation
    """

    @abstractmethod
    def validate(
        self,
        document: ParsedDocument,
        schema: SchemaTable,
    ) -> tuple[ValidationError, ...]:
        """Validate all blocks and return violations.

        Args:
            document: Parsed block forest
            schema: Schema table to check against

        Returns:
            Tuple of violations found (empty if valid)
        """

    @classmethod
    def from_config(cls, config: PolicySpecConfig) -> Self | None:
        """Create validator from config.

        Default: always enabled (returns new instance).
        Override in subclass for conditional activation.
        """
        return cls()


def value_kinds(value: Value) -> frozenset[ValueKind]:
    """ValueKinds a value satisfies (ANY excluded)."""
    match value:
        case Scalar():
            return _SCALAR_KINDS[value.kind]
        case ListValue():
            return frozenset({ValueKind.LIST})
        case MapValue():
            return frozenset({ValueKind.MAP})
    raise TypeError(f"not a policy value: {type(value).__name__}")


def describe_kind(value: Value) -> str:
    """Short kind name for messages: string, integer, list, ..."""
    match value:
        case Scalar():
            return value.kind.name.lower()
        case ListValue():
            return "list"
        case _:
            return "map"


def locate(value: Value | None, fallback: SourceLocation | None, source: str | None) -> SourceLocation:
    """Best location for an error: the value, its block, or the document start."""
    if value is not None and value.location is not None:
        return value.location
    if fallback is not None:
        return fallback
    return SourceLocation(1, 1, source)


class ValueChecker:
    """Checks one value tree against an AttributeSpec.

    Collects errors instead of raising, so a single pass reports every
    problem in the block.
    """

    def __init__(self, *, subject: str, fallback: SourceLocation | None, source: str | None) -> None:
        self._subject = subject
        self._fallback = fallback
        self._source = source
        self.errors: list[ValidationError] = []

    def error(self, value: Value | None, code: str, path: str, message: str) -> None:
        self.errors.append(
            ValidationError(
                location=locate(value, self._fallback, self._source),
                code=code,
                subject=self._subject,
                path=path,
                message=message,
            ),
        )

    def check_map(
        self,
        container: MapValue,
        specs: Mapping[str, AttributeSpec],
        *,
        prefix: str,
        report_unknown: bool,
        skip: frozenset[str] = frozenset(),
    ) -> None:
        """Check required/known keys of a map and every present value."""
        for key, spec in specs.items():
            path = f"{prefix}{key}"
            value = container.get(key)
            if value is None:
                if spec.required:
                    self.error(container, "missing-key", path, f"required key '{key}' is missing")
                continue
            self.check_value(value, spec, path)

        if report_unknown:
            for key, value in container.items():
                if key not in specs and key not in skip:
                    self.error(value, "unknown-key", f"{prefix}{key}", f"unknown key '{key}'")

    def check_value(self, value: Value, spec: AttributeSpec, path: str) -> None:
        """Check kind, choices, sign, list items and nested fields."""
        if not self._check_kind(value, spec.kinds, path):
            return

        if spec.choices is not None and isinstance(value, Scalar) and isinstance(value.value, str):
            if value.value not in spec.choices:
                allowed = ", ".join(sorted(spec.choices))
                self.error(value, "invalid-choice", path, f"{value.value!r} is not one of: {allowed}")

        if spec.non_negative:
            self._check_non_negative(value, path)

        if spec.item_kinds is not None and isinstance(value, ListValue):
            for index, item in enumerate(value):
                self._check_kind(item, spec.item_kinds, f"{path}[{index}]")

        if spec.fields is not None and isinstance(value, MapValue):
            self.check_map(value, spec.fields, prefix=f"{path}.", report_unknown=False)

    def _check_kind(self, value: Value, kinds: frozenset[ValueKind], path: str) -> bool:
        if ValueKind.ANY in kinds or value_kinds(value) & kinds:
            return True

        is_string = isinstance(value, Scalar) and value.kind is ScalarKind.STRING
        if is_string and ValueKind.PERCENT in kinds:
            return self._check_percent_string(value, path)  # type: ignore[arg-type]

        expected = " or ".join(sorted(kind.name.lower() for kind in kinds))
        self.error(value, "wrong-kind", path, f"expected {expected}, got {describe_kind(value)}")
        return False

    def _check_percent_string(self, value: Scalar, path: str) -> bool:
        match = PERCENT_STRING_RE.fullmatch(str(value.value))
        if match is None:
            self.error(value, "malformed-percentage", path, f"malformed percentage {value.value!r}, expected e.g. 80%")
            return False
        number = float(match.group(1))
        if not 0.0 <= number <= 100.0:
            self.error(value, "percentage-range", path, f"percentage must be between 0% and 100%, got {value.value}")
            return False
        return True

    def _check_non_negative(self, value: Value, path: str) -> None:
        if isinstance(value, Scalar) and value.is_number and value.value < 0:  # type: ignore[operator]
            self.error(value, "negative-value", path, f"must be non-negative, got {value.value}")
        elif isinstance(value, ListValue):
            for index, item in enumerate(value):
                self._check_non_negative(item, f"{path}[{index}]")
