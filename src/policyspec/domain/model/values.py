"""Attribute values: tagged variant Scalar | ListValue | MapValue.

Python 3.12+ PEP 695 type alias syntax.
Locations are carried for error reporting but never compared:
a document re-parsed from its own dump equals the original.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from policyspec.domain.model.enums import ScalarKind
from policyspec.domain.model.location import SourceLocation

Value: TypeAlias = "Scalar | ListValue | MapValue"
PlainValue: TypeAlias = "str | int | float | bool | list[PlainValue] | dict[str, PlainValue]"

_PY_TYPES: Mapping[ScalarKind, tuple[type, ...]] = MappingProxyType(
    {
        ScalarKind.STRING: (str,),
        ScalarKind.INTEGER: (int,),
        ScalarKind.FLOAT: (float,),
        ScalarKind.BOOLEAN: (bool,),
        ScalarKind.PERCENT: (int, float),
    },
)


@dataclass(frozen=True, slots=True)
class Scalar:
    """Single literal value.

    Examples:
        "text"  → Scalar("text", STRING)
        42      → Scalar(42, INTEGER)
        0.5     → Scalar(0.5, FLOAT)
        true    → Scalar(True, BOOLEAN)
        80%     → Scalar(80.0, PERCENT)

    Invariants (FAIL-FIRST):
        - Python type of value matches kind
        - bool is only accepted for BOOLEAN
    """

    value: str | int | float | bool
    kind: ScalarKind
    location: SourceLocation | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        expected = _PY_TYPES[self.kind]
        is_bool = isinstance(self.value, bool)
        if is_bool != (self.kind is ScalarKind.BOOLEAN) or not isinstance(self.value, expected):
            raise TypeError(
                f"{self.kind.name} scalar requires {'/'.join(t.__name__ for t in expected)}, "
                f"got {type(self.value).__name__}",
            )

    @property
    def is_number(self) -> bool:
        """INTEGER or FLOAT."""
        return self.kind in (ScalarKind.INTEGER, ScalarKind.FLOAT)

    def to_python(self) -> PlainValue:
        """Plain Python value. Percentages become "80%" strings."""
        if self.kind is ScalarKind.PERCENT:
            return f"{self.value:g}%"
        return self.value


@dataclass(frozen=True, slots=True)
class ListValue:
    """Ordered list of values (any nesting)."""

    items: tuple[Value, ...] = ()
    location: SourceLocation | None = field(default=None, compare=False)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def to_python(self) -> list[PlainValue]:
        """Plain Python list."""
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True, eq=False)
class MapValue(Mapping[str, Value]):
    """Insertion-ordered, read-only attribute map.

    Keys are unique; the parser rejects duplicates before a MapValue
    is ever built. Equality is order-insensitive (plain mapping equality).
    """

    entries: Mapping[str, Value] = field(default_factory=dict)
    location: SourceLocation | None = None

    def __post_init__(self) -> None:
        """Freeze entries."""
        for key in self.entries:
            if not isinstance(key, str) or not key:
                raise ValueError(f"map keys must be non-empty strings, got {key!r}")
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __getitem__(self, key: str) -> Value:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapValue):
            return NotImplemented
        return dict(self.entries) == dict(other.entries)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MapValue({dict(self.entries)!r})"

    def get_path(self, dotted: str) -> Value | None:
        """Resolve "a.b.c" through nested maps. None if any step is missing."""
        current: Value = self
        for part in dotted.split("."):
            if not isinstance(current, MapValue) or part not in current.entries:
                return None
            current = current.entries[part]
        return current

    def to_python(self) -> dict[str, PlainValue]:
        """Plain Python dict."""
        return {key: value.to_python() for key, value in self.entries.items()}


def from_python(obj: object, location: SourceLocation | None = None) -> Value:
    """Build a Value tree from plain Python data.

    str/int/float/bool become scalars, list/tuple become ListValue,
    Mapping becomes MapValue. Strings such as "80%" stay strings.

    Raises:
        TypeError: Unsupported type (None, sets, arbitrary objects).
    """
    match obj:
        case bool():
            return Scalar(obj, ScalarKind.BOOLEAN, location)
        case int():
            return Scalar(obj, ScalarKind.INTEGER, location)
        case float():
            return Scalar(obj, ScalarKind.FLOAT, location)
        case str():
            return Scalar(obj, ScalarKind.STRING, location)
        case list() | tuple():
            return ListValue(tuple(from_python(item, location) for item in obj), location)
        case Mapping():
            return MapValue({str(k): from_python(v, location) for k, v in obj.items()}, location)
        case _:
            raise TypeError(f"cannot convert {type(obj).__name__} to a policy value")
