"""Domain enumerations."""

from __future__ import annotations

from enum import Enum, auto

_KEYWORD_PREFIX = "DEFINE_"


class BlockKind(Enum):
    """Typed declaration keyword.

    Value is the DSL keyword. label is the short lowercase form
    used in JSON output and CLI arguments.
    """

    PRINCIPLE = "DEFINE_PRINCIPLE"
    PRACTICE = "DEFINE_PRACTICE"
    STAGE = "DEFINE_STAGE"
    ACTOR = "DEFINE_ACTOR"
    SEVERITY = "DEFINE_SEVERITY"
    EXEMPTION = "DEFINE_EXEMPTION"
    METRIC = "DEFINE_METRIC"
    FEEDBACK_LOOP = "DEFINE_FEEDBACK_LOOP"
    DASHBOARD = "DEFINE_DASHBOARD"
    NOTIFICATION = "DEFINE_NOTIFICATION"
    OVERRIDE_CAPABILITY = "DEFINE_OVERRIDE_CAPABILITY"
    PLUGIN_INTERFACE = "DEFINE_PLUGIN_INTERFACE"
    INTEGRATION = "DEFINE_INTEGRATION"

    @property
    def keyword(self) -> str:
        """DSL keyword, e.g. DEFINE_PRACTICE."""
        return self.value

    @property
    def label(self) -> str:
        """Short form, e.g. practice."""
        return self.name.lower()

    @classmethod
    def parse(cls, text: str) -> BlockKind:
        """Resolve keyword or label to a kind.

        Accepts "DEFINE_PRACTICE", "PRACTICE" and "practice".

        Raises:
            ValueError: Unknown kind.
        """
        normalized = text.strip().upper()
        if normalized.startswith(_KEYWORD_PREFIX):
            normalized = normalized[len(_KEYWORD_PREFIX) :]
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"unknown block kind: {text!r}") from None


class Enforcement(Enum):
    """Enforcement level governing downstream build-gate behavior."""

    MANDATORY = "mandatory"
    RECOMMENDED = "recommended"
    WARNING = "warning"

    @classmethod
    def values(cls) -> frozenset[str]:
        """All allowed DSL spellings."""
        return frozenset(member.value for member in cls)


class ScalarKind(Enum):
    """Kind of a scalar literal."""

    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOLEAN = auto()
    PERCENT = auto()  # 80% -> 80.0


class ValueKind(Enum):
    """Expected value shape in a schema entry."""

    STRING = auto()
    INTEGER = auto()
    NUMBER = auto()  # INTEGER or FLOAT
    BOOLEAN = auto()
    PERCENT = auto()  # 80% literal or "80%" string
    LIST = auto()
    MAP = auto()
    ANY = auto()


class DuplicateSectionPolicy(Enum):
    """What the parser does when a section path is declared twice."""

    REJECT = "reject"  # ParseError
    MERGE = "merge"  # later blocks appended, keys never overwritten
