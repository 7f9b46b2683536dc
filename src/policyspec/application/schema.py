"""Built-in schema table for coding-standards policy documents.

Every block shares the manifest shape. Per-kind entries name the
attributes the policy format uses; keys not listed are accepted as
opaque data unless strict_keys is configured. Vocabulary lists
(violation_patterns, best_practices) are plain string lists: their
content is never interpreted.
"""

from __future__ import annotations

from policyspec.domain.model.enums import BlockKind, Enforcement, ValueKind
from policyspec.domain.model.schema import AttributeSpec, BlockSchema, SchemaTable

_STRING = frozenset({ValueKind.STRING})
_STRINGS = frozenset({ValueKind.LIST})
_STRING_OR_LIST = frozenset({ValueKind.STRING, ValueKind.LIST})
_NUMBER = frozenset({ValueKind.NUMBER})
_INTEGER = frozenset({ValueKind.INTEGER})
_BOOLEAN = frozenset({ValueKind.BOOLEAN})
_MAP = frozenset({ValueKind.MAP})
_THRESHOLD = frozenset({ValueKind.NUMBER, ValueKind.PERCENT})
_STRING_ITEMS = frozenset({ValueKind.STRING})


def _text(description: str = "", *, required: bool = False) -> AttributeSpec:
    return AttributeSpec(kinds=_STRING, required=required, description=description)


def _string_list(description: str = "") -> AttributeSpec:
    return AttributeSpec(kinds=_STRINGS, item_kinds=_STRING_ITEMS, description=description)


def _flag(description: str = "") -> AttributeSpec:
    return AttributeSpec(kinds=_BOOLEAN, description=description)


MANIFEST_SCHEMA: dict[str, AttributeSpec] = {
    "scope": AttributeSpec(
        kinds=_STRING_OR_LIST,
        required=True,
        item_kinds=_STRING_ITEMS,
        description="code units the block applies to",
    ),
    "enforcement": AttributeSpec(
        kinds=_STRING,
        required=True,
        choices=Enforcement.values(),
        description="build-gate behavior",
    ),
    "validation_strategy": AttributeSpec(kinds=frozenset({ValueKind.STRING, ValueKind.MAP})),
    "applies_to": _string_list("languages or file patterns"),
    "version": AttributeSpec(kinds=frozenset({ValueKind.STRING, ValueKind.NUMBER})),
    "severity": _text("severity label"),
}

# Shared by principles and practices
_GUIDANCE: dict[str, AttributeSpec] = {
    "description": _text(),
    "rule": _text("one-line statement of the rule"),
    "rationale": _text(),
    "violation_patterns": _string_list("opaque vocabulary"),
    "best_practices": _string_list("opaque vocabulary"),
    "language_specifics": AttributeSpec(kinds=_MAP, description="per-language overrides"),
    "examples": AttributeSpec(kinds=frozenset({ValueKind.LIST, ValueKind.MAP})),
}

_BLOCK_SCHEMAS: tuple[BlockSchema, ...] = (
    BlockSchema(BlockKind.PRINCIPLE, _GUIDANCE),
    BlockSchema(
        BlockKind.PRACTICE,
        {
            **_GUIDANCE,
            "pattern": _text("naming or structure pattern"),
            "auto_fix": AttributeSpec(kinds=frozenset({ValueKind.BOOLEAN, ValueKind.MAP})),
        },
    ),
    BlockSchema(
        BlockKind.STAGE,
        {
            "description": _text(),
            "order": AttributeSpec(kinds=_INTEGER, non_negative=True),
            "blocking": _flag("failure stops the pipeline"),
            "tools": _string_list("tool labels, never executed"),
            "timeout": AttributeSpec(kinds=_NUMBER, non_negative=True),
            "runs_on": AttributeSpec(kinds=_STRING_OR_LIST, item_kinds=_STRING_ITEMS),
        },
    ),
    BlockSchema(
        BlockKind.ACTOR,
        {
            "description": _text(),
            "role": _text(),
            "permissions": _string_list(),
            "responsibilities": _string_list(),
        },
    ),
    BlockSchema(
        BlockKind.SEVERITY,
        {
            "description": _text(),
            "level": AttributeSpec(kinds=_INTEGER, non_negative=True),
            "blocks_build": _flag(),
            "color": _text(),
            "action": _text(),
        },
    ),
    BlockSchema(
        BlockKind.EXEMPTION,
        {
            "reason": _text(),
            "patterns": _string_list("paths or symbols exempted"),
            "expires": _text("expiry date"),
            "approvers": _string_list(),
            "requires_justification": _flag(),
        },
    ),
    BlockSchema(
        BlockKind.METRIC,
        {
            "description": _text(),
            "formula": _text("label only, never evaluated"),
            "unit": _text(),
            "threshold": AttributeSpec(kinds=frozenset({ValueKind.NUMBER, ValueKind.PERCENT, ValueKind.MAP})),
            "warning_threshold": AttributeSpec(kinds=_THRESHOLD),
            "critical_threshold": AttributeSpec(kinds=_THRESHOLD),
            "target": AttributeSpec(kinds=_THRESHOLD),
            "thresholds": AttributeSpec(kinds=_MAP),
            "aggregation": AttributeSpec(
                kinds=_STRING,
                choices=frozenset({"max", "min", "mean", "median", "sum"}),
            ),
        },
    ),
    BlockSchema(
        BlockKind.FEEDBACK_LOOP,
        {
            "description": _text(),
            "trigger": _text(),
            "frequency": _text(),
            "channels": _string_list(),
            "actions": _string_list(),
        },
    ),
    BlockSchema(
        BlockKind.DASHBOARD,
        {
            "description": _text(),
            "widgets": AttributeSpec(kinds=_STRINGS),
            "metrics": _string_list("metric block names"),
            "refresh_interval": AttributeSpec(kinds=_NUMBER, non_negative=True),
            "audience": AttributeSpec(kinds=_STRING_OR_LIST, item_kinds=_STRING_ITEMS),
        },
    ),
    BlockSchema(
        BlockKind.NOTIFICATION,
        {
            "description": _text(),
            "channels": _string_list(),
            "events": _string_list(),
            "template": _text(),
            "recipients": AttributeSpec(kinds=_STRING_OR_LIST, item_kinds=_STRING_ITEMS),
            "throttle": AttributeSpec(kinds=_NUMBER, non_negative=True),
        },
    ),
    BlockSchema(
        BlockKind.OVERRIDE_CAPABILITY,
        {
            "description": _text(),
            "requires_approval": _flag(),
            "approvers": _string_list(),
            "max_duration": AttributeSpec(kinds=frozenset({ValueKind.STRING, ValueKind.NUMBER})),
            "audit": _flag(),
            "justification_required": _flag(),
        },
    ),
    BlockSchema(
        BlockKind.PLUGIN_INTERFACE,
        {
            "description": _text(),
            "methods": _string_list(),
            "hooks": _string_list(),
            "version": AttributeSpec(kinds=frozenset({ValueKind.STRING, ValueKind.NUMBER})),
            "language": _text(),
        },
    ),
    BlockSchema(
        BlockKind.INTEGRATION,
        {
            "description": _text(),
            "tool": _text("tool label, never executed", required=True),
            "stage": _text("DEFINE_STAGE name"),
            "command": _text(),
            "config": AttributeSpec(kinds=_MAP),
            "fail_on": AttributeSpec(kinds=_STRING_OR_LIST, item_kinds=_STRING_ITEMS),
        },
    ),
)

DEFAULT_SCHEMA = SchemaTable(
    manifest=MANIFEST_SCHEMA,
    blocks={schema.kind: schema for schema in _BLOCK_SCHEMAS},
)


def resolve_schema(schema: SchemaTable | None) -> SchemaTable:
    """Configured schema, or the built-in one."""
    return schema if schema is not None else DEFAULT_SCHEMA
