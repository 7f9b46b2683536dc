"""Serializer service: document → canonical DSL text or JSON.

dump_document() output re-parses to an equal document:
    parse_text(dump_document(doc)) == doc
"""

from __future__ import annotations

import json
import math
import re
from typing import TYPE_CHECKING

from policyspec.domain.model.block import MANIFEST_KEY
from policyspec.domain.model.enums import ScalarKind
from policyspec.domain.model.values import ListValue, MapValue, Scalar

if TYPE_CHECKING:
    from policyspec.domain.model.block import ParsedDocument
    from policyspec.domain.model.document import PolicyDocument
    from policyspec.domain.model.values import Value

INDENT = "    "

_BARE_KEY_RE = re.compile(r"[A-Za-z_][\w-]*")
_BARE_NAME_RE = re.compile(r"[A-Za-z_][\w.-]*")
_RESERVED_WORDS = frozenset({"true", "false"})
_KEYWORD_RE = re.compile(r"DEFINE_[A-Z0-9_]+")

_STRING_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        '"': '\\"',
        "\n": "\\n",
        "\t": "\\t",
        "\r": "\\r",
    },
)


def dump_document(document: PolicyDocument | ParsedDocument) -> str:
    """Write a document back in canonical DSL form.

    Sections in declaration order; within a section, loose attributes
    first, then blocks. The manifest is written as a [manifest] sub-map.

    Raises:
        ValueError: Non-finite float (no DSL spelling exists).
    """
    by_ref = {block.ref: block for block in document.blocks}
    chunks: list[str] = []

    for section in document.sections:
        lines: list[str] = []
        if section.path:
            lines.append(f"[{section.path}]")
        for key, value in section.attributes.items():
            lines.append(f"{_format_key(key)} = {_format_value(value, 0)}")
        for ref in section.blocks:
            block = by_ref[ref]
            lines.append(f"{block.kind.keyword}({_format_name(block.name)}) {_format_map(block.attributes, 0)}")
        chunks.append("\n".join(lines))

    return "\n\n".join(chunks) + "\n"


def document_to_json(document: PolicyDocument, *, indent: int | None = 2) -> str:
    """JSON interchange form for external tooling.

    Args:
        document: Validated document.
        indent: JSON indentation. None for compact output.
    """
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)


def _format_key(key: str) -> str:
    if _BARE_KEY_RE.fullmatch(key) and key not in _RESERVED_WORDS and not _KEYWORD_RE.fullmatch(key):
        return key
    return _quote(key)


def _format_name(name: str) -> str:
    if _BARE_NAME_RE.fullmatch(name) and name not in _RESERVED_WORDS and not _KEYWORD_RE.fullmatch(name):
        return name
    return _quote(name)


def _quote(text: str) -> str:
    return '"' + text.translate(_STRING_ESCAPES) + '"'


def _format_scalar(scalar: Scalar) -> str:
    match scalar.kind:
        case ScalarKind.STRING:
            return _quote(str(scalar.value))
        case ScalarKind.BOOLEAN:
            return "true" if scalar.value else "false"
        case ScalarKind.INTEGER:
            return str(scalar.value)
        case ScalarKind.FLOAT | ScalarKind.PERCENT:
            number = float(scalar.value)
            if not math.isfinite(number):
                raise ValueError(f"cannot write non-finite number {number!r}")
            suffix = "%" if scalar.kind is ScalarKind.PERCENT else ""
            return f"{number!r}{suffix}"
    raise ValueError(f"unsupported scalar kind {scalar.kind}")


def _format_value(value: Value, depth: int) -> str:
    match value:
        case Scalar():
            return _format_scalar(value)
        case ListValue():
            return "[" + ", ".join(_format_value(item, depth) for item in value) + "]"
        case MapValue():
            return _format_map(value, depth)
    raise TypeError(f"not a policy value: {type(value).__name__}")


def _format_map(mapping: MapValue, depth: int) -> str:
    if not mapping:
        return "{}"
    inner = INDENT * (depth + 1)
    lines = ["{"]
    for key, value in mapping.items():
        if key == MANIFEST_KEY and isinstance(value, MapValue):
            lines.append(f"{inner}[{MANIFEST_KEY}] {_format_map(value, depth + 1)}")
        else:
            lines.append(f"{inner}{_format_key(key)} = {_format_value(value, depth + 1)}")
    lines.append(INDENT * depth + "}")
    return "\n".join(lines)
