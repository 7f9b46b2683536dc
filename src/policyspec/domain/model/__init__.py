"""Domain model: values, blocks, schema types, document."""

from policyspec.domain.model.block import (
    MANIFEST_KEY,
    ROOT_SECTION,
    Block,
    BlockRef,
    ParsedDocument,
    Section,
)
from policyspec.domain.model.configuration import PolicySpecConfig
from policyspec.domain.model.document import PolicyDocument
from policyspec.domain.model.enums import (
    BlockKind,
    DuplicateSectionPolicy,
    Enforcement,
    ScalarKind,
    ValueKind,
)
from policyspec.domain.model.location import SourceLocation
from policyspec.domain.model.report import ValidationReport
from policyspec.domain.model.schema import AttributeSpec, BlockSchema, SchemaTable
from policyspec.domain.model.tokens import Token, TokenKind
from policyspec.domain.model.values import ListValue, MapValue, Scalar, Value, from_python

__all__ = [
    # Enums
    "BlockKind",
    "DuplicateSectionPolicy",
    "Enforcement",
    "ScalarKind",
    "ValueKind",
    # Value objects
    "SourceLocation",
    "Token",
    "TokenKind",
    "Scalar",
    "ListValue",
    "MapValue",
    "Value",
    "from_python",
    # Entities
    "MANIFEST_KEY",
    "ROOT_SECTION",
    "Block",
    "BlockRef",
    "Section",
    "ParsedDocument",
    "PolicyDocument",
    "ValidationReport",
    # Schema and configuration
    "AttributeSpec",
    "BlockSchema",
    "SchemaTable",
    "PolicySpecConfig",
]
