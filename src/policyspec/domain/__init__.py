"""policyspec domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, enum, types, collections, re.
"""

from policyspec.domain.exceptions import (
    ConfigError,
    DocumentValidationError,
    LexError,
    NotFoundError,
    ParseError,
    PolicySpecError,
    ValidationError,
)
from policyspec.domain.model import (
    Block,
    BlockKind,
    BlockRef,
    Enforcement,
    MapValue,
    ParsedDocument,
    PolicyDocument,
    PolicySpecConfig,
    Section,
    SourceLocation,
    ValidationReport,
)
from policyspec.domain.ports import ReporterProtocol, ValidatorProtocol

__all__ = [
    # Exceptions
    "PolicySpecError",
    "LexError",
    "ParseError",
    "ValidationError",
    "DocumentValidationError",
    "NotFoundError",
    "ConfigError",
    # Model
    "SourceLocation",
    "BlockKind",
    "Enforcement",
    "MapValue",
    "Block",
    "BlockRef",
    "Section",
    "ParsedDocument",
    "PolicyDocument",
    "PolicySpecConfig",
    "ValidationReport",
    # Ports
    "ValidatorProtocol",
    "ReporterProtocol",
]
