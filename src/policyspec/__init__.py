"""policyspec - loader and schema validator for coding-standards policy documents."""

__version__ = "0.1.0"

from policyspec.application.services import (
    check_path,
    check_text,
    document_to_json,
    dump_document,
    load_path,
    load_text,
    parse_text,
)
from policyspec.domain.exceptions import (
    DocumentValidationError,
    LexError,
    NotFoundError,
    ParseError,
    PolicySpecError,
    ValidationError,
)
from policyspec.domain.model import BlockKind, Enforcement, PolicyDocument, PolicySpecConfig

__all__ = [
    "__version__",
    # Loading
    "load_text",
    "load_path",
    "check_text",
    "check_path",
    "parse_text",
    "dump_document",
    "document_to_json",
    # Model
    "PolicyDocument",
    "PolicySpecConfig",
    "BlockKind",
    "Enforcement",
    # Errors
    "PolicySpecError",
    "LexError",
    "ParseError",
    "ValidationError",
    "DocumentValidationError",
    "NotFoundError",
]
