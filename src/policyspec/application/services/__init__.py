"""Application services: parse, validate, load, serialize."""

from policyspec.application.services.loader import check_path, check_text, load_path, load_text
from policyspec.application.services.parser import parse_text, parse_tokens
from policyspec.application.services.serializer import document_to_json, dump_document

__all__ = [
    "parse_text",
    "parse_tokens",
    "check_text",
    "check_path",
    "load_text",
    "load_path",
    "dump_document",
    "document_to_json",
]
