"""Lexical tokens of the policy DSL."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from policyspec.domain.model.location import SourceLocation


class TokenKind(Enum):
    """Structural token kind. Value is the display name used in messages."""

    SECTION_HEADER = "section header"
    BLOCK_KEYWORD = "block keyword"
    LBRACE = "'{'"
    RBRACE = "'}'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    LPAREN = "'('"
    RPAREN = "')'"
    EQUALS = "'='"
    COLON = "':'"
    COMMA = "','"
    SEMICOLON = "';'"
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"
    PERCENT = "percentage"
    BOOLEAN = "boolean"
    EOF = "end of input"


@dataclass(frozen=True, slots=True)
class Token:
    """Single token.

    Attributes:
        kind: Token kind
        text: Raw source text of the token
        value: Decoded value (str for strings/identifiers/headers,
            int/float for numbers and percentages, bool for booleans,
            None for punctuation)
        location: Position of the first character
    """

    kind: TokenKind
    text: str
    value: str | int | float | bool | None
    location: SourceLocation

    def describe(self) -> str:
        """Short description for error messages."""
        if self.kind is TokenKind.EOF:
            return self.kind.value
        if self.kind in (TokenKind.STRING, TokenKind.IDENTIFIER, TokenKind.BLOCK_KEYWORD):
            return f"{self.kind.value} {self.text!r}"
        if self.kind is TokenKind.SECTION_HEADER:
            return f"section header [{self.value}]"
        return self.kind.value if self.value is None else f"{self.kind.value} {self.text}"
