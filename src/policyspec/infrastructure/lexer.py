"""Tokenizer: raw document text → token stream.

Pure function of its input. FAIL-FIRST: LexError on the first
malformed token, with line and column.

Section headers are recognized in key position only: a '[' that does
not follow '=' or ':' and is not nested inside a list opens a header.
Everywhere else '[' opens a list.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from policyspec.domain.exceptions import LexError
from policyspec.domain.model.configuration import DEFAULT_COMMENT_MARKERS
from policyspec.domain.model.location import SourceLocation
from policyspec.domain.model.tokens import Token, TokenKind

if TYPE_CHECKING:
    from policyspec.domain.model.configuration import PolicySpecConfig

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"\[[ \t]*([A-Za-z_][\w-]*(?:\.[A-Za-z_][\w-]*)*)[ \t]*\]")
_IDENT_RE = re.compile(r"[A-Za-z_][\w.-]*")
_KEYWORD_RE = re.compile(r"DEFINE_[A-Z0-9_]+")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
_NUMBER_START_RE = re.compile(r"[+-]?\.?\d")

_PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "]": TokenKind.RBRACKET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "=": TokenKind.EQUALS,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
}

_ESCAPES: dict[str, str] = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

_BOOLEANS: dict[str, bool] = {"true": True, "false": False}

# Tokens after which '[' is a value (list), never a header
_VALUE_CONTEXT = frozenset({TokenKind.EQUALS, TokenKind.COLON})

_WHITESPACE = frozenset(" \t\r\n\f\v")


def tokenize(
    text: str,
    *,
    source: str | None = None,
    config: PolicySpecConfig | None = None,
) -> tuple[Token, ...]:
    """Tokenize a whole document.

    Args:
        text: Document text.
        source: Document name used in locations.
        config: Loader configuration (comment markers).

    Returns:
        Tokens in order, terminated by a single EOF token. Comments are dropped.

    Raises:
        LexError: Unterminated string, unknown escape, malformed section
            header or number, unrecognized character.
    """
    markers = config.comment_markers if config is not None else DEFAULT_COMMENT_MARKERS
    tokens = _Lexer(text, source, markers).run()
    logger.debug("tokenized %s: %d tokens", source or "<string>", len(tokens))
    return tokens


class _Lexer:
    """Single-use scanner over one document."""

    def __init__(self, text: str, source: str | None, markers: tuple[str, ...]) -> None:
        self._text = text.removeprefix("\ufeff")
        self._source = source
        # Longest first so "//" wins over "/" style prefixes
        self._markers = tuple(sorted(markers, key=len, reverse=True))
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []
        # Open '{' / '[' contexts: "map" or "list"
        self._nesting: list[str] = []

    def run(self) -> tuple[Token, ...]:
        text = self._text
        while self._pos < len(text):
            char = text[self._pos]
            if char in _WHITESPACE:
                self._advance(1)
            elif self._at_comment():
                self._skip_comment()
            elif char in ('"', "'"):
                self._scan_string(char)
            elif char == "[":
                self._scan_open_bracket()
            elif char in _PUNCTUATION:
                self._scan_punctuation(char)
            elif _NUMBER_START_RE.match(text, self._pos):
                self._scan_number()
            elif char.isalpha() or char == "_":
                self._scan_word()
            else:
                raise LexError(self._location(), f"unexpected character {char!r}")
        self._tokens.append(Token(TokenKind.EOF, "", None, self._location()))
        return tuple(self._tokens)

    # -- position helpers ---------------------------------------------------

    def _location(self) -> SourceLocation:
        return SourceLocation(self._line, self._column, self._source)

    def _advance(self, count: int) -> str:
        """Consume count characters, tracking line and column."""
        chunk = self._text[self._pos : self._pos + count]
        newlines = chunk.count("\n")
        if newlines:
            self._line += newlines
            self._column = len(chunk) - chunk.rfind("\n")
        else:
            self._column += len(chunk)
        self._pos += len(chunk)
        return chunk

    def _emit(
        self,
        kind: TokenKind,
        text: str,
        value: str | int | float | bool | None,
        location: SourceLocation,
    ) -> None:
        self._tokens.append(Token(kind, text, value, location))

    def _previous_kind(self) -> TokenKind | None:
        return self._tokens[-1].kind if self._tokens else None

    # -- comments -------------------------------------------------------------

    def _at_comment(self) -> bool:
        return any(self._text.startswith(marker, self._pos) for marker in self._markers)

    def _skip_comment(self) -> None:
        end = self._text.find("\n", self._pos)
        if end == -1:
            end = len(self._text)
        self._advance(end - self._pos)

    # -- brackets and punctuation -----------------------------------------

    def _scan_open_bracket(self) -> None:
        location = self._location()
        in_list = bool(self._nesting) and self._nesting[-1] == "list"
        if in_list or self._previous_kind() in _VALUE_CONTEXT:
            self._nesting.append("list")
            self._emit(TokenKind.LBRACKET, self._advance(1), None, location)
            return

        match = _HEADER_RE.match(self._text, self._pos)
        if match is None:
            raise LexError(location, "malformed section header, expected [name] or [dotted.name]")
        self._emit(TokenKind.SECTION_HEADER, self._advance(match.end() - self._pos), match.group(1), location)

    def _scan_punctuation(self, char: str) -> None:
        location = self._location()
        kind = _PUNCTUATION[char]
        if kind is TokenKind.LBRACE:
            self._nesting.append("map")
        elif kind is TokenKind.RBRACE and self._nesting and self._nesting[-1] == "map":
            self._nesting.pop()
        elif kind is TokenKind.RBRACKET and self._nesting and self._nesting[-1] == "list":
            self._nesting.pop()
        self._emit(kind, self._advance(1), None, location)

    # -- literals -------------------------------------------------------------

    def _scan_number(self) -> None:
        location = self._location()
        match = _NUMBER_RE.match(self._text, self._pos)
        if match is None:
            raise LexError(location, "malformed number literal")
        raw = match.group(0)
        end = match.end()
        is_percent = end < len(self._text) and self._text[end] == "%"
        follow = end + 1 if is_percent else end
        if follow < len(self._text) and (self._text[follow].isalnum() or self._text[follow] in "_.%"):
            raise LexError(location, f"malformed number literal starting {raw!r}")

        value: int | float = float(raw) if any(c in raw for c in ".eE") else int(raw)
        if is_percent:
            self._emit(TokenKind.PERCENT, self._advance(follow - self._pos), float(value), location)
        else:
            self._emit(TokenKind.NUMBER, self._advance(follow - self._pos), value, location)

    def _scan_word(self) -> None:
        location = self._location()
        match = _IDENT_RE.match(self._text, self._pos)
        # isalpha() admits non-ASCII letters the identifier pattern rejects
        if match is None:
            raise LexError(location, f"unexpected character {self._text[self._pos]!r}")
        word = self._advance(match.end() - self._pos)
        if _KEYWORD_RE.fullmatch(word):
            self._emit(TokenKind.BLOCK_KEYWORD, word, word, location)
        elif word in _BOOLEANS:
            self._emit(TokenKind.BOOLEAN, word, _BOOLEANS[word], location)
        else:
            self._emit(TokenKind.IDENTIFIER, word, word, location)

    def _scan_string(self, quote: str) -> None:
        location = self._location()
        triple = self._text.startswith(quote * 3, self._pos)
        delimiter = quote * 3 if triple else quote
        start = self._pos
        self._advance(len(delimiter))

        chars: list[str] = []
        while True:
            if self._pos >= len(self._text):
                raise LexError(location, "unterminated string literal")
            if self._text.startswith(delimiter, self._pos):
                self._advance(len(delimiter))
                break
            char = self._text[self._pos]
            if char == "\n" and not triple:
                raise LexError(location, "unterminated string literal")
            if char == "\\":
                escape_location = self._location()
                nxt = self._text[self._pos + 1 : self._pos + 2]
                if nxt not in _ESCAPES:
                    shown = nxt if nxt else "end of input"
                    raise LexError(escape_location, f"unknown escape sequence '\\{shown}'")
                chars.append(_ESCAPES[nxt])
                self._advance(2)
                continue
            chars.append(char)
            self._advance(1)

        self._emit(TokenKind.STRING, self._text[start : self._pos], "".join(chars), location)
