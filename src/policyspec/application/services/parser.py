"""Parser service: token stream → ParsedDocument (block forest).

Recursive descent over nested brace/bracket structure.
FAIL-FIRST: ParseError on the first structural violation, with the
offending token's line and column. No partial structure is returned.

Grammar:
    document  := (SECTION_HEADER | block | entry | separator)*
    block     := BLOCK_KEYWORD "(" name ")" map_body
    map_body  := "{" (entry | separator)* "}"
    entry     := SECTION_HEADER map_body
               | key ("=" | ":") value
               | key map_body
    value     := STRING | NUMBER | PERCENT | BOOLEAN | IDENTIFIER
               | "[" (value ("," value)* ","?)? "]"
               | map_body
    separator := "," | ";"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from policyspec.domain.exceptions import ParseError
from policyspec.domain.model.block import ROOT_SECTION, Block, BlockRef, ParsedDocument, Section
from policyspec.domain.model.enums import BlockKind, DuplicateSectionPolicy, ScalarKind
from policyspec.domain.model.tokens import Token, TokenKind
from policyspec.domain.model.values import ListValue, MapValue, Scalar
from policyspec.infrastructure.lexer import tokenize

if TYPE_CHECKING:
    from collections.abc import Sequence

    from policyspec.domain.model.configuration import PolicySpecConfig
    from policyspec.domain.model.location import SourceLocation
    from policyspec.domain.model.values import Value

logger = logging.getLogger(__name__)

_KEY_TOKENS = frozenset({TokenKind.IDENTIFIER, TokenKind.STRING})
_ASSIGN_TOKENS = frozenset({TokenKind.EQUALS, TokenKind.COLON})
_SEPARATORS = frozenset({TokenKind.COMMA, TokenKind.SEMICOLON})

# Maps and lists nested deeper than this are a ParseError
MAX_NESTING_DEPTH = 100


def parse_text(
    text: str,
    *,
    source: str | None = None,
    config: PolicySpecConfig | None = None,
) -> ParsedDocument:
    """Tokenize and parse a document.

    Args:
        text: Document text.
        source: Document name used in locations.
        config: Loader configuration.

    Returns:
        Parsed block forest (not yet validated).

    Raises:
        LexError: Malformed token.
        ParseError: Structural violation.
    """
    tokens = tokenize(text, source=source, config=config)
    return parse_tokens(tokens, source=source, config=config)


def parse_tokens(
    tokens: Sequence[Token],
    *,
    source: str | None = None,
    config: PolicySpecConfig | None = None,
) -> ParsedDocument:
    """Parse a token stream into a block forest.

    Args:
        tokens: Tokens terminated by EOF (as returned by tokenize()).
        source: Document name stored on the result.
        config: Loader configuration (duplicate section policy).

    Returns:
        Parsed block forest (not yet validated).

    Raises:
        ParseError: Unexpected token, unbalanced brackets, duplicate
            block name within a kind, duplicate key, repeated section
            under the REJECT policy.
    """
    if not tokens or tokens[-1].kind is not TokenKind.EOF:
        raise ValueError("token stream must end with EOF")
    policy = config.duplicate_sections if config is not None else DuplicateSectionPolicy.REJECT
    document = _Parser(tokens, policy, source).parse_document()
    logger.debug(
        "parsed %s: %d section(s), %d block(s)",
        source or "<string>",
        len(document.sections),
        len(document.blocks),
    )
    return document


@dataclass
class _MapBuilder:
    """Mutable map under construction.

    Entries are either finished Values (explicitly assigned, closed) or
    nested builders created implicitly by dotted keys (open).
    """

    location: SourceLocation | None
    entries: dict[str, Value | _MapBuilder] = field(default_factory=dict)
    assigned_at: dict[str, SourceLocation] = field(default_factory=dict)

    def set(self, parts: list[str], value: Value, location: SourceLocation) -> None:
        """Assign value at a dotted path. Never overwrites."""
        target = self
        for depth, part in enumerate(parts[:-1]):
            existing = target.entries.get(part)
            if existing is None:
                child = _MapBuilder(location)
                target.entries[part] = child
                target = child
            elif isinstance(existing, _MapBuilder):
                target = existing
            else:
                dotted = ".".join(parts[: depth + 1])
                first = target.assigned_at[part]
                raise ParseError(location, f"duplicate key '{dotted}', first assigned at {first}")

        last = parts[-1]
        if last in target.entries:
            first = target.assigned_at.get(last, target.entries[last].location)
            raise ParseError(location, f"duplicate key '{'.'.join(parts)}', first assigned at {first}")
        target.entries[last] = value
        target.assigned_at[last] = location

    def freeze(self) -> MapValue:
        return MapValue(
            {
                key: entry.freeze() if isinstance(entry, _MapBuilder) else entry
                for key, entry in self.entries.items()
            },
            self.location,
        )


@dataclass
class _SectionBuilder:
    path: str
    location: SourceLocation | None
    blocks: list[BlockRef] = field(default_factory=list)
    attributes: _MapBuilder = field(default_factory=lambda: _MapBuilder(None))

    def freeze(self) -> Section:
        return Section(
            path=self.path,
            blocks=tuple(self.blocks),
            attributes=self.attributes.freeze(),
            location=self.location,
        )


class _Parser:
    """Single-use recursive descent parser over one token stream."""

    def __init__(
        self,
        tokens: Sequence[Token],
        policy: DuplicateSectionPolicy,
        source: str | None,
    ) -> None:
        self._tokens = tokens
        self._policy = policy
        self._source = source
        self._pos = 0
        self._sections: dict[str, _SectionBuilder] = {}
        self._root = _SectionBuilder(ROOT_SECTION, None)
        self._current = self._root
        self._blocks: list[Block] = []
        self._block_locations: dict[BlockRef, SourceLocation | None] = {}
        self._depth = 0

    # -- token helpers ----------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _next(self) -> Token:
        token = self._tokens[self._pos]
        if token.kind is not TokenKind.EOF:
            self._pos += 1
        return token

    def _expect(self, kind: TokenKind, context: str) -> Token:
        token = self._peek()
        if token.kind is not kind:
            raise ParseError(token.location, f"expected {kind.value} {context}, found {token.describe()}")
        return self._next()

    def _descend(self, opener: Token) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise ParseError(opener.location, f"nesting deeper than {MAX_NESTING_DEPTH} levels")

    def _check_key_depth(self, parts: list[str], token: Token) -> None:
        if self._depth + len(parts) > MAX_NESTING_DEPTH:
            raise ParseError(token.location, f"nesting deeper than {MAX_NESTING_DEPTH} levels")

    # -- document ---------------------------------------------------------------

    def parse_document(self) -> ParsedDocument:
        while (token := self._peek()).kind is not TokenKind.EOF:
            if token.kind is TokenKind.SECTION_HEADER:
                self._open_section(self._next())
            elif token.kind is TokenKind.BLOCK_KEYWORD:
                self._parse_block()
            elif token.kind in _KEY_TOKENS:
                self._parse_entry(self._current.attributes)
            elif token.kind in _SEPARATORS:
                self._next()
            elif token.kind in (TokenKind.RBRACE, TokenKind.RBRACKET):
                raise ParseError(token.location, f"unbalanced {token.kind.value}, no matching opener")
            else:
                raise ParseError(token.location, f"unexpected {token.describe()} at top level")

        sections = [builder.freeze() for builder in self._section_builders()]
        # Section order, then declaration order within a section. Same as
        # plain declaration order unless repeated sections were merged.
        by_ref = {block.ref: block for block in self._blocks}
        blocks = tuple(by_ref[ref] for section in sections for ref in section.blocks)
        return ParsedDocument(sections=tuple(sections), blocks=blocks, source=self._source)

    def _section_builders(self) -> list[_SectionBuilder]:
        builders = list(self._sections.values())
        # Root section only exists when something was declared before the first header
        if self._root.blocks or self._root.attributes.entries:
            builders.insert(0, self._root)
        return builders

    def _open_section(self, header: Token) -> None:
        path = str(header.value)
        existing = self._sections.get(path)
        if existing is None:
            self._current = _SectionBuilder(path, header.location)
            self._sections[path] = self._current
            return

        if self._policy is DuplicateSectionPolicy.REJECT:
            raise ParseError(
                header.location,
                f"section [{path}] already declared at {existing.location}",
            )
        logger.debug("merging repeated section [%s] at %s", path, header.location)
        self._current = existing

    # -- blocks -----------------------------------------------------------------

    def _parse_block(self) -> None:
        keyword = self._next()
        try:
            kind = BlockKind.parse(str(keyword.value))
        except ValueError:
            raise ParseError(keyword.location, f"unknown block kind {keyword.text}") from None

        self._expect(TokenKind.LPAREN, f"after {keyword.text}")
        name_token = self._peek()
        if name_token.kind not in _KEY_TOKENS or not name_token.value:
            raise ParseError(
                name_token.location,
                f"expected block name after {keyword.text}(, found {name_token.describe()}",
            )
        self._next()
        self._expect(TokenKind.RPAREN, f"after block name {name_token.text}")

        ref = BlockRef(kind, str(name_token.value))
        if ref in self._block_locations:
            raise ParseError(
                name_token.location,
                f"duplicate {ref}, first declared at {self._block_locations[ref]}",
            )

        attributes = self._parse_map_body(f"body of {ref}").freeze()
        self._block_locations[ref] = keyword.location
        self._blocks.append(
            Block(
                kind=kind,
                name=ref.name,
                section=self._current.path,
                attributes=attributes,
                location=keyword.location,
            ),
        )
        self._current.blocks.append(ref)

    # -- maps -------------------------------------------------------------------

    def _parse_map_body(self, context: str) -> _MapBuilder:
        opener = self._expect(TokenKind.LBRACE, f"to open {context}")
        self._descend(opener)
        builder = _MapBuilder(opener.location)
        while True:
            token = self._peek()
            if token.kind is TokenKind.RBRACE:
                self._next()
                self._depth -= 1
                return builder
            if token.kind in _SEPARATORS:
                self._next()
            elif token.kind is TokenKind.SECTION_HEADER:
                parts = str(token.value).split(".")
                self._check_key_depth(parts, token)
                self._next()
                body = self._parse_map_body(f"[{token.value}]").freeze()
                builder.set(parts, body, token.location)
            elif token.kind in _KEY_TOKENS:
                self._parse_entry(builder)
            elif token.kind is TokenKind.EOF:
                raise ParseError(token.location, f"unbalanced '{{' opened at {opener.location}")
            else:
                raise ParseError(token.location, f"unexpected {token.describe()} in {context}")

    def _parse_entry(self, builder: _MapBuilder) -> None:
        key_token = self._next()
        parts = self._key_parts(key_token)
        self._check_key_depth(parts, key_token)
        token = self._peek()
        if token.kind in _ASSIGN_TOKENS:
            self._next()
            self._reject_header_as_value(key_token, token)
            value = self._parse_value()
        elif token.kind is TokenKind.LBRACE:
            value = self._parse_map_body(f"'{key_token.value}'").freeze()
        else:
            raise ParseError(
                token.location,
                f"expected '=', ':' or '{{' after key {key_token.text}, found {token.describe()}",
            )
        builder.set(parts, value, key_token.location)

    def _reject_header_as_value(self, key_token: Token, assign: Token) -> None:
        """A bare [name] on the line after "key =" is a header, not a value."""
        upcoming = self._tokens[self._pos : self._pos + 3]
        if len(upcoming) < 3:
            return
        opener, item, closer = upcoming
        if (
            opener.kind is TokenKind.LBRACKET
            and opener.location.line > assign.location.line
            and item.kind is TokenKind.IDENTIFIER
            and closer.kind is TokenKind.RBRACKET
        ):
            raise ParseError(
                opener.location,
                f"missing value for key {key_token.text}, [{item.value}] on the next line "
                "reads as a section header; put a list value on the key's line",
            )

    @staticmethod
    def _key_parts(token: Token) -> list[str]:
        key = str(token.value)
        if token.kind is TokenKind.STRING:
            if not key:
                raise ParseError(token.location, "empty string is not a valid key")
            return [key]
        parts = key.split(".")
        if any(not part for part in parts):
            raise ParseError(token.location, f"malformed dotted key {key!r}")
        return parts

    # -- values -----------------------------------------------------------------

    def _parse_value(self) -> Value:
        token = self._peek()
        match token.kind:
            case TokenKind.STRING | TokenKind.IDENTIFIER:
                self._next()
                return Scalar(str(token.value), ScalarKind.STRING, token.location)
            case TokenKind.NUMBER:
                self._next()
                kind = ScalarKind.FLOAT if isinstance(token.value, float) else ScalarKind.INTEGER
                return Scalar(token.value, kind, token.location)  # type: ignore[arg-type]
            case TokenKind.PERCENT:
                self._next()
                return Scalar(token.value, ScalarKind.PERCENT, token.location)  # type: ignore[arg-type]
            case TokenKind.BOOLEAN:
                self._next()
                return Scalar(bool(token.value), ScalarKind.BOOLEAN, token.location)
            case TokenKind.LBRACKET:
                return self._parse_list()
            case TokenKind.LBRACE:
                return self._parse_map_body("inline map").freeze()
            case TokenKind.EOF:
                raise ParseError(token.location, "unexpected end of input, expected a value")
            case _:
                raise ParseError(token.location, f"expected a value, found {token.describe()}")

    def _parse_list(self) -> ListValue:
        opener = self._next()
        self._descend(opener)
        items: list[Value] = []
        while True:
            token = self._peek()
            if token.kind is TokenKind.RBRACKET:
                self._next()
                self._depth -= 1
                return ListValue(tuple(items), opener.location)
            if token.kind is TokenKind.EOF:
                raise ParseError(token.location, f"unbalanced '[' opened at {opener.location}")
            items.append(self._parse_value())

            token = self._peek()
            if token.kind is TokenKind.COMMA:
                self._next()
            elif token.kind is TokenKind.EOF:
                raise ParseError(token.location, f"unbalanced '[' opened at {opener.location}")
            elif token.kind is not TokenKind.RBRACKET:
                raise ParseError(token.location, f"expected ',' or ']' in list, found {token.describe()}")
