# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for value literals.

Converts a token stream produced by the lexer into a :mod:`Value
<contract_transcode.model.values>`.

Grammar (whitespace is insignificant between tokens)::

    value   := 'true' | 'false' | CHAR | INTEGER | STRING | BYTES
             | '[' items ']'
             | '(' ')' | '(' items ')'
             | '{' entries '}'
             | 'None' | 'Some' '(' value [ ',' ] ')'
             | ( 'Some' | 'None' ) '{' entries '}' | 'None' '(' items ')'
             | IDENT [ '(' items ')' | '{' entries '}' ]
    items   := [ value { ',' value } [ ',' ] ]
    entries := [ entry { ',' entry } [ ',' ] ]
    entry   := ( IDENT | STRING ) ':' value

``Some { .. }``, ``None { .. }`` and ``None( .. )`` are variant cases that
happen to share a name with the option keywords; they parse to a named map
or tuple. Brackets may nest at most :data:`MAX_NESTING` levels deep.
"""

from contract_transcode.errors import ParseError
from contract_transcode.model.types import PrimitiveKind
from contract_transcode.model.values import (
    Bool,
    Bytes,
    Char,
    Int,
    Map,
    Opt,
    Seq,
    String,
    Tuple,
    UInt,
    Unit,
    Value,
)
from contract_transcode.parser.lexer import INTEGER_SUFFIXES, Token, TokenType, tokenize

# ###############
# Public Interface
# ###############

# Deepest bracket nesting accepted in a literal.
MAX_NESTING = 128


def parse_value(source: str) -> Value:
    """Parse literal text into a value.

    Args:
        source: The literal text, e.g. ``Some(Point { x: 1, y: -2 })``.

    Returns:
        The parsed value.

    Raises:
        ParseError: If the text is not a single well-formed literal. The
            error carries the byte offset and a description of what was
            expected there.
    """
    tokens = tokenize(source)
    return _Parser(tokens).parse()


# ################
# Implementation
# ################

# Keywords that may also be used as map keys.
_NAME_TOKEN_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.NONE,
        TokenType.SOME,
    }
)


class _Parser:
    """Recursive-descent parser for literal token streams."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    def parse(self) -> Value:
        """Parse exactly one value followed by the end of input."""
        value = self._parse_value()
        tok = self._current()
        if tok.type != TokenType.EOF:
            raise ParseError(f"Unexpected {_describe(tok)} after value", tok.offset, "end of input")
        return value

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token."""
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types (without
        consuming).
        """
        return self._current().type in types

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of the given types.

        Raises ParseError if the current token does not match.
        """
        tok = self._current()
        if tok.type not in types:
            expected = " or ".join(repr(t.value) for t in types)
            raise ParseError(f"Expected {expected}, got {_describe(tok)}", tok.offset, expected)
        return self._advance()

    def _descend(self) -> None:
        """Enter the bracket that was just consumed, enforcing MAX_NESTING."""
        self._depth += 1
        if self._depth > MAX_NESTING:
            opener = self._tokens[self._pos - 1]
            raise ParseError(
                f"Literal is nested deeper than {MAX_NESTING} levels",
                opener.offset,
                "shallower nesting",
            )

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _parse_value(self) -> Value:
        tok = self._current()
        if tok.type == TokenType.TRUE:
            self._advance()
            return Bool(True)
        if tok.type == TokenType.FALSE:
            self._advance()
            return Bool(False)
        if tok.type == TokenType.CHAR:
            self._advance()
            return Char(tok.value)
        if tok.type == TokenType.STRING:
            self._advance()
            return String(tok.value)
        if tok.type == TokenType.BYTES:
            self._advance()
            return Bytes(bytes.fromhex(tok.value))
        if tok.type == TokenType.INTEGER:
            self._advance()
            return _parse_integer(tok)
        if tok.type == TokenType.LBRACKET:
            self._advance()
            return Seq(tuple(self._parse_items(TokenType.RBRACKET)))
        if tok.type == TokenType.LPAREN:
            self._advance()
            if self._check(TokenType.RPAREN):
                self._advance()
                return Unit()
            return Tuple(tuple(self._parse_items(TokenType.RPAREN)))
        if tok.type == TokenType.LBRACE:
            self._advance()
            return Map(self._parse_entries())
        if tok.type == TokenType.NONE:
            return self._parse_none()
        if tok.type == TokenType.SOME:
            return self._parse_some()
        if tok.type == TokenType.IDENTIFIER:
            return self._parse_named()
        raise ParseError(f"Expected a value, got {_describe(tok)}", tok.offset, "value")

    def _parse_none(self) -> Value:
        """Parse: None [ '(' items ')' | '{' entries '}' ]"""
        self._expect(TokenType.NONE)
        if self._check(TokenType.LPAREN):
            self._advance()
            return Tuple(tuple(self._parse_items(TokenType.RPAREN)), "None")
        if self._check(TokenType.LBRACE):
            self._advance()
            return Map(self._parse_entries(), "None")
        return Opt(None)

    def _parse_some(self) -> Value:
        """Parse: Some ( '(' value [,] ')' | '{' entries '}' )"""
        self._expect(TokenType.SOME)
        if self._check(TokenType.LBRACE):
            self._advance()
            return Map(self._parse_entries(), "Some")
        lparen = self._expect(TokenType.LPAREN)
        items = self._parse_items(TokenType.RPAREN)
        if len(items) != 1:
            raise ParseError(f"Some takes exactly one value, got {len(items)}", lparen.offset, "one value")
        return Opt(items[0])

    def _parse_named(self) -> Value:
        """Parse: IDENT [ '(' items ')' | '{' entries '}' ]"""
        ident = self._expect(TokenType.IDENTIFIER).value
        if self._check(TokenType.LPAREN):
            self._advance()
            return Tuple(tuple(self._parse_items(TokenType.RPAREN)), ident)
        if self._check(TokenType.LBRACE):
            self._advance()
            return Map(self._parse_entries(), ident)
        # A bare identifier is a field-less struct or unit variant.
        return Tuple((), ident)

    def _parse_items(self, closing: TokenType) -> list[Value]:
        """Parse comma-separated values up to and including the *closing* token."""
        self._descend()
        items: list[Value] = []
        while not self._check(closing):
            items.append(self._parse_value())
            if not self._check(TokenType.COMMA):
                break
            self._advance()  # consume ,
        self._expect(closing, TokenType.COMMA)
        self._depth -= 1
        return items

    def _parse_entries(self) -> tuple[tuple[str, Value], ...]:
        """Parse ``key: value`` pairs up to and including the closing brace."""
        self._descend()
        entries: list[tuple[str, Value]] = []
        seen: set[str] = set()
        while not self._check(TokenType.RBRACE):
            key_tok = self._current()
            if key_tok.type not in _NAME_TOKEN_TYPES and key_tok.type != TokenType.STRING:
                raise ParseError(
                    f"Expected a field name, got {_describe(key_tok)}",
                    key_tok.offset,
                    "field name",
                )
            self._advance()
            if key_tok.value in seen:
                raise ParseError(f"Duplicate field name {key_tok.value!r}", key_tok.offset, "field name")
            seen.add(key_tok.value)
            self._expect(TokenType.COLON)
            entries.append((key_tok.value, self._parse_value()))
            if not self._check(TokenType.COMMA):
                break
            self._advance()  # consume ,
        self._expect(TokenType.RBRACE, TokenType.COMMA)
        self._depth -= 1
        return tuple(entries)


def _parse_integer(tok: Token) -> Value:
    """Convert an INTEGER token into UInt or Int, checking any type suffix."""
    text = tok.value
    suffix = ""
    for candidate in INTEGER_SUFFIXES:
        if text.endswith(candidate) and len(candidate) > len(suffix):
            suffix = candidate
    body = text[: len(text) - len(suffix)]
    signed = body[0] in "+-"
    magnitude = int(body.lstrip("+-").replace("_", ""))
    n = -magnitude if body[0] == "-" else magnitude

    if suffix:
        kind = PrimitiveKind(suffix)
        lo, hi = kind.bounds
        if not lo <= n <= hi:
            raise ParseError(f"Integer literal {text} is out of range for {suffix}", tok.offset, f"{suffix} literal")
        signed = signed or kind.is_signed
    return Int(n) if signed else UInt(n)


def _describe(tok: Token) -> str:
    if tok.type == TokenType.EOF:
        return "end of input"
    if tok.type == TokenType.STRING:
        return f"string {tok.value!r}"
    if tok.type == TokenType.BYTES:
        return f"'0x{tok.value}'"
    return repr(tok.value)
