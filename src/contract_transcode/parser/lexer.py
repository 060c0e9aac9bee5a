# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for value literals.

Converts literal text such as ``Foo { a: [1, 2], b: Some("x") }`` into a
sequence of tokens for subsequent parsing.
"""

import enum
import json
from dataclasses import dataclass

from contract_transcode.errors import ParseError

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the literal lexer."""

    # Keywords
    TRUE = "true"
    FALSE = "false"
    NONE = "None"
    SOME = "Some"

    # Symbols
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    COLON = ":"

    # Literals
    STRING = "STRING"
    CHAR = "CHAR"
    INTEGER = "INTEGER"
    BYTES = "BYTES"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # End of input
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token. For STRING and CHAR tokens this is
            the unescaped content, for BYTES tokens the hex digits without
            the ``0x`` prefix.
        offset: 0-based byte offset where the token starts.
    """

    type: TokenType
    value: str
    offset: int


class LexerError(ParseError):
    """Raised when the scanner encounters an invalid character or unterminated literal."""


INTEGER_SUFFIXES: frozenset[str] = frozenset(
    f"{sign}{bits}" for sign in "ui" for bits in (8, 16, 32, 64, 128, 256)
)


def tokenize(source: str) -> list[Token]:
    """Tokenize literal text into a sequence of tokens.

    Whitespace between tokens is insignificant and is not included in the
    output.

    Args:
        source: The literal text.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unexpected characters, malformed numeric or byte
            literals, and unterminated string or character literals.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "None": TokenType.NONE,
    "Some": TokenType.SOME,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
}

_CHAR_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._offset = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_whitespace()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._offset))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update the byte offset, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        self._offset += len(ch.encode("utf-8", "surrogatepass"))
        return ch

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._source) and self._current().isspace():
            self._advance()

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        offset = self._offset

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, offset))
        elif ch == '"':
            self._scan_string(offset)
        elif ch == "'":
            self._scan_char(offset)
        elif ch == "0" and self._peek() in ("x", "X"):
            self._scan_bytes(offset)
        elif ch in _DIGITS or (ch in "+-" and self._peek() in _DIGITS):
            self._scan_integer(offset)
        elif ch.isalpha() or ch == "_":
            self._scan_identifier_or_keyword(offset)
        else:
            raise LexerError(f"Unexpected character: {ch!r}", offset, "value")

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, offset: int) -> None:
        """Scan a double-quoted string literal with RFC 8259 escape sequences."""
        start = self._pos
        self._advance()  # opening "
        while self._pos < len(self._source):
            ch = self._advance()
            if ch == "\\":
                if self._pos >= len(self._source):
                    break
                self._advance()
            elif ch == '"':
                raw = self._source[start : self._pos]
                try:
                    text = json.loads(raw)
                    text.encode("utf-8")
                except (json.JSONDecodeError, UnicodeEncodeError) as exc:
                    raise LexerError(f"Invalid string literal {raw}: {exc}", offset, "string") from None
                self._tokens.append(Token(TokenType.STRING, text, offset))
                return
        raise LexerError("Unterminated string literal", offset, '"')

    def _scan_char(self, offset: int) -> None:
        """Scan a single-quoted character literal."""
        self._advance()  # opening '
        if self._pos >= len(self._source):
            raise LexerError("Unterminated character literal", offset, "'")
        ch = self._advance()
        if ch == "\\":
            ch = self._scan_char_escape(offset)
        elif ch == "'":
            raise LexerError("Empty character literal", offset, "character")
        if self._current() != "'":
            raise LexerError("Unterminated character literal", self._offset, "'")
        self._advance()  # closing '
        self._tokens.append(Token(TokenType.CHAR, ch, offset))

    def _scan_char_escape(self, offset: int) -> str:
        esc = self._current()
        if esc in _CHAR_ESCAPES:
            self._advance()
            return _CHAR_ESCAPES[esc]
        if esc == "u" and self._peek() == "{":
            self._advance()  # u
            self._advance()  # {
            digits: list[str] = []
            while self._current() in _HEX_DIGITS and self._current():
                digits.append(self._advance())
            if self._current() != "}" or not 1 <= len(digits) <= 6:
                raise LexerError("Invalid unicode escape in character literal", offset, "}")
            self._advance()  # }
            code_point = int("".join(digits), 16)
            if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
                raise LexerError(f"Invalid code point {code_point:#x}", offset, "character")
            return chr(code_point)
        raise LexerError(f"Invalid escape sequence: '\\{esc}'", self._offset, "escape sequence")

    def _scan_bytes(self, offset: int) -> None:
        """Scan a ``0x`` byte literal with an even number of hex digits."""
        self._advance()  # 0
        self._advance()  # x
        start = self._pos
        while self._current() and self._current() in _HEX_DIGITS:
            self._advance()
        if self._current().isalnum() or self._current() == "_":
            raise LexerError(f"Invalid hex digit: {self._current()!r}", self._offset, "hex digit")
        digits = self._source[start : self._pos]
        if len(digits) % 2:
            raise LexerError("Byte literal must have an even number of hex digits", offset, "hex digit")
        self._tokens.append(Token(TokenType.BYTES, digits, offset))

    def _scan_integer(self, offset: int) -> None:
        """Scan an integer literal: optional sign, digits with ``_`` separators, optional suffix."""
        start = self._pos
        if self._current() in "+-":
            self._advance()
        digits_start = self._pos
        while self._current() in _DIGITS or self._current() == "_":
            self._advance()
        digits = self._source[digits_start : self._pos]
        if digits.endswith("_") or "__" in digits:
            raise LexerError(f"Misplaced '_' separator in integer literal {digits!r}", offset, "digit")

        suffix_start = self._pos
        while self._current().isalnum() or self._current() == "_":
            self._advance()
        suffix = self._source[suffix_start : self._pos]
        if suffix and suffix not in INTEGER_SUFFIXES:
            raise LexerError(f"Invalid integer suffix {suffix!r}", offset, "integer suffix")
        self._tokens.append(Token(TokenType.INTEGER, self._source[start : self._pos], offset))

    def _scan_identifier_or_keyword(self, offset: int) -> None:
        """Scan an identifier and map it to a keyword token type if applicable."""
        start = self._pos
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        value = self._source[start : self._pos]
        token_type = _KEYWORDS.get(value, TokenType.IDENTIFIER)
        self._tokens.append(Token(token_type, value, offset))
