# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer, parser and printer for the textual value language."""

from contract_transcode.errors import ParseError
from contract_transcode.parser.lexer import LexerError
from contract_transcode.parser.parser import MAX_NESTING, parse_value
from contract_transcode.parser.printer import format_value

__all__ = [
    "MAX_NESTING",
    "parse_value",
    "format_value",
    "ParseError",
    "LexerError",
]
