# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Render values back into literal text.

The compact form is a single line, e.g. ``Point { x: 1, y: -2 }``. The
pretty form spreads containers over several lines, indented by four spaces
with a trailing comma after every element. Both forms are accepted by the
literal parser.
"""

import json

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

# ###############
# Public Interface
# ###############

INDENT = "    "


def format_value(value: Value, *, pretty: bool = False) -> str:
    """Render *value* as literal text.

    Args:
        value: The value to render.
        pretty: If True, use the multi-line indented layout.

    Returns:
        The literal text.
    """
    return _format(value, 0 if pretty else None)


# ################
# Implementation
# ################

_CHAR_ESCAPES: dict[str, str] = {
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
    "\\": "\\\\",
    "'": "\\'",
}


def _format(value: Value, depth: int | None) -> str:
    """Render *value*; *depth* is the indentation level, or None for the compact form."""
    if isinstance(value, Bool):
        return "true" if value.value else "false"
    if isinstance(value, (UInt, Int)):
        return str(value.value)
    if isinstance(value, String):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, Char):
        return f"'{_escape_char(value.value)}'"
    if isinstance(value, Bytes):
        return f"0x{value.value.hex()}"
    if isinstance(value, Unit):
        return "()"
    if isinstance(value, Opt):
        if not value.is_some:
            return "None"
        return f"Some({_format(value.value, depth)})"
    if isinstance(value, Seq):
        items = [_format(v, _deeper(depth)) for v in value]
        return _wrap("[", items, "]", depth)
    if isinstance(value, Tuple):
        prefix = value.ident or ""
        if not value.values:
            return prefix or "()"
        items = [_format(v, _deeper(depth)) for v in value]
        return prefix + _wrap("(", items, ")", depth)
    if isinstance(value, Map):
        items = [f"{_format_key(k)}: {_format(v, _deeper(depth))}" for k, v in value.entries]
        if depth is None:
            body = "{ " + ", ".join(items) + " }" if items else "{}"
        else:
            body = _wrap("{", items, "}", depth)
        return f"{value.ident} {body}" if value.ident else body
    raise TypeError(f"Cannot format {type(value).__name__}")


def _deeper(depth: int | None) -> int | None:
    return None if depth is None else depth + 1


def _wrap(opening: str, items: list[str], closing: str, depth: int | None) -> str:
    if not items:
        return opening + closing
    if depth is None:
        return opening + ", ".join(items) + closing
    inner = INDENT * (depth + 1)
    lines = "".join(f"{inner}{item},\n" for item in items)
    return f"{opening}\n{lines}{INDENT * depth}{closing}"


def _format_key(key: str) -> str:
    if key and (key[0].isalpha() or key[0] == "_") and all(c.isalnum() or c == "_" for c in key):
        return key
    return json.dumps(key, ensure_ascii=False)


def _escape_char(ch: str) -> str:
    if ch in _CHAR_ESCAPES:
        return _CHAR_ESCAPES[ch]
    if not ch.isprintable():
        return f"\\u{{{ord(ch):x}}}"
    return ch
