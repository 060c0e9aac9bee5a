# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Self-describing values produced by the literal parser and the decoder.

Values are immutable and carry no reference back into the type registry.
Integers are plain Python ``int`` objects, so widths up to 256 bits (and the
larger compact range) are represented without narrowing.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Char:
    value: str


@dataclass(frozen=True)
class UInt:
    """An unsigned integer literal (written without a sign)."""

    value: int


@dataclass(frozen=True)
class Int:
    """A signed integer literal (written with an explicit ``+`` or ``-``)."""

    value: int


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Bytes:
    """Raw octets, written as a ``0x``-prefixed hex literal."""

    value: bytes


@dataclass(frozen=True)
class Seq:
    """An ordered, homogeneous list of values."""

    elems: tuple[Value, ...] = ()

    def __len__(self) -> int:
        return len(self.elems)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.elems)


@dataclass(frozen=True)
class Tuple:
    """An ordered list of values, optionally named (tuple struct or variant case)."""

    values: tuple[Value, ...] = ()
    ident: str | None = None

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.values)


@dataclass(frozen=True)
class Map:
    """Ordered ``(name, value)`` pairs, optionally named (struct or variant case).

    Insertion order is preserved and participates in equality.
    """

    entries: tuple[tuple[str, Value], ...] = ()
    ident: str | None = None
    _index: dict[str, Value] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", dict(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        """Return the entry names in insertion order."""
        return [name for name, _ in self.entries]

    def get(self, name: str) -> Value | None:
        """Return the value stored under *name*, or None."""
        return self._index.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._index


@dataclass(frozen=True)
class Opt:
    """The optional wrapper: ``None`` when *value* is None, ``Some(value)`` otherwise."""

    value: Value | None = None

    @property
    def is_some(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class Unit:
    """The unit value ``()``."""


# Any transcoded value.
Value = Bool | Char | UInt | Int | String | Bytes | Seq | Tuple | Map | Opt | Unit
