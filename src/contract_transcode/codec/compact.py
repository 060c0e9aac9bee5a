# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""The compact variable-length integer scheme.

The two low bits of the first byte select the size class:

* ``0b00``: single byte, value in the upper six bits (``< 2**6``)
* ``0b01``: two bytes little-endian, value shifted by two (``< 2**14``)
* ``0b10``: four bytes little-endian, value shifted by two (``< 2**30``)
* ``0b11``: the upper six bits hold ``byte_count - 4``, followed by the value
  in ``byte_count`` little-endian bytes
"""

from __future__ import annotations

from contract_transcode.codec.reader import ByteReader
from contract_transcode.errors import IntegerOverflow, InvalidEncoding

# ###############
# Public Interface
# ###############

SINGLE_BYTE_LIMIT = 1 << 6
TWO_BYTE_LIMIT = 1 << 14
FOUR_BYTE_LIMIT = 1 << 30
MAX_BIG_INT_BYTES = 4 + 0b111111
MAX_COMPACT = (1 << (8 * MAX_BIG_INT_BYTES)) - 1


def encode_compact(value: int) -> bytes:
    """Encode a non-negative integer in compact form.

    Raises:
        IntegerOverflow: If *value* is negative or too large for the scheme.
    """
    if value < 0 or value > MAX_COMPACT:
        raise IntegerOverflow(value, "compact")
    if value < SINGLE_BYTE_LIMIT:
        return bytes([value << 2])
    if value < TWO_BYTE_LIMIT:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value < FOUR_BYTE_LIMIT:
        return ((value << 2) | 0b10).to_bytes(4, "little")
    byte_count = max(4, (value.bit_length() + 7) // 8)
    return bytes([((byte_count - 4) << 2) | 0b11]) + value.to_bytes(byte_count, "little")


def decode_compact(reader: ByteReader) -> int:
    """Decode one compact integer from *reader*.

    Raises:
        InvalidEncoding: If the encoding is not the canonical (shortest) form.
        UnexpectedEndOfInput: If the input ends early.
    """
    prefix = reader.peek_byte()
    mode = prefix & 0b11
    if mode == 0b00:
        return reader.read_byte() >> 2
    if mode == 0b01:
        value = int.from_bytes(reader.read(2), "little") >> 2
        if value < SINGLE_BYTE_LIMIT:
            raise InvalidEncoding(f"Non-canonical compact encoding of {value}")
        return value
    if mode == 0b10:
        value = int.from_bytes(reader.read(4), "little") >> 2
        if value < TWO_BYTE_LIMIT:
            raise InvalidEncoding(f"Non-canonical compact encoding of {value}")
        return value
    reader.read_byte()
    byte_count = (prefix >> 2) + 4
    value = int.from_bytes(reader.read(byte_count), "little")
    if value < FOUR_BYTE_LIMIT or (byte_count > 4 and value >> (8 * (byte_count - 1)) == 0):
        raise InvalidEncoding(f"Non-canonical compact encoding of {value}")
    return value
