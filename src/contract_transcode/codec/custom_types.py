# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Custom transcoders for well-known environment types.

Some types are better written and shown in their conventional notation
than structurally. They are selected by their registry path:

- account ids (``AccountId``, ``AccountId32``) are written and shown as
  SS58 addresses, and may also be given as a 32-byte literal;
- hashes (``Hash``, ``H256``) are shown as byte literals. Encoding them
  needs no special case since a byte literal already matches the
  ``[u8; 32]`` they wrap.
"""

from __future__ import annotations

from collections.abc import Callable

from substrateinterface.utils.ss58 import ss58_decode, ss58_encode

from contract_transcode.codec.reader import ByteReader
from contract_transcode.errors import LengthMismatch, TypeMismatch
from contract_transcode.model.types import RegistryType
from contract_transcode.model.values import Bytes, String, Value

# ###############
# Public Interface
# ###############

# Address format used when showing account ids (the generic Substrate prefix).
SS58_FORMAT = 42

ACCOUNT_ID_LENGTH = 32
HASH_LENGTH = 32

ACCOUNT_ID_PATHS: frozenset[tuple[str, ...]] = frozenset(
    {
        ("sp_core", "crypto", "AccountId32"),
        ("ink_primitives", "types", "AccountId"),
    }
)
HASH_PATHS: frozenset[tuple[str, ...]] = frozenset(
    {
        ("primitive_types", "H256"),
        ("ink_primitives", "types", "Hash"),
    }
)

Encoder = Callable[[Value], bytes]
Decoder = Callable[[ByteReader], Value]


def custom_encoder(ty: RegistryType) -> Encoder | None:
    """Return the custom encoder for *ty*, or None to encode it structurally."""
    if ty.path in ACCOUNT_ID_PATHS:
        return encode_account_id
    return None


def custom_decoder(ty: RegistryType) -> Decoder | None:
    """Return the custom decoder for *ty*, or None to decode it structurally."""
    if ty.path in ACCOUNT_ID_PATHS:
        return decode_account_id
    if ty.path in HASH_PATHS:
        return decode_hash
    return None


def encode_account_id(value: Value) -> bytes:
    """Encode an SS58 address string or a 32-byte literal as an account id.

    Raises:
        TypeMismatch: If the value is neither, or the address is invalid.
        LengthMismatch: If the value does not hold exactly 32 bytes.
    """
    if isinstance(value, Bytes):
        data = value.value
    elif isinstance(value, String):
        try:
            data = bytes.fromhex(ss58_decode(value.value).removeprefix("0x"))
        except ValueError as exc:
            raise TypeMismatch(f"Invalid SS58 address {value.value!r}: {exc}") from exc
    else:
        found = type(value).__name__
        raise TypeMismatch(f"Expected an SS58 address or a byte literal for an account id, found {found}")
    if len(data) != ACCOUNT_ID_LENGTH:
        raise LengthMismatch(ACCOUNT_ID_LENGTH, len(data), "AccountId")
    return data


def decode_account_id(reader: ByteReader) -> Value:
    return String(ss58_encode(reader.read(ACCOUNT_ID_LENGTH), ss58_format=SS58_FORMAT))


def decode_hash(reader: ByteReader) -> Value:
    return Bytes(reader.read(HASH_LENGTH))
