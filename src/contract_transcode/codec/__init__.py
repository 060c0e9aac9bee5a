# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type registry and the type-directed binary encoder and decoder."""

from contract_transcode.codec.compact import decode_compact, encode_compact
from contract_transcode.codec.decoder import decode, decode_from
from contract_transcode.codec.encoder import encode
from contract_transcode.codec.reader import ByteReader
from contract_transcode.codec.registry import TypeRegistry

__all__ = [
    "ByteReader",
    "TypeRegistry",
    "decode",
    "decode_compact",
    "decode_from",
    "encode",
    "encode_compact",
]
