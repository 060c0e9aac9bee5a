# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type-directed decoder: wire bytes to values.

Mirrors :mod:`contract_transcode.codec.encoder`. Composite and variant
values carry their type or case identifier so that the printer can show
readable output.
"""

from __future__ import annotations

from collections.abc import Sequence

from contract_transcode.codec.compact import decode_compact
from contract_transcode.codec.reader import ByteReader
from contract_transcode.codec.custom_types import custom_decoder
from contract_transcode.codec.registry import MAX_TYPE_DEPTH, TypeRegistry
from contract_transcode.errors import (
    IntegerOverflow,
    InvalidEncoding,
    TrailingBytes,
    TypeMismatch,
    UnsupportedType,
    VariantNotFound,
)
from contract_transcode.model.types import (
    ArrayDef,
    BitSequenceDef,
    CompactDef,
    CompositeDef,
    Field,
    PrimitiveDef,
    PrimitiveKind,
    RegistryType,
    SequenceDef,
    TupleDef,
    VariantCase,
    VariantDef,
)
from contract_transcode.model.values import (
    Bool,
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


def decode(data: bytes, type_id: int, registry: TypeRegistry) -> Value:
    """Decode *data* as exactly one value of type *type_id*.

    Raises:
        TrailingBytes: If bytes remain after the value.
        TranscodeError: Any other decoding failure (``VariantNotFound``,
            ``RegistryResolutionError``, ``InvalidEncoding`` and so on).
    """
    reader = ByteReader(data)
    value = decode_from(reader, type_id, registry)
    if reader.remaining:
        raise TrailingBytes(reader.rest())
    return value


def decode_from(reader: ByteReader, type_id: int, registry: TypeRegistry) -> Value:
    """Decode one value of type *type_id* from *reader*, leaving any remaining bytes unread."""
    return _Decoder(registry, reader).decode(type_id)


def is_option(type_def: VariantDef) -> bool:
    """Return True if *type_def* has the ``None`` / ``Some(T)`` shape."""
    cases = {c.name: c for c in type_def.variants}
    return (
        len(cases) == 2
        and "None" in cases
        and "Some" in cases
        and not cases["None"].fields
        and len(cases["Some"].fields) == 1
    )


# ################
# Implementation
# ################


class _Decoder:
    """Recursive decoder state: the registry and the input cursor."""

    def __init__(self, registry: TypeRegistry, reader: ByteReader) -> None:
        self._registry = registry
        self._reader = reader
        self._depth = 0

    def decode(self, type_id: int) -> Value:
        """Decode the next value as type *type_id*."""
        if self._depth >= MAX_TYPE_DEPTH:
            raise InvalidEncoding(f"Type nesting exceeds {MAX_TYPE_DEPTH} levels")
        self._depth += 1
        try:
            return self._decode_type(type_id)
        finally:
            self._depth -= 1

    def _decode_type(self, type_id: int) -> Value:
        ty = self._registry.resolve(type_id)
        custom = custom_decoder(ty)
        if custom is not None:
            return custom(self._reader)
        type_def = ty.type_def
        if isinstance(type_def, PrimitiveDef):
            return self._decode_primitive(type_def.primitive)
        if isinstance(type_def, CompactDef):
            return self._decode_compact(ty, type_def)
        if isinstance(type_def, CompositeDef):
            return self._decode_fields(type_def.fields, ty.ident)
        if isinstance(type_def, VariantDef):
            return self._decode_variant(ty, type_def)
        if isinstance(type_def, SequenceDef):
            length = decode_compact(self._reader)
            return self._decode_elements(type_def.type_param, length)
        if isinstance(type_def, ArrayDef):
            return self._decode_elements(type_def.type_param, type_def.length)
        if isinstance(type_def, TupleDef):
            if not type_def.fields:
                return Unit()
            return Tuple(tuple(self.decode(field_id) for field_id in type_def.fields))
        if isinstance(type_def, BitSequenceDef):
            raise UnsupportedType(f"Bit sequences are not supported ({ty.display_name})")
        raise TypeMismatch(f"Unknown type definition for {ty.display_name}")

    def _decode_primitive(self, kind: PrimitiveKind) -> Value:
        reader = self._reader
        if kind == PrimitiveKind.BOOL:
            byte = reader.read_byte()
            if byte > 1:
                raise InvalidEncoding(f"Invalid bool byte 0x{byte:02x}")
            return Bool(byte == 1)
        if kind == PrimitiveKind.CHAR:
            code_point = int.from_bytes(reader.read(4), "little")
            if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
                raise InvalidEncoding(f"Invalid char code point {code_point:#x}")
            return Char(chr(code_point))
        if kind == PrimitiveKind.STR:
            length = decode_compact(reader)
            try:
                return String(reader.read(length).decode("utf-8"))
            except UnicodeDecodeError as exc:
                raise InvalidEncoding(f"String is not valid UTF-8: {exc}") from exc
        n = int.from_bytes(reader.read(kind.bits // 8), "little", signed=kind.is_signed)
        return Int(n) if kind.is_signed else UInt(n)

    def _decode_compact(self, ty: RegistryType, type_def: CompactDef) -> Value:
        inner = self._registry.resolve(type_def.type_param)
        inner_def = inner.type_def
        field: Field | None = None
        if isinstance(inner_def, CompositeDef) and len(inner_def.fields) == 1:
            field = inner_def.fields[0]
            inner_def = self._registry.resolve(field.type_id).type_def
        if not (
            isinstance(inner_def, PrimitiveDef)
            and inner_def.primitive.is_integer
            and not inner_def.primitive.is_signed
        ):
            raise TypeMismatch(f"Compact type {ty.display_name} must wrap an unsigned integer")

        n = decode_compact(self._reader)
        if n > inner_def.primitive.bounds[1]:
            raise IntegerOverflow(n, inner_def.primitive.value)
        value = UInt(n)
        if field is None:
            return value
        if field.name is not None:
            return Map(((field.name, value),), inner.ident)
        return Tuple((value,), inner.ident)

    def _decode_fields(self, fields: Sequence[Field], ident: str | None) -> Value:
        """Decode fields into a Map (all named) or a Tuple (unnamed or none)."""
        if fields and all(f.name is not None for f in fields):
            return Map(tuple((f.name, self.decode(f.type_id)) for f in fields), ident)
        if any(f.name is not None for f in fields):
            raise TypeMismatch(f"Fields of '{ident}' must be either all named or all unnamed")
        return Tuple(tuple(self.decode(f.type_id) for f in fields), ident)

    def _decode_variant(self, ty: RegistryType, type_def: VariantDef) -> Value:
        discriminant = self._reader.read_byte()
        case: VariantCase | None = next((c for c in type_def.variants if c.index == discriminant), None)
        if case is None:
            raise VariantNotFound(f"No variant with discriminant {discriminant} found for type {ty.display_name}")
        if is_option(type_def):
            if case.name == "None":
                return Opt(None)
            return Opt(self.decode(case.fields[0].type_id))
        return self._decode_fields(case.fields, case.name)

    def _decode_elements(self, elem_id: int, length: int) -> Value:
        return Seq(tuple(self.decode(elem_id) for _ in range(length)))
