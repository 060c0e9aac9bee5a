# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type-directed encoder: values to wire bytes.

The encoder walks the type registry starting at a type id and checks the
value against each descriptor it meets. Output is collected in a private
buffer that is only returned once the whole value has been encoded.
"""

from __future__ import annotations

from collections.abc import Sequence

from contract_transcode.codec.compact import encode_compact
from contract_transcode.codec.custom_types import custom_encoder
from contract_transcode.codec.registry import MAX_TYPE_DEPTH, TypeRegistry
from contract_transcode.errors import (
    IntegerOverflow,
    LengthMismatch,
    MissingField,
    TypeMismatch,
    UnknownField,
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
    VariantDef,
)
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


def encode(value: Value, type_id: int, registry: TypeRegistry) -> bytes:
    """Encode *value* as the registry type *type_id*.

    Args:
        value: The value to encode, typically produced by the literal parser.
        type_id: Id of the expected type in *registry*.
        registry: The type registry describing the contract.

    Returns:
        The encoded bytes.

    Raises:
        TranscodeError: A subclass describing why the value does not match
            the type (``TypeMismatch``, ``IntegerOverflow``, ``MissingField``,
            ``LengthMismatch``, ``VariantNotFound`` and so on).
    """
    encoder = _Encoder(registry)
    encoder.encode(value, type_id)
    return bytes(encoder.output)


# ################
# Implementation
# ################


def _describe(value: Value) -> str:
    ident = getattr(value, "ident", None)
    name = type(value).__name__
    return f"{name} '{ident}'" if ident else name


def _check_bounds(n: int, kind: PrimitiveKind) -> None:
    lo, hi = kind.bounds
    if not lo <= n <= hi:
        raise IntegerOverflow(n, kind.value)


def _expect_integer(value: Value, kind: PrimitiveKind, target: str) -> int:
    if isinstance(value, (UInt, Int)):
        return value.value
    if isinstance(value, Bytes) and not kind.is_signed:
        # Hex literal, most significant byte first.
        return int.from_bytes(value.value, "big")
    raise TypeMismatch(f"Expected an integer for {target}, found {_describe(value)}")


class _Encoder:
    """Recursive encoder state: the registry and the output buffer."""

    def __init__(self, registry: TypeRegistry) -> None:
        self._registry = registry
        self.output = bytearray()
        self._depth = 0

    def encode(self, value: Value, type_id: int) -> None:
        """Append the encoding of *value* as type *type_id*."""
        if self._depth >= MAX_TYPE_DEPTH:
            raise TypeMismatch(f"Type nesting exceeds {MAX_TYPE_DEPTH} levels")
        self._depth += 1
        try:
            self._encode_type(value, type_id)
        finally:
            self._depth -= 1

    def _encode_type(self, value: Value, type_id: int) -> None:
        ty = self._registry.resolve(type_id)
        custom = custom_encoder(ty)
        if custom is not None:
            self.output += custom(value)
            return
        type_def = ty.type_def
        if isinstance(type_def, PrimitiveDef):
            self._encode_primitive(type_def.primitive, value)
        elif isinstance(type_def, CompactDef):
            self._encode_compact(ty, type_def, value)
        elif isinstance(type_def, CompositeDef):
            self._encode_fields(type_def.fields, value, ty.display_name)
        elif isinstance(type_def, VariantDef):
            self._encode_variant(ty, type_def, value)
        elif isinstance(type_def, SequenceDef):
            self._encode_sequence(type_def.type_param, value, None, ty.display_name)
        elif isinstance(type_def, ArrayDef):
            self._encode_sequence(type_def.type_param, value, type_def.length, ty.display_name)
        elif isinstance(type_def, TupleDef):
            self._encode_tuple(type_def.fields, value, ty.display_name)
        elif isinstance(type_def, BitSequenceDef):
            raise UnsupportedType(f"Bit sequences are not supported ({ty.display_name})")

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _encode_primitive(self, kind: PrimitiveKind, value: Value) -> None:
        if kind == PrimitiveKind.BOOL:
            if not isinstance(value, Bool):
                raise TypeMismatch(f"Expected a bool, found {_describe(value)}")
            self.output.append(1 if value.value else 0)
        elif kind == PrimitiveKind.CHAR:
            if not isinstance(value, Char):
                raise TypeMismatch(f"Expected a char, found {_describe(value)}")
            self.output += ord(value.value).to_bytes(4, "little")
        elif kind == PrimitiveKind.STR:
            if not isinstance(value, String):
                raise TypeMismatch(f"Expected a string, found {_describe(value)}")
            try:
                data = value.value.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise TypeMismatch(f"String is not valid UTF-8: {exc}") from exc
            self.output += encode_compact(len(data))
            self.output += data
        else:
            n = _expect_integer(value, kind, kind.value)
            _check_bounds(n, kind)
            self.output += n.to_bytes(kind.bits // 8, "little", signed=kind.is_signed)

    def _encode_compact(self, ty: RegistryType, type_def: CompactDef, value: Value) -> None:
        inner = self._registry.resolve(type_def.type_param)
        inner_def = inner.type_def
        if isinstance(inner_def, CompositeDef) and len(inner_def.fields) == 1:
            # Compact<Wrapper(uN)>: unwrap the single field.
            field = inner_def.fields[0]
            value = self._single_field_value(field, value, inner.display_name)
            inner_def = self._registry.resolve(field.type_id).type_def
        if not (
            isinstance(inner_def, PrimitiveDef)
            and inner_def.primitive.is_integer
            and not inner_def.primitive.is_signed
        ):
            raise TypeMismatch(f"Compact type {ty.display_name} must wrap an unsigned integer")
        n = _expect_integer(value, inner_def.primitive, f"Compact<{inner_def.primitive.value}>")
        _check_bounds(n, inner_def.primitive)
        self.output += encode_compact(n)

    def _single_field_value(self, field: Field, value: Value, label: str) -> Value:
        if isinstance(value, Map):
            for key in value.keys():
                if key != field.name:
                    raise UnknownField(key, label)
            if field.name is None or field.name not in value:
                raise MissingField(field.name or "0", label)
            return value.get(field.name)
        if isinstance(value, Tuple):
            if len(value) != 1:
                raise LengthMismatch(1, len(value), label)
            return value.values[0]
        return value

    # ------------------------------------------------------------------
    # Composites and variants
    # ------------------------------------------------------------------

    def _encode_fields(self, fields: Sequence[Field], value: Value, label: str) -> None:
        """Encode a composite's (or variant case's) fields from *value*."""
        if not fields:
            if isinstance(value, Unit) or (isinstance(value, (Tuple, Map, Seq)) and len(value) == 0):
                return
            raise TypeMismatch(f"Expected no fields for {label}, found {_describe(value)}")

        if isinstance(value, Map):
            names = [f.name for f in fields]
            if None in names:
                raise TypeMismatch(f"{label} has unnamed fields and cannot be built from a map")
            for key in value.keys():
                if key not in names:
                    raise UnknownField(key, label)
            for f in fields:
                if f.name not in value:
                    raise MissingField(f.name, label)
                self.encode(value.get(f.name), f.type_id)
        elif isinstance(value, Tuple) or (isinstance(value, Seq) and len(fields) != 1):
            if len(value) != len(fields):
                raise LengthMismatch(len(fields), len(value), label)
            for f, v in zip(fields, value):
                self.encode(v, f.type_id)
        elif len(fields) == 1:
            # A single-field wrapper accepts the bare inner value.
            self.encode(value, fields[0].type_id)
        else:
            raise TypeMismatch(f"Expected a map or tuple for {label}, found {_describe(value)}")

    def _encode_variant(self, ty: RegistryType, type_def: VariantDef, value: Value) -> None:
        label = ty.display_name
        payload: Value
        if isinstance(value, Opt):
            name = "Some" if value.is_some else "None"
            payload = Tuple((value.value,)) if value.is_some else Tuple()
        elif isinstance(value, (Map, Tuple)):
            if value.ident is None:
                raise TypeMismatch(f"Missing variant identifier for {label}")
            name = value.ident
            payload = value
        else:
            raise TypeMismatch(f"Expected a variant of {label}, found {_describe(value)}")

        case = next((c for c in type_def.variants if c.name == name), None)
        if case is None:
            raise VariantNotFound(f"No variant '{name}' found for type {label}")
        self.output.append(case.index)
        self._encode_fields(case.fields, payload, f"{label}::{name}")

    # ------------------------------------------------------------------
    # Sequences, arrays and tuples
    # ------------------------------------------------------------------

    def _encode_sequence(self, elem_id: int, value: Value, length: int | None, label: str) -> None:
        """Encode a sequence (``length`` None, length-prefixed) or a fixed array."""
        if isinstance(value, Bytes):
            elem_def = self._registry.resolve(elem_id).type_def
            if not (isinstance(elem_def, PrimitiveDef) and elem_def.primitive == PrimitiveKind.U8):
                raise TypeMismatch(f"A byte literal requires u8 elements for {label}")
            if length is None:
                self.output += encode_compact(len(value.value))
            elif len(value.value) != length:
                raise LengthMismatch(length, len(value.value), label)
            self.output += value.value
            return

        if not isinstance(value, Seq):
            raise TypeMismatch(f"Expected a sequence for {label}, found {_describe(value)}")
        if length is None:
            self.output += encode_compact(len(value))
        elif len(value) != length:
            raise LengthMismatch(length, len(value), label)
        for elem in value:
            self.encode(elem, elem_id)

    def _encode_tuple(self, type_ids: Sequence[int], value: Value, label: str) -> None:
        if not type_ids:
            if isinstance(value, Unit) or (isinstance(value, (Tuple, Seq)) and len(value) == 0):
                return
            raise TypeMismatch(f"Expected () for {label}, found {_describe(value)}")
        if not isinstance(value, (Tuple, Seq)):
            raise TypeMismatch(f"Expected a tuple for {label}, found {_describe(value)}")
        if len(value) != len(type_ids):
            raise LengthMismatch(len(type_ids), len(value), label)
        for type_id, elem in zip(type_ids, value):
            self.encode(elem, type_id)
