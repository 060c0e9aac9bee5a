# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors of the contract metadata type registry."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Primitive types supported by the type registry."""

    BOOL = "bool"
    CHAR = "char"
    STR = "str"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    I256 = "i256"

    @property
    def is_integer(self) -> bool:
        """Return True for the fixed-width integer kinds."""
        return self.value[0] in "ui"

    @property
    def is_signed(self) -> bool:
        """Return True for the signed integer kinds."""
        return self.value[0] == "i"

    @property
    def bits(self) -> int:
        """Declared bit width of an integer kind."""
        if not self.is_integer:
            raise ValueError(f"{self.value} is not an integer primitive")
        return int(self.value[1:])

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive ``(min, max)`` range of an integer kind."""
        bits = self.bits
        if self.is_signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1


class _Descriptor(BaseModel):
    model_config = ConfigDict(frozen=True)


class Field(_Descriptor):
    """A field of a composite type or of a variant case."""

    name: str | None = None
    type_id: int
    type_name: str | None = None
    docs: tuple[str, ...] = ()


class PrimitiveDef(_Descriptor):
    """A primitive type: bool, char, str or a fixed-width integer."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveKind


class CompactDef(_Descriptor):
    """A variable-length encoded integer wrapping another type."""

    kind: Literal["compact"] = "compact"
    type_param: int


class CompositeDef(_Descriptor):
    """A struct-like type with named or unnamed fields."""

    kind: Literal["composite"] = "composite"
    fields: tuple[Field, ...] = ()


class VariantCase(_Descriptor):
    """One case of a variant type."""

    name: str
    # Encoded as a single discriminant byte.
    index: int = _Field(ge=0, le=255)
    fields: tuple[Field, ...] = ()
    docs: tuple[str, ...] = ()


class VariantDef(_Descriptor):
    """A tagged union of named cases."""

    kind: Literal["variant"] = "variant"
    variants: tuple[VariantCase, ...] = ()


class SequenceDef(_Descriptor):
    """A variable-length homogeneous sequence."""

    kind: Literal["sequence"] = "sequence"
    type_param: int


class ArrayDef(_Descriptor):
    """A fixed-length homogeneous array."""

    kind: Literal["array"] = "array"
    length: int
    type_param: int


class TupleDef(_Descriptor):
    """An ordered, heterogeneous, fixed-arity tuple."""

    kind: Literal["tuple"] = "tuple"
    fields: tuple[int, ...] = ()


class BitSequenceDef(_Descriptor):
    """A bit sequence. Present in real metadata but not transcodable."""

    kind: Literal["bitsequence"] = "bitsequence"
    bit_store_type: int
    bit_order_type: int


# A type definition, discriminated by `kind`.
TypeDef = Annotated[
    PrimitiveDef | CompactDef | CompositeDef | VariantDef | SequenceDef | ArrayDef | TupleDef | BitSequenceDef,
    _Field(discriminator="kind"),
]


class TypeParam(_Descriptor):
    """A generic parameter of a registry type, optionally bound to a concrete type id."""

    name: str
    type_id: int | None = None


class RegistryType(_Descriptor):
    """A single entry of the type registry."""

    id: int
    path: tuple[str, ...] = ()
    params: tuple[TypeParam, ...] = ()
    type_def: TypeDef
    docs: tuple[str, ...] = ()

    @property
    def ident(self) -> str | None:
        """The type's identifier, i.e. the last segment of its path."""
        return self.path[-1] if self.path else None

    @property
    def display_name(self) -> str:
        """A human-readable label for error messages."""
        if self.path:
            return "::".join(self.path)
        return f"<{self.type_def.kind} #{self.id}>"
