# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the type registry and the byte reader."""

import pytest
from pydantic import ValidationError
from conftest import POINT, U8

from contract_transcode.codec.reader import ByteReader
from contract_transcode.codec.registry import TypeRegistry
from contract_transcode.errors import RegistryResolutionError, UnexpectedEndOfInput
from contract_transcode.model.types import CompositeDef, Field, PrimitiveDef, PrimitiveKind, RegistryType, VariantDef

# ###############
# Helpers
# ###############


def _primitive(type_id: int, kind: PrimitiveKind = PrimitiveKind.U8) -> RegistryType:
    return RegistryType(id=type_id, type_def=PrimitiveDef(primitive=kind))


# ###############
# Type Registry
# ###############


class TestTypeRegistry:
    def test_resolve(self, registry: TypeRegistry) -> None:
        ty = registry.resolve(POINT)
        assert ty.id == POINT
        assert ty.ident == "Point"
        assert ty.display_name == "flipper::Point"
        assert isinstance(ty.type_def, CompositeDef)
        assert [f.name for f in ty.type_def.fields] == ["x", "y"]

    def test_resolve_unknown_id(self, registry: TypeRegistry) -> None:
        with pytest.raises(RegistryResolutionError, match="42000"):
            registry.resolve(42000)

    def test_contains_and_len(self) -> None:
        registry = TypeRegistry([_primitive(0), _primitive(5)])
        assert 0 in registry
        assert 5 in registry
        assert 1 not in registry
        assert len(registry) == 2
        assert [t.id for t in registry] == [0, 5]

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            TypeRegistry([_primitive(0), _primitive(0, PrimitiveKind.BOOL)])

    def test_find_by_path_suffix(self, registry: TypeRegistry) -> None:
        ty = registry.find_by_path("AccountId")
        assert ty is not None
        assert ty.path == ("ink_primitives", "types", "AccountId")
        assert registry.find_by_path("types", "AccountId") is ty
        assert registry.find_by_path("other", "AccountId") is None

    def test_find_composite_skips_other_kinds(self) -> None:
        variant = RegistryType(id=0, path=("a", "Environment"), type_def=VariantDef())
        composite = RegistryType(
            id=1,
            path=("b", "Environment"),
            type_def=CompositeDef(fields=(Field(name="x", type_id=2),)),
        )
        registry = TypeRegistry([variant, composite, _primitive(2)])
        assert registry.find_composite("Environment") is composite
        assert registry.find_composite("Missing") is None

    def test_anonymous_type_display_name(self, registry: TypeRegistry) -> None:
        assert registry.resolve(U8).ident is None
        assert registry.resolve(U8).display_name == "<primitive #0>"

    def test_descriptors_are_immutable(self, registry: TypeRegistry) -> None:
        ty = registry.resolve(POINT)
        with pytest.raises(ValidationError):
            ty.id = 99  # type: ignore[misc]


# ###############
# Primitive Kinds
# ###############


@pytest.mark.parametrize(
    ("kind", "bounds"),
    [
        (PrimitiveKind.U8, (0, 255)),
        (PrimitiveKind.I8, (-128, 127)),
        (PrimitiveKind.U256, (0, 2**256 - 1)),
        (PrimitiveKind.I128, (-(2**127), 2**127 - 1)),
    ],
)
def test_integer_bounds(kind: PrimitiveKind, bounds: tuple[int, int]) -> None:
    assert kind.bounds == bounds


def test_non_integer_kind_has_no_width() -> None:
    assert not PrimitiveKind.STR.is_integer
    with pytest.raises(ValueError):
        _ = PrimitiveKind.BOOL.bits


# ###############
# Byte Reader
# ###############


class TestByteReader:
    def test_read_advances(self) -> None:
        reader = ByteReader(b"\x01\x02\x03")
        assert reader.read(2) == b"\x01\x02"
        assert reader.position == 2
        assert reader.remaining == 1
        assert reader.read_byte() == 3
        assert reader.remaining == 0

    def test_peek_does_not_consume(self) -> None:
        reader = ByteReader(b"\x07")
        assert reader.peek_byte() == 7
        assert reader.remaining == 1

    def test_read_past_end(self) -> None:
        reader = ByteReader(b"\x01")
        with pytest.raises(UnexpectedEndOfInput) as exc_info:
            reader.read(4)
        assert exc_info.value.needed == 4
        assert exc_info.value.available == 1
        assert reader.position == 0

    def test_peek_empty(self) -> None:
        with pytest.raises(UnexpectedEndOfInput):
            ByteReader(b"").peek_byte()
