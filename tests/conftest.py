# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: a small flipper-like contract metadata document."""

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from contract_transcode.codec.registry import TypeRegistry
from contract_transcode.metadata.loader import parse_metadata
from contract_transcode.model.contract import ContractMetadata
from contract_transcode.transcoder.resolver import ContractTranscoder

# ###############
# Type Ids
# ###############

U8 = 0
I32 = 1
BOOL = 2
STR = 3
U32 = 4
U128 = 5
OPTION_I32 = 6
VEC_U8 = 7
ARRAY_U8_3 = 8
TUPLE_U8_BOOL = 9
POINT = 10
WRAPPER = 11
COMPACT_U32 = 12
SHAPE = 13
CHAR = 14
UNIT = 15
U64 = 16
VEC_POINT = 17
ACCOUNT_ID = 18
ARRAY_U8_32 = 19
BALANCE = 20
COMPACT_BALANCE = 21
BITVEC = 22
I8 = 23
U256 = 24
I256 = 25
PAIR = 26
MARKER = 27
OPTION_ACCOUNT_ID = 28
TREE = 29
VEC_TREE = 30
COMPACT_U8 = 31
COMPACT_I32 = 32
U16 = 33
HASH = 34
LIST = 35

# The well-known development account and its public key.
ALICE_ADDRESS = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
ALICE_PUBLIC_KEY = bytes.fromhex("d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d")

# ###############
# Document Builders
# ###############


def _entry(type_id: int, type_def: dict[str, Any], path: list[str] | None = None, **extra: Any) -> dict[str, Any]:
    ty: dict[str, Any] = {"def": type_def}
    if path:
        ty["path"] = path
    ty.update(extra)
    return {"id": type_id, "type": ty}


def _prim(type_id: int, name: str) -> dict[str, Any]:
    return _entry(type_id, {"primitive": name})


def _field(type_id: int, name: str | None = None, type_name: str | None = None) -> dict[str, Any]:
    f: dict[str, Any] = {"type": type_id}
    if name is not None:
        f["name"] = name
    if type_name is not None:
        f["typeName"] = type_name
    return f


def _arg(label: str, type_id: int, display: str, indexed: bool | None = None) -> dict[str, Any]:
    a: dict[str, Any] = {"label": label, "type": {"type": type_id, "displayName": [display]}}
    if indexed is not None:
        a["indexed"] = indexed
    return a


TYPES: list[dict[str, Any]] = [
    _prim(U8, "u8"),
    _prim(I32, "i32"),
    _prim(BOOL, "bool"),
    _prim(STR, "str"),
    _prim(U32, "u32"),
    _prim(U128, "u128"),
    _entry(
        OPTION_I32,
        {
            "variant": {
                "variants": [
                    {"name": "None", "index": 0},
                    {"name": "Some", "index": 1, "fields": [_field(I32, type_name="T")]},
                ]
            }
        },
        ["Option"],
        params=[{"name": "T", "type": I32}],
    ),
    _entry(VEC_U8, {"sequence": {"type": U8}}),
    _entry(ARRAY_U8_3, {"array": {"len": 3, "type": U8}}),
    _entry(TUPLE_U8_BOOL, {"tuple": [U8, BOOL]}),
    _entry(
        POINT,
        {"composite": {"fields": [_field(I32, "x", "i32"), _field(I32, "y", "i32")]}},
        ["flipper", "Point"],
        docs=["A point on the plane."],
    ),
    _entry(WRAPPER, {"composite": {"fields": [_field(U8, "value", "u8")]}}, ["flipper", "Wrapper"]),
    _entry(COMPACT_U32, {"compact": {"type": U32}}),
    _entry(
        SHAPE,
        {
            "variant": {
                "variants": [
                    {"name": "Circle", "index": 0, "fields": [_field(U32, "radius")]},
                    {"name": "Square", "index": 1, "fields": [_field(U32)]},
                    {"name": "Empty", "index": 2},
                    {"name": "Rect", "index": 5, "fields": [_field(U32, "w"), _field(U32, "h")]},
                ]
            }
        },
        ["flipper", "Shape"],
    ),
    _prim(CHAR, "char"),
    _entry(UNIT, {"tuple": []}),
    _prim(U64, "u64"),
    _entry(VEC_POINT, {"sequence": {"type": POINT}}),
    _entry(
        ACCOUNT_ID,
        {"composite": {"fields": [_field(ARRAY_U8_32, type_name="[u8; 32]")]}},
        ["ink_primitives", "types", "AccountId"],
    ),
    _entry(ARRAY_U8_32, {"array": {"len": 32, "type": U8}}),
    _entry(BALANCE, {"composite": {"fields": [_field(U128)]}}, ["flipper", "Balance"]),
    _entry(COMPACT_BALANCE, {"compact": {"type": BALANCE}}),
    _entry(BITVEC, {"bitsequence": {"bit_store_type": U8, "bit_order_type": UNIT}}),
    _prim(I8, "i8"),
    _prim(U256, "u256"),
    _prim(I256, "i256"),
    _entry(PAIR, {"composite": {"fields": [_field(U8), _field(BOOL)]}}, ["flipper", "Pair"]),
    _entry(MARKER, {"composite": {}}, ["flipper", "Marker"]),
    _entry(
        OPTION_ACCOUNT_ID,
        {
            "variant": {
                "variants": [
                    {"name": "None", "index": 0},
                    {"name": "Some", "index": 1, "fields": [_field(ACCOUNT_ID)]},
                ]
            }
        },
        ["Option"],
        params=[{"name": "T", "type": ACCOUNT_ID}],
    ),
    _entry(TREE, {"composite": {"fields": [_field(U8, "value"), _field(VEC_TREE, "children")]}}, ["flipper", "Tree"]),
    _entry(VEC_TREE, {"sequence": {"type": TREE}}),
    _entry(COMPACT_U8, {"compact": {"type": U8}}),
    _entry(COMPACT_I32, {"compact": {"type": I32}}),
    _prim(U16, "u16"),
    _entry(
        HASH,
        {"composite": {"fields": [_field(ARRAY_U8_32, type_name="[u8; 32]")]}},
        ["ink_primitives", "types", "Hash"],
    ),
    _entry(
        LIST,
        {
            "variant": {
                "variants": [
                    {"name": "Nil", "index": 0},
                    {"name": "Cons", "index": 1, "fields": [_field(U8), _field(LIST)]},
                ]
            }
        },
        ["flipper", "List"],
    ),
]

SPEC: dict[str, Any] = {
    "constructors": [
        {
            "label": "new",
            "selector": "0x9bae9d5e",
            "args": [_arg("init_value", BOOL, "bool")],
            "returnType": None,
            "payable": False,
            "docs": ["Creates a new flipper."],
        },
        {"label": "default", "selector": "0xed4b9d1b", "args": [], "payable": True},
    ],
    "messages": [
        {"label": "inc", "selector": "0xBABABABA", "args": [_arg("by", I32, "i32")], "mutates": True},
        {
            "label": "get",
            "selector": "0xCACACACA",
            "args": [],
            "returnType": {"type": I32, "displayName": ["i32"]},
            "mutates": False,
        },
        {"label": "flip", "selector": "0x633aa551", "args": [], "mutates": True},
        {
            "label": "set_point",
            "selector": "0x01020304",
            "args": [_arg("p", POINT, "Point"), _arg("o", OPTION_I32, "Option")],
            "returnType": {"type": UNIT, "displayName": []},
            "mutates": True,
        },
        {"label": "greet", "selector": "0x0a0b0c0d", "args": [_arg("name", STR, "String")]},
    ],
    "events": [
        {
            "label": "Flipped",
            "args": [_arg("value", BOOL, "bool", indexed=True)],
            "signature_topic": "0x" + "11" * 32,
        },
        {
            "label": "Transferred",
            "args": [
                _arg("from", OPTION_ACCOUNT_ID, "Option", indexed=True),
                _arg("value", U128, "Balance", indexed=False),
            ],
            "signature_topic": "0x" + "22" * 32,
        },
    ],
    "environment": {
        "accountId": {"type": ACCOUNT_ID, "displayName": ["AccountId"]},
        "balance": {"type": U128, "displayName": ["Balance"]},
        "hash": {"type": ARRAY_U8_32, "displayName": ["Hash"]},
        "timestamp": {"type": U64, "displayName": ["Timestamp"]},
        "blockNumber": {"type": U32, "displayName": ["BlockNumber"]},
    },
}


def metadata_document() -> dict[str, Any]:
    """Return a fresh copy of the bare metadata document."""
    return copy.deepcopy({"types": TYPES, "spec": SPEC})


# ###############
# Fixtures
# ###############


@pytest.fixture
def metadata() -> ContractMetadata:
    return parse_metadata(json.dumps(metadata_document()))


@pytest.fixture
def registry(metadata: ContractMetadata) -> TypeRegistry:
    return metadata.registry


@pytest.fixture
def transcoder(metadata: ContractMetadata) -> ContractTranscoder:
    return ContractTranscoder(metadata)


@pytest.fixture
def metadata_file(tmp_path: Path) -> Path:
    """A ``.contract`` bundle on disk wrapping the metadata document."""
    bundle = {"source": {"hash": "0x00", "language": "ink! 5.0.0"}, "contract": {"name": "flipper"}, "version": 5}
    bundle.update(metadata_document())
    path = tmp_path / "flipper.contract"
    path.write_text(json.dumps(bundle), encoding="utf-8")
    return path
