# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model: type descriptors, contract entities and transcoded values."""

from contract_transcode.model.contract import (
    SELECTOR_LENGTH,
    ArgSpec,
    ConstructorSpec,
    ContractMetadata,
    ContractSpec,
    EnvironmentSpec,
    EventSpec,
    MessageSpec,
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
    TypeDef,
    TypeParam,
    VariantCase,
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

__all__ = [
    # Type system
    "PrimitiveKind",
    "PrimitiveDef",
    "CompactDef",
    "CompositeDef",
    "VariantDef",
    "VariantCase",
    "SequenceDef",
    "ArrayDef",
    "TupleDef",
    "BitSequenceDef",
    "TypeDef",
    "TypeParam",
    "Field",
    "RegistryType",
    # Contract entities
    "SELECTOR_LENGTH",
    "ArgSpec",
    "ConstructorSpec",
    "MessageSpec",
    "EventSpec",
    "EnvironmentSpec",
    "ContractSpec",
    "ContractMetadata",
    # Values
    "Bool",
    "Char",
    "UInt",
    "Int",
    "String",
    "Bytes",
    "Seq",
    "Tuple",
    "Map",
    "Opt",
    "Unit",
    "Value",
]
