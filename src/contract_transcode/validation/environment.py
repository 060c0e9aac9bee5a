# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compatibility check between a node's and a contract's environment types.

A contract is compiled against concrete types for the account id, balance,
hash, timestamp and block number of the chain it will run on. These checks
compare those types with the ones a node exports. Type ids are private to
each registry, so the comparison is structural.
"""

from __future__ import annotations

from collections.abc import Callable

from contract_transcode.codec.registry import TypeRegistry
from contract_transcode.model.contract import ContractMetadata
from contract_transcode.model.types import (
    ArrayDef,
    BitSequenceDef,
    CompactDef,
    CompositeDef,
    Field,
    PrimitiveDef,
    RegistryType,
    SequenceDef,
    TupleDef,
    VariantDef,
)

# ###############
# Public Interface
# ###############

ENVIRONMENT_IDENT = "Environment"

# Node environment fields that have no counterpart in the contract.
SKIPPED_FIELDS: frozenset[str] = frozenset({"hasher"})


class EnvironmentCheckError(Exception):
    """Raised when a registry does not expose a usable ``Environment`` type."""


def check_environment(node_registry: TypeRegistry, contract_registry: TypeRegistry) -> str | None:
    """Compare the ``Environment`` composites of a node and of a contract.

    For every field of the node's environment except ``hasher``, the
    contract field with the same name is looked up and both types are
    compared after unwrapping single-field wrapper composites.

    Args:
        node_registry: Type registry exported by the node.
        contract_registry: Type registry of the contract metadata.

    Returns:
        The name of the first field whose types differ (or that the
        contract lacks), or None if the environments are compatible.

    Raises:
        EnvironmentCheckError: If either registry has no ``Environment``
            composite or the node's environment has unnamed fields.
    """
    contract_fields = {f.name: f.type_id for f in _environment_fields(contract_registry, "contract")}
    return _first_divergence(node_registry, contract_registry, contract_fields.get)


def check_contract_environment(node_registry: TypeRegistry, metadata: ContractMetadata) -> str | None:
    """Compare the node's ``Environment`` with the environment table of contract metadata.

    Behaves like :func:`check_environment` but takes the contract side from
    ``spec.environment`` (``account_id``, ``balance``, ``hash``,
    ``timestamp``, ``block_number``).

    Raises:
        EnvironmentCheckError: If the node has no ``Environment`` composite or
            the metadata has no environment section.
    """
    environment = metadata.spec.environment
    if environment is None:
        raise EnvironmentCheckError("The contract metadata does not contain an environment section")
    return _first_divergence(node_registry, metadata.registry, environment.type_id_for)


# ################
# Implementation
# ################


def _environment_fields(registry: TypeRegistry, side: str) -> tuple[Field, ...]:
    env_type = registry.find_composite(ENVIRONMENT_IDENT)
    if env_type is None:
        raise EnvironmentCheckError(f"The {side} type registry does not contain an `{ENVIRONMENT_IDENT}` type")
    assert isinstance(env_type.type_def, CompositeDef)
    return env_type.type_def.fields


def _first_divergence(
    node_registry: TypeRegistry,
    contract_registry: TypeRegistry,
    contract_type_id: Callable[[str], int | None],
) -> str | None:
    comparator = _TypeComparator(node_registry, contract_registry)
    for node_field in _environment_fields(node_registry, "node"):
        if node_field.name is None:
            raise EnvironmentCheckError(f"The node's `{ENVIRONMENT_IDENT}` type has unnamed fields")
        if node_field.name in SKIPPED_FIELDS:
            continue
        contract_id = contract_type_id(node_field.name)
        if contract_id is None or not comparator.same(node_field.type_id, contract_id):
            return node_field.name
    return None


class _TypeComparator:
    """Structural equality of types living in two different registries.

    Pairs that are being compared further up the stack are assumed equal,
    so recursive types terminate.
    """

    def __init__(self, left: TypeRegistry, right: TypeRegistry) -> None:
        self._left = left
        self._right = right
        self._assumed: set[tuple[int, int]] = set()

    def same(self, left_id: int, right_id: int) -> bool:
        left = _unwrap(self._left, left_id)
        right = _unwrap(self._right, right_id)
        key = (left.id, right.id)
        if key in self._assumed:
            return True
        self._assumed.add(key)
        return self._same_def(left, right)

    def _same_all(self, left_ids: tuple[int, ...], right_ids: tuple[int, ...]) -> bool:
        return len(left_ids) == len(right_ids) and all(self.same(a, b) for a, b in zip(left_ids, right_ids))

    def _same_fields(self, left: tuple[Field, ...], right: tuple[Field, ...]) -> bool:
        if [f.name for f in left] != [f.name for f in right]:
            return False
        return self._same_all(tuple(f.type_id for f in left), tuple(f.type_id for f in right))

    def _same_def(self, left: RegistryType, right: RegistryType) -> bool:
        a, b = left.type_def, right.type_def
        if isinstance(a, PrimitiveDef) and isinstance(b, PrimitiveDef):
            return a.primitive == b.primitive
        if isinstance(a, CompactDef) and isinstance(b, CompactDef):
            return self.same(a.type_param, b.type_param)
        if isinstance(a, ArrayDef) and isinstance(b, ArrayDef):
            return a.length == b.length and self.same(a.type_param, b.type_param)
        if isinstance(a, SequenceDef) and isinstance(b, SequenceDef):
            return self.same(a.type_param, b.type_param)
        if isinstance(a, TupleDef) and isinstance(b, TupleDef):
            return self._same_all(a.fields, b.fields)
        if isinstance(a, CompositeDef) and isinstance(b, CompositeDef):
            return self._same_fields(a.fields, b.fields)
        if isinstance(a, VariantDef) and isinstance(b, VariantDef):
            if len(a.variants) != len(b.variants):
                return False
            return all(
                x.name == y.name and x.index == y.index and self._same_fields(x.fields, y.fields)
                for x, y in zip(a.variants, b.variants)
            )
        if isinstance(a, BitSequenceDef) and isinstance(b, BitSequenceDef):
            return self.same(a.bit_store_type, b.bit_store_type) and self.same(a.bit_order_type, b.bit_order_type)
        return False


def _unwrap(registry: TypeRegistry, type_id: int) -> RegistryType:
    """Follow single-field composites down to the wrapped type."""
    seen: set[int] = set()
    ty = registry.resolve(type_id)
    while isinstance(ty.type_def, CompositeDef) and len(ty.type_def.fields) == 1 and ty.id not in seen:
        seen.add(ty.id)
        ty = registry.resolve(ty.type_def.fields[0].type_id)
    return ty
