# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Immutable, id-indexed store of type descriptors."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from contract_transcode.errors import RegistryResolutionError
from contract_transcode.model.types import CompositeDef, RegistryType

# ###############
# Public Interface
# ###############

# Deepest type nesting the encoder and decoder will follow.
MAX_TYPE_DEPTH = 100


class TypeRegistry:
    """The type graph of a contract or a node, keyed by numeric type id.

    Descriptors reference each other only by id, so recursive types are
    plain dictionary lookups. The registry is never modified after
    construction and may be shared freely.
    """

    __slots__ = ("_types",)

    def __init__(self, types: Iterable[RegistryType]) -> None:
        by_id: dict[int, RegistryType] = {}
        for ty in types:
            if ty.id in by_id:
                raise ValueError(f"Duplicate type id {ty.id} in registry")
            by_id[ty.id] = ty
        self._types = MappingProxyType(by_id)

    def resolve(self, type_id: int) -> RegistryType:
        """Return the entry for *type_id*.

        Raises:
            RegistryResolutionError: If the id is not present.
        """
        try:
            return self._types[type_id]
        except KeyError:
            raise RegistryResolutionError(type_id) from None

    def find_by_path(self, *segments: str) -> RegistryType | None:
        """Return the first entry whose path ends with *segments*, or None."""
        n = len(segments)
        for ty in self._types.values():
            if len(ty.path) >= n and ty.path[len(ty.path) - n :] == segments:
                return ty
        return None

    def find_composite(self, ident: str) -> RegistryType | None:
        """Return the first composite entry whose identifier is *ident*, or None."""
        for ty in self._types.values():
            if ty.ident == ident and isinstance(ty.type_def, CompositeDef):
                return ty
        return None

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[RegistryType]:
        return iter(self._types.values())
