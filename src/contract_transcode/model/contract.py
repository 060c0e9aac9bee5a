# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Contract interface entities: constructors, messages, events and environment types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

if TYPE_CHECKING:
    from contract_transcode.codec.registry import TypeRegistry

# ###############
# Public Interface
# ###############

SELECTOR_LENGTH = 4


class _Spec(BaseModel):
    model_config = ConfigDict(frozen=True)


class ArgSpec(_Spec):
    """A named, typed parameter of a constructor, message or event."""

    label: str
    type_id: int
    display_name: tuple[str, ...] = ()
    indexed: bool = False
    docs: tuple[str, ...] = ()


class ConstructorSpec(_Spec):
    """A contract constructor."""

    label: str
    selector: bytes = _Field(min_length=SELECTOR_LENGTH, max_length=SELECTOR_LENGTH)
    args: tuple[ArgSpec, ...] = ()
    return_type: int | None = None
    payable: bool = False
    docs: tuple[str, ...] = ()


class MessageSpec(ConstructorSpec):
    """A contract message (callable function)."""

    mutates: bool = False


class EventSpec(_Spec):
    """A contract event."""

    label: str
    args: tuple[ArgSpec, ...] = ()
    signature_topic: bytes | None = None
    docs: tuple[str, ...] = ()

    @property
    def topic_indices(self) -> frozenset[int]:
        """Positions of the arguments marked as indexed (topic) fields."""
        return frozenset(i for i, arg in enumerate(self.args) if arg.indexed)


class EnvironmentSpec(_Spec):
    """Type ids of the host-provided environment types the contract was built against."""

    account_id: int | None = None
    balance: int | None = None
    hash: int | None = None
    timestamp: int | None = None
    block_number: int | None = None

    def type_id_for(self, field_name: str) -> int | None:
        """Return the type id of an environment field by its node-side name."""
        if field_name not in type(self).model_fields:
            return None
        return getattr(self, field_name)


class ContractSpec(_Spec):
    """The callable surface of a contract."""

    constructors: tuple[ConstructorSpec, ...] = ()
    messages: tuple[MessageSpec, ...] = ()
    events: tuple[EventSpec, ...] = ()
    environment: EnvironmentSpec | None = None


@dataclass(frozen=True)
class ContractMetadata:
    """A loaded metadata document: the type registry plus the contract spec."""

    registry: TypeRegistry
    spec: ContractSpec
