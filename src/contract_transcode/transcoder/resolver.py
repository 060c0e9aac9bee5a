# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dispatch between contract entry points and their wire encoding.

A :class:`ContractTranscoder` is built once from loaded metadata. It indexes
constructors and messages by label and by selector, and events by position
and signature topic, and then uses the literal parser, the encoder and the
decoder to convert whole calls and events.
"""

from __future__ import annotations

import difflib
from collections.abc import Sequence
from pathlib import Path

from contract_transcode.codec.decoder import decode, decode_from
from contract_transcode.codec.encoder import encode
from contract_transcode.codec.reader import ByteReader
from contract_transcode.codec.registry import TypeRegistry
from contract_transcode.errors import (
    AmbiguousName,
    ArityMismatch,
    NotFound,
    TrailingBytes,
    UnknownSelector,
    VariantNotFound,
)
from contract_transcode.metadata.loader import load_metadata
from contract_transcode.model.contract import (
    SELECTOR_LENGTH,
    ConstructorSpec,
    ContractMetadata,
    EventSpec,
    MessageSpec,
)
from contract_transcode.model.values import Map, Tuple, Unit, Value
from contract_transcode.parser.parser import parse_value

# ###############
# Public Interface
# ###############

# Minimum similarity for a "did you mean" suggestion.
SUGGESTION_CUTOFF = 0.7


class ContractTranscoder:
    """Encodes calls and decodes calls, events and return values of one contract.

    The transcoder holds no mutable state after construction and can be
    shared between threads.
    """

    def __init__(self, metadata: ContractMetadata) -> None:
        self._metadata = metadata
        spec = metadata.spec
        self._messages_by_selector = _index_by_selector(spec.messages)
        self._constructors_by_selector = _index_by_selector(spec.constructors)

    @classmethod
    def load(cls, path: Path) -> ContractTranscoder:
        """Create a transcoder from the metadata file at *path*.

        Raises:
            MetadataError: If the file cannot be read or is not valid metadata.
        """
        return cls(load_metadata(path))

    @property
    def metadata(self) -> ContractMetadata:
        return self._metadata

    @property
    def registry(self) -> TypeRegistry:
        return self._metadata.registry

    @property
    def constructors(self) -> tuple[ConstructorSpec, ...]:
        return self._metadata.spec.constructors

    @property
    def messages(self) -> tuple[MessageSpec, ...]:
        return self._metadata.spec.messages

    @property
    def events(self) -> tuple[EventSpec, ...]:
        return self._metadata.spec.events

    def find_constructor(self, name: str) -> ConstructorSpec | None:
        """Return the constructor labelled *name*, or None."""
        return next((c for c in self.constructors if c.label == name), None)

    def find_message(self, name: str) -> MessageSpec | None:
        """Return the message labelled *name*, or None."""
        return next((m for m in self.messages if m.label == name), None)

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    def encode_call(self, name: str, args: Sequence[str]) -> bytes:
        """Encode a constructor or message call from literal argument strings.

        Args:
            name: Label of the constructor or message.
            args: One literal per declared argument, in declaration order.

        Returns:
            The 4-byte selector followed by each encoded argument.

        Raises:
            NotFound: If no constructor or message has that label.
            AmbiguousName: If both a constructor and a message have that label.
            ArityMismatch: If the number of arguments is wrong.
            ParseError: If an argument is not a valid literal.
            TranscodeError: Any encoder failure for an argument.
        """
        entry = self._find_callable(name)
        if len(args) != len(entry.args):
            raise ArityMismatch(name, len(entry.args), len(args))
        encoded = bytearray(entry.selector)
        for arg_spec, text in zip(entry.args, args):
            encoded += encode(parse_value(text), arg_spec.type_id, self.registry)
        return bytes(encoded)

    def decode_call(self, data: bytes) -> tuple[str, Value]:
        """Decode call data, looking the selector up among messages, then constructors.

        Returns:
            The entry label and a Tuple of the decoded arguments tagged with it.

        Raises:
            UnknownSelector: If no message or constructor has the selector.
            TrailingBytes: If bytes remain after the last argument.
        """
        selector = _selector_of(data)
        entry = self._messages_by_selector.get(selector) or self._constructors_by_selector.get(selector)
        if entry is None:
            raise UnknownSelector(selector)
        return entry.label, self._decode_args(entry, data)

    def decode_message(self, data: bytes) -> tuple[str, Value]:
        """Like :meth:`decode_call`, but only messages are considered."""
        selector = _selector_of(data)
        entry = self._messages_by_selector.get(selector)
        if entry is None:
            raise UnknownSelector(selector, "contract messages")
        return entry.label, self._decode_args(entry, data)

    def decode_constructor(self, data: bytes) -> tuple[str, Value]:
        """Like :meth:`decode_call`, but only constructors are considered."""
        selector = _selector_of(data)
        entry = self._constructors_by_selector.get(selector)
        if entry is None:
            raise UnknownSelector(selector, "contract constructors")
        return entry.label, self._decode_args(entry, data)

    def decode_return(self, name: str, data: bytes) -> Value:
        """Decode the return value of the constructor or message labelled *name*.

        An entry without a declared return type returns Unit and accepts
        only empty data.
        """
        entry = self._find_callable(name)
        if entry.return_type is None:
            if data:
                raise TrailingBytes(data, f"return value of '{name}'")
            return Unit()
        return decode(data, entry.return_type, self.registry)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def decode_event(self, data: bytes) -> tuple[str, Value]:
        """Decode event data prefixed by the event's one-byte declaration index.

        Returns:
            The event label and a Map of its fields tagged with it.

        Raises:
            VariantNotFound: If the index does not name a declared event.
            TrailingBytes: If bytes remain after the last field.
        """
        reader = ByteReader(data)
        index = reader.read_byte()
        if index >= len(self.events):
            raise VariantNotFound(f"No event with index {index} found in contract metadata")
        event = self.events[index]
        return event.label, self._decode_event_fields(event, reader)

    def decode_event_by_topic(self, signature_topic: bytes, data: bytes) -> tuple[str, Value]:
        """Decode event data whose event is identified by its signature topic.

        Raises:
            UnknownSelector: If no event carries *signature_topic*.
            TrailingBytes: If bytes remain after the last field.
        """
        event = next((e for e in self.events if e.signature_topic == signature_topic), None)
        if event is None:
            raise UnknownSelector(signature_topic, "contract events")
        return event.label, self._decode_event_fields(event, ByteReader(data))

    # ------------------------------------------------------------------
    # Single values
    # ------------------------------------------------------------------

    def encode_value(self, type_id: int, text: str) -> bytes:
        """Parse *text* and encode it as the registry type *type_id*."""
        return encode(parse_value(text), type_id, self.registry)

    def decode_value(self, type_id: int, data: bytes) -> Value:
        """Decode *data* as exactly one value of the registry type *type_id*."""
        return decode(data, type_id, self.registry)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find_callable(self, name: str) -> ConstructorSpec:
        constructor = self.find_constructor(name)
        message = self.find_message(name)
        if constructor is not None and message is not None:
            raise AmbiguousName(name)
        entry = constructor or message
        if entry is None:
            known = [c.label for c in self.constructors] + [m.label for m in self.messages]
            matches = difflib.get_close_matches(name, known, n=1, cutoff=SUGGESTION_CUTOFF)
            raise NotFound(name, known, matches[0] if matches else None)
        return entry

    def _decode_args(self, entry: ConstructorSpec, data: bytes) -> Value:
        reader = ByteReader(data[SELECTOR_LENGTH:])
        values = tuple(decode_from(reader, arg.type_id, self.registry) for arg in entry.args)
        if reader.remaining:
            raise TrailingBytes(reader.rest(), f"arguments of '{entry.label}'")
        return Tuple(values, entry.label)

    def _decode_event_fields(self, event: EventSpec, reader: ByteReader) -> Value:
        entries = tuple((arg.label, decode_from(reader, arg.type_id, self.registry)) for arg in event.args)
        if reader.remaining:
            raise TrailingBytes(reader.rest(), f"event '{event.label}'")
        return Map(entries, event.label)


# ################
# Implementation
# ################


def _index_by_selector(entries: Sequence[ConstructorSpec]) -> dict[bytes, ConstructorSpec]:
    index: dict[bytes, ConstructorSpec] = {}
    for entry in entries:
        index.setdefault(entry.selector, entry)
    return index


def _selector_of(data: bytes) -> bytes:
    # A short input reports the missing bytes rather than an unknown selector.
    return ByteReader(data).read(SELECTOR_LENGTH)
