# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of contract metadata and node type registries from JSON.

Contract metadata is read from a ``.contract`` bundle, a ``metadata.json``
file or a version-wrapped document such as ``{"V3": {...}}``. The type
registry uses the portable JSON layout::

    {"id": 3, "type": {"path": ["Option"], "params": [...],
                       "def": {"variant": {"variants": [...]}}, "docs": []}}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from contract_transcode.codec.registry import TypeRegistry
from contract_transcode.model.contract import (
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

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class MetadataError(Exception):
    """Raised when a metadata or type registry document is invalid or cannot be loaded."""


def load_metadata(path: Path) -> ContractMetadata:
    """Load contract metadata from a JSON file.

    Args:
        path: Path to a ``.contract`` bundle or a ``metadata.json`` file.

    Returns:
        The type registry and the contract spec.

    Raises:
        MetadataError: If the file cannot be read or the document is invalid.
    """
    metadata = parse_metadata(_read_text(path), source_label=str(path))
    logger.debug(
        "Loaded metadata from %s: %d types, %d constructors, %d messages, %d events",
        path,
        len(metadata.registry),
        len(metadata.spec.constructors),
        len(metadata.spec.messages),
        len(metadata.spec.events),
    )
    return metadata


def parse_metadata(text: str, source_label: str = "<string>") -> ContractMetadata:
    """Parse contract metadata from JSON text.

    Raises:
        MetadataError: If the text is not valid JSON or not a metadata document.
    """
    obj = _parse_json(text, source_label)
    if not isinstance(obj, dict):
        raise MetadataError(f"{source_label}: metadata must be a JSON object")
    abi = _unwrap_versioned(obj, source_label)
    for key in ("types", "spec"):
        if key not in abi:
            raise MetadataError(f"{source_label}: missing required field '{key}'")
    try:
        registry = TypeRegistry(_registry_type_from_dict(t) for t in abi["types"])
        spec = _contract_spec_from_dict(abi["spec"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MetadataError(f"{source_label}: invalid metadata: {_describe_error(exc)}") from exc
    return ContractMetadata(registry=registry, spec=spec)


def load_registry(path: Path) -> TypeRegistry:
    """Load a bare type registry, e.g. the one exported by a node.

    Raises:
        MetadataError: If the file cannot be read or the document is invalid.
    """
    registry = parse_registry(_read_text(path), source_label=str(path))
    logger.debug("Loaded type registry from %s: %d types", path, len(registry))
    return registry


def parse_registry(text: str, source_label: str = "<string>") -> TypeRegistry:
    """Parse a type registry given as a JSON list of entries or an object with a ``types`` key.

    Raises:
        MetadataError: If the text is not valid JSON or not a type registry.
    """
    obj = _parse_json(text, source_label)
    if isinstance(obj, dict):
        if "types" not in obj:
            raise MetadataError(f"{source_label}: missing required field 'types'")
        obj = obj["types"]
    if not isinstance(obj, list):
        raise MetadataError(f"{source_label}: type registry must be a list of type entries")
    try:
        return TypeRegistry(_registry_type_from_dict(t) for t in obj)
    except (KeyError, TypeError, ValueError) as exc:
        raise MetadataError(f"{source_label}: invalid type registry: {_describe_error(exc)}") from exc


def parse_hex(text: str) -> bytes:
    """Decode a hex string with an optional ``0x`` prefix.

    Raises:
        ValueError: If the text is not an even number of hex digits.
    """
    digits = text[2:] if text[:2] in ("0x", "0X") else text
    return bytes.fromhex(digits)


# ################
# Implementation
# ################

# Keys under which a versioned wrapper nests the actual document.
_VERSION_KEYS = ("V5", "V4", "V3", "V2", "V1")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise MetadataError(f"Metadata file not found: {path}") from None
    except OSError as exc:
        raise MetadataError(f"Cannot read metadata file: {exc}") from exc


def _parse_json(text: str, source_label: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MetadataError(f"Invalid JSON in {source_label}: {exc}") from exc


def _unwrap_versioned(obj: dict[str, Any], source_label: str) -> dict[str, Any]:
    for key in _VERSION_KEYS:
        if key in obj and "spec" not in obj:
            inner = obj[key]
            if not isinstance(inner, dict):
                raise MetadataError(f"{source_label}: '{key}' must be a JSON object")
            logger.debug("Unwrapped %s metadata in %s", key, source_label)
            return inner
    return obj


def _describe_error(exc: Exception) -> str:
    if isinstance(exc, KeyError):
        return f"missing field {exc}"
    if isinstance(exc, ValidationError):
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return f"{location}: {first['msg']}" if location else first["msg"]
    return str(exc)


# ------------------------------------------------------------------
# Type registry
# ------------------------------------------------------------------


def _registry_type_from_dict(obj: dict[str, Any]) -> RegistryType:
    ty = obj["type"]
    return RegistryType(
        id=obj["id"],
        path=tuple(ty.get("path", [])),
        params=tuple(_type_param_from_dict(p) for p in ty.get("params", [])),
        type_def=_type_def_from_dict(ty["def"]),
        docs=tuple(ty.get("docs", [])),
    )


def _type_param_from_dict(obj: dict[str, Any]) -> TypeParam:
    return TypeParam(name=obj["name"], type_id=obj.get("type"))


def _field_from_dict(obj: dict[str, Any]) -> Field:
    return Field(
        name=obj.get("name"),
        type_id=obj["type"],
        type_name=obj.get("typeName"),
        docs=tuple(obj.get("docs", [])),
    )


def _variant_case_from_dict(obj: dict[str, Any], position: int) -> VariantCase:
    return VariantCase(
        name=obj["name"],
        index=obj.get("index", position),
        fields=tuple(_field_from_dict(f) for f in obj.get("fields", [])),
        docs=tuple(obj.get("docs", [])),
    )


def _type_def_from_dict(obj: dict[str, Any]) -> TypeDef:
    """Decode a type definition from its single-key tagged form."""
    if not isinstance(obj, dict) or len(obj) != 1:
        raise ValueError(f"type definition must have exactly one kind, got {obj!r}")
    ((kind, body),) = obj.items()
    if kind == "primitive":
        return PrimitiveDef(primitive=PrimitiveKind(body))
    if kind == "compact":
        return CompactDef(type_param=body["type"])
    if kind == "composite":
        return CompositeDef(fields=tuple(_field_from_dict(f) for f in body.get("fields", [])))
    if kind == "variant":
        variants = body.get("variants", [])
        return VariantDef(variants=tuple(_variant_case_from_dict(v, i) for i, v in enumerate(variants)))
    if kind == "sequence":
        return SequenceDef(type_param=body["type"])
    if kind == "array":
        return ArrayDef(length=body["len"], type_param=body["type"])
    if kind == "tuple":
        return TupleDef(fields=tuple(body))
    if kind == "bitsequence":
        return BitSequenceDef(bit_store_type=body["bit_store_type"], bit_order_type=body["bit_order_type"])
    raise ValueError(f"unknown type definition kind {kind!r}")


# ------------------------------------------------------------------
# Contract spec
# ------------------------------------------------------------------


def _label_of(obj: dict[str, Any]) -> str:
    # Early metadata versions store the name as a list of path segments.
    if "label" in obj:
        return obj["label"]
    name = obj["name"]
    return "::".join(name) if isinstance(name, list) else name


def _type_ref_id(obj: dict[str, Any] | None) -> int | None:
    if obj is None:
        return None
    return obj["type"]


def _arg_from_dict(obj: dict[str, Any]) -> ArgSpec:
    type_ref = obj["type"]
    return ArgSpec(
        label=_label_of(obj),
        type_id=type_ref["type"],
        display_name=tuple(type_ref.get("displayName", [])),
        indexed=obj.get("indexed", False),
        docs=tuple(obj.get("docs", [])),
    )


def _constructor_from_dict(obj: dict[str, Any]) -> ConstructorSpec:
    return ConstructorSpec(
        label=_label_of(obj),
        selector=parse_hex(obj["selector"]),
        args=tuple(_arg_from_dict(a) for a in obj.get("args", [])),
        return_type=_type_ref_id(obj.get("returnType")),
        payable=obj.get("payable", False),
        docs=tuple(obj.get("docs", [])),
    )


def _message_from_dict(obj: dict[str, Any]) -> MessageSpec:
    return MessageSpec(
        label=_label_of(obj),
        selector=parse_hex(obj["selector"]),
        args=tuple(_arg_from_dict(a) for a in obj.get("args", [])),
        return_type=_type_ref_id(obj.get("returnType")),
        payable=obj.get("payable", False),
        mutates=obj.get("mutates", False),
        docs=tuple(obj.get("docs", [])),
    )


def _event_from_dict(obj: dict[str, Any]) -> EventSpec:
    topic = obj.get("signature_topic")
    return EventSpec(
        label=_label_of(obj),
        args=tuple(_arg_from_dict(a) for a in obj.get("args", [])),
        signature_topic=parse_hex(topic) if topic is not None else None,
        docs=tuple(obj.get("docs", [])),
    )


def _environment_from_dict(obj: dict[str, Any]) -> EnvironmentSpec:
    return EnvironmentSpec(
        account_id=_type_ref_id(obj.get("accountId")),
        balance=_type_ref_id(obj.get("balance")),
        hash=_type_ref_id(obj.get("hash")),
        timestamp=_type_ref_id(obj.get("timestamp")),
        block_number=_type_ref_id(obj.get("blockNumber")),
    )


def _contract_spec_from_dict(obj: dict[str, Any]) -> ContractSpec:
    environment = obj.get("environment")
    return ContractSpec(
        constructors=tuple(_constructor_from_dict(c) for c in obj.get("constructors", [])),
        messages=tuple(_message_from_dict(m) for m in obj.get("messages", [])),
        events=tuple(_event_from_dict(e) for e in obj.get("events", [])),
        environment=_environment_from_dict(environment) if environment is not None else None,
    )
