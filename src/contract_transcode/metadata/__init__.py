# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of contract metadata documents and node type registries."""

from contract_transcode.metadata.loader import (
    MetadataError,
    load_metadata,
    load_registry,
    parse_hex,
    parse_metadata,
    parse_registry,
)

__all__ = [
    "MetadataError",
    "load_metadata",
    "load_registry",
    "parse_hex",
    "parse_metadata",
    "parse_registry",
]
