# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the contract-transcode configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".contract-transcode.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class TranscodeConfig:
    """The parsed configuration of the command-line tool.

    Relative paths are resolved against the directory containing the
    configuration file.

    Attributes:
        metadata: Default contract metadata file.
        node_types: Default node type registry file for ``check-env``.
        pretty: Print decoded values in the multi-line layout.
        log_level: Name of the logging level.
    """

    metadata: Path | None = None
    node_types: Path | None = None
    pretty: bool = False
    log_level: str = "WARNING"


def load_config(path: Path) -> TranscodeConfig:
    """Load and parse a configuration file.

    Args:
        path: Path to the `.contract-transcode.yaml` file.

    Returns:
        A TranscodeConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, base_dir=path.parent, source_label=str(path))


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"metadata", "node-types", "pretty", "log-level"})


def _parse_config(text: str, base_dir: Path, source_label: str = "<string>") -> TranscodeConfig:
    """Parse configuration YAML text into a TranscodeConfig.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    # An empty file is an empty configuration.
    if data is None:
        return TranscodeConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(k) for k in data if k not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    config = TranscodeConfig()
    if "metadata" in data:
        config.metadata = base_dir / _require_string(data, "metadata", source_label)
    if "node-types" in data:
        config.node_types = base_dir / _require_string(data, "node-types", source_label)
    if "pretty" in data:
        if not isinstance(data["pretty"], bool):
            raise ConfigError(f"{source_label}: 'pretty' must be a boolean")
        config.pretty = data["pretty"]
    if "log-level" in data:
        level = _require_string(data, "log-level", source_label).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"{source_label}: 'log-level' must be one of {', '.join(LOG_LEVELS)}")
        config.log_level = level
    return config


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising ConfigError if it is not a string."""
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value
