# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration file of the contract-transcode command-line tool."""

from contract_transcode.workspace.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    TranscodeConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "TranscodeConfig",
    "load_config",
]
