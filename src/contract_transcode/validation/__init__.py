# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compatibility checks between a contract and the chain it targets."""

from contract_transcode.validation.environment import (
    EnvironmentCheckError,
    check_contract_environment,
    check_environment,
)

__all__ = [
    "EnvironmentCheckError",
    "check_contract_environment",
    "check_environment",
]
