# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Selector resolution for contract calls, events and return values."""

from contract_transcode.transcoder.resolver import ContractTranscoder

__all__ = [
    "ContractTranscoder",
]
