# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the contract-transcode CLI entry point."""

import json
import sys
from pathlib import Path

import pytest
from conftest import TYPES

from contract_transcode.cli.main import main

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Run main() with *argv* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["contract-transcode", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _write_node_types(tmp_path: Path, types: list) -> Path:
    path = tmp_path / "node-types.json"
    path.write_text(json.dumps(types), encoding="utf-8")
    return path


def _node_types(block_number: str = "u32") -> list:
    """A node registry with an Environment composite matching the shared metadata."""
    return [
        {"id": 0, "type": {"def": {"primitive": "u8"}}},
        {"id": 1, "type": {"def": {"array": {"len": 32, "type": 0}}}},
        {"id": 2, "type": {"path": ["AccountId32"], "def": {"composite": {"fields": [{"type": 1}]}}}},
        {"id": 3, "type": {"def": {"primitive": "u128"}}},
        {"id": 4, "type": {"def": {"primitive": "u64"}}},
        {"id": 5, "type": {"def": {"primitive": block_number}}},
        {
            "id": 6,
            "type": {
                "path": ["node_runtime", "Environment"],
                "def": {
                    "composite": {
                        "fields": [
                            {"name": "account_id", "type": 2},
                            {"name": "balance", "type": 3},
                            {"name": "hash", "type": 1},
                            {"name": "timestamp", "type": 4},
                            {"name": "block_number", "type": 5},
                        ]
                    }
                },
            },
        },
    ]


# ###############
# General
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0
    assert "contract-transcode" in capsys.readouterr().out


def test_missing_metadata(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """Without --metadata or a config file the command fails with a hint."""
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "encode", "flip") == 1
    assert "no contract metadata given" in capsys.readouterr().err


def test_unreadable_metadata(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "encode", "flip", "-m", str(tmp_path / "missing.contract")) == 1
    assert capsys.readouterr().err.startswith("Error: Metadata file not found")


# -------- encode tests --------


def test_encode(metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "encode", "inc", "5", "-m", str(metadata_file)) == 0
    assert capsys.readouterr().out.strip() == "0xbabababa05000000"


def test_encode_unknown_name(metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "encode", "incc", "5", "-m", str(metadata_file)) == 1
    assert "Did you mean 'inc'?" in capsys.readouterr().err


def test_encode_uses_config_metadata(
    metadata_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """The default config file in the working directory supplies the metadata path."""
    (tmp_path / ".contract-transcode.yaml").write_text(f"metadata: {metadata_file.name}\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "encode", "get") == 0
    assert capsys.readouterr().out.strip() == "0xcacacaca"


def test_explicit_config_file(
    metadata_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text(f"metadata: {metadata_file.name}\n", encoding="utf-8")
    assert _run(monkeypatch, "--config", str(config), "encode", "flip") == 0
    assert capsys.readouterr().out.strip() == "0x633aa551"


def test_invalid_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text("colour: red\n", encoding="utf-8")
    assert _run(monkeypatch, "--config", str(config), "encode", "flip") == 1
    assert "unknown field" in capsys.readouterr().err


# -------- decode tests --------


def test_decode_message(metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "decode", "message", "0xbabababa05000000", "-m", str(metadata_file)) == 0
    assert capsys.readouterr().out.strip() == "inc: inc(5)"


def test_decode_constructor(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", "constructor", "9bae9d5e01", "-m", str(metadata_file)) == 0
    assert capsys.readouterr().out.strip() == "new: new(true)"


def test_decode_event(metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "decode", "event", "0x0001", "-m", str(metadata_file)) == 0
    assert capsys.readouterr().out.strip() == "Flipped: Flipped { value: true }"


def test_decode_event_by_topic(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    topic = "0x" + "11" * 32
    assert _run(monkeypatch, "decode", "event", "0x00", "--topic", topic, "-m", str(metadata_file)) == 0
    assert capsys.readouterr().out.strip() == "Flipped: Flipped { value: false }"


def test_decode_pretty(metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "decode", "event", "0x0001", "--pretty", "-m", str(metadata_file)) == 0
    assert capsys.readouterr().out == "Flipped: Flipped {\n    value: true,\n}\n"


def test_decode_topic_only_for_events(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    argv = ("decode", "message", "0xcacacaca", "--topic", "0x11", "-m", str(metadata_file))
    assert _run(monkeypatch, *argv) == 1
    assert "--topic" in capsys.readouterr().err


def test_decode_invalid_hex(metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "decode", "message", "0xzz", "-m", str(metadata_file)) == 1
    assert "'0xzz' is not valid hex data" in capsys.readouterr().err


def test_decode_unknown_selector(
    metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "decode", "message", "deadbeef", "-m", str(metadata_file)) == 1
    assert "0xdeadbeef" in capsys.readouterr().err


# -------- decode-return tests --------


def test_decode_return(metadata_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "decode-return", "get", "0xfeffffff", "-m", str(metadata_file)) == 0
    assert capsys.readouterr().out.strip() == "-2"


# -------- check-env tests --------


def test_check_env_compatible(
    metadata_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    node_types = _write_node_types(tmp_path, _node_types())
    assert _run(monkeypatch, "check-env", str(node_types), "-m", str(metadata_file)) == 0
    assert "compatible" in capsys.readouterr().out


def test_check_env_divergent(
    metadata_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    node_types = _write_node_types(tmp_path, _node_types(block_number="u64"))
    assert _run(monkeypatch, "check-env", str(node_types), "-m", str(metadata_file)) == 1
    assert "'block_number'" in capsys.readouterr().err


def test_check_env_node_without_environment(
    metadata_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    node_types = _write_node_types(tmp_path, TYPES)
    assert _run(monkeypatch, "check-env", str(node_types), "-m", str(metadata_file)) == 1
    assert "Environment" in capsys.readouterr().err


def test_check_env_requires_node_types(
    metadata_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "check-env", "-m", str(metadata_file)) == 1
    assert "no node type registry given" in capsys.readouterr().err
