# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the contract-transcode command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from contract_transcode.errors import TranscodeError
from contract_transcode.metadata.loader import MetadataError, load_metadata, load_registry, parse_hex
from contract_transcode.parser.printer import format_value
from contract_transcode.transcoder.resolver import ContractTranscoder
from contract_transcode.validation.environment import (
    ENVIRONMENT_IDENT,
    EnvironmentCheckError,
    check_contract_environment,
    check_environment,
)
from contract_transcode.workspace.config import CONFIG_FILE_NAME, ConfigError, TranscodeConfig, load_config

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the contract-transcode CLI."""
    parser = argparse.ArgumentParser(
        prog="contract-transcode",
        description="Encode and decode smart contract calls and events using contract metadata",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # encode subcommand
    encode_parser = subparsers.add_parser(
        "encode",
        help="Encode a constructor or message call",
        description="Encode a constructor or message call into hex call data.",
    )
    encode_parser.add_argument("name", help="Label of the constructor or message")
    encode_parser.add_argument("args", nargs="*", help="Argument literals, e.g. 5 or 'Some(\"x\")'")
    _add_metadata_argument(encode_parser)

    # decode subcommand
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode call or event data",
        description="Decode hex-encoded message, constructor or event data.",
    )
    decode_parser.add_argument("kind", choices=["message", "constructor", "event"], help="What the data encodes")
    decode_parser.add_argument("data", help="Hex-encoded data, optionally prefixed with 0x")
    decode_parser.add_argument(
        "--topic",
        default=None,
        help="Signature topic identifying the event (events only; default: leading index byte)",
    )
    _add_metadata_argument(decode_parser)
    _add_pretty_argument(decode_parser)

    # decode-return subcommand
    return_parser = subparsers.add_parser(
        "decode-return",
        help="Decode the return value of a constructor or message",
        description="Decode hex-encoded return data using the declared return type.",
    )
    return_parser.add_argument("name", help="Label of the constructor or message")
    return_parser.add_argument("data", help="Hex-encoded return data, optionally prefixed with 0x")
    _add_metadata_argument(return_parser)
    _add_pretty_argument(return_parser)

    # check-env subcommand
    check_env_parser = subparsers.add_parser(
        "check-env",
        help="Check the contract's environment types against a node",
        description="Compare the environment types of the contract with those exported by a node.",
    )
    check_env_parser.add_argument(
        "node_types",
        nargs="?",
        type=Path,
        default=None,
        help="JSON type registry exported by the node (default: 'node-types' from the config)",
    )
    _add_metadata_argument(check_env_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_metadata_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--metadata",
        "-m",
        type=Path,
        default=None,
        help="Contract metadata (.contract or metadata.json; default: 'metadata' from the config)",
    )


def _add_pretty_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=None,
        help="Print values across multiple indented lines",
    )


def _load_config(args: argparse.Namespace) -> TranscodeConfig:
    """Load the configuration named on the command line, or the default file if present."""
    if args.config is not None:
        return load_config(args.config)
    default = Path.cwd() / CONFIG_FILE_NAME
    if default.exists():
        return load_config(default)
    return TranscodeConfig()


def _configure_logging(verbose: bool, config: TranscodeConfig) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _metadata_path(args: argparse.Namespace, config: TranscodeConfig) -> Path:
    path = args.metadata if args.metadata is not None else config.metadata
    if path is None:
        raise ConfigError("no contract metadata given. Pass --metadata or set 'metadata' in the config file.")
    return path


def _pretty(args: argparse.Namespace, config: TranscodeConfig) -> bool:
    return args.pretty if args.pretty is not None else config.pretty


def _parse_hex_argument(text: str) -> bytes:
    try:
        return parse_hex(text)
    except ValueError:
        raise ConfigError(f"'{text}' is not valid hex data") from None


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        config = _load_config(args)
        _configure_logging(args.verbose, config)
        if args.command == "encode":
            return _cmd_encode(args, config)
        if args.command == "decode":
            return _cmd_decode(args, config)
        if args.command == "decode-return":
            return _cmd_decode_return(args, config)
        if args.command == "check-env":
            return _cmd_check_env(args, config)
    except (TranscodeError, MetadataError, ConfigError, EnvironmentCheckError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _cmd_encode(args: argparse.Namespace, config: TranscodeConfig) -> int:
    """Handle the encode subcommand."""
    transcoder = ContractTranscoder.load(_metadata_path(args, config))
    call_data = transcoder.encode_call(args.name, args.args)
    logger.debug("Encoded call to '%s' with %d argument(s)", args.name, len(args.args))
    print(f"0x{call_data.hex()}")
    return 0


def _cmd_decode(args: argparse.Namespace, config: TranscodeConfig) -> int:
    """Handle the decode subcommand."""
    transcoder = ContractTranscoder.load(_metadata_path(args, config))
    data = _parse_hex_argument(args.data)
    if args.topic is not None and args.kind != "event":
        raise ConfigError("--topic can only be used when decoding events")

    if args.kind == "message":
        name, value = transcoder.decode_message(data)
    elif args.kind == "constructor":
        name, value = transcoder.decode_constructor(data)
    elif args.topic is not None:
        name, value = transcoder.decode_event_by_topic(_parse_hex_argument(args.topic), data)
    else:
        name, value = transcoder.decode_event(data)
    logger.debug("Decoded %s '%s'", args.kind, name)

    print(f"{name}: {format_value(value, pretty=_pretty(args, config))}")
    return 0


def _cmd_decode_return(args: argparse.Namespace, config: TranscodeConfig) -> int:
    """Handle the decode-return subcommand."""
    transcoder = ContractTranscoder.load(_metadata_path(args, config))
    value = transcoder.decode_return(args.name, _parse_hex_argument(args.data))
    print(format_value(value, pretty=_pretty(args, config)))
    return 0


def _cmd_check_env(args: argparse.Namespace, config: TranscodeConfig) -> int:
    """Handle the check-env subcommand."""
    node_types = args.node_types if args.node_types is not None else config.node_types
    if node_types is None:
        raise ConfigError("no node type registry given. Pass NODE_TYPES or set 'node-types' in the config file.")

    node_registry = load_registry(node_types)
    metadata = load_metadata(_metadata_path(args, config))
    if metadata.registry.find_composite(ENVIRONMENT_IDENT) is not None:
        diverging = check_environment(node_registry, metadata.registry)
    else:
        logger.debug("No %s type in the contract registry, using the metadata environment section", ENVIRONMENT_IDENT)
        diverging = check_contract_environment(node_registry, metadata)

    if diverging is not None:
        print(
            f"Error: environment type '{diverging}' of the contract does not match the node.",
            file=sys.stderr,
        )
        return 1

    print("Environment types are compatible.")
    return 0
