# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy shared by the parser, codec and message resolver.

Every failure of the transcoding core is raised as a subclass of
:class:`TranscodeError` so that callers can present it uniformly.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class TranscodeError(Exception):
    """Base class for all failures of the transcoding core."""


class ParseError(TranscodeError):
    """Raised when literal text is malformed.

    Attributes:
        offset: 0-based byte offset of the error in the UTF-8 encoded input.
        expected: Description of what was expected at *offset*, if known.
    """

    def __init__(self, message: str, offset: int, expected: str | None = None) -> None:
        super().__init__(f"Offset {offset}: {message}")
        self.offset = offset
        self.expected = expected


class TypeMismatch(TranscodeError):
    """Raised when a value's shape is incompatible with the expected type descriptor."""


class MissingField(TranscodeError):
    """Raised when a declared composite field is absent from a map literal.

    Attributes:
        field: Name of the missing field.
    """

    def __init__(self, field: str, type_label: str) -> None:
        super().__init__(f"Missing field '{field}' for type '{type_label}'")
        self.field = field


class UnknownField(TranscodeError):
    """Raised when a map literal names a field the composite does not declare.

    Attributes:
        field: Name of the unexpected field.
    """

    def __init__(self, field: str, type_label: str) -> None:
        super().__init__(f"Unknown field '{field}' for type '{type_label}'")
        self.field = field


class VariantNotFound(TranscodeError):
    """Raised when no variant case matches a name or a discriminant."""


class LengthMismatch(TranscodeError):
    """Raised when a sequence, array or tuple has the wrong number of elements.

    Attributes:
        expected: Declared number of elements.
        actual: Number of elements supplied.
    """

    def __init__(self, expected: int, actual: int, what: str) -> None:
        super().__init__(f"Expected {expected} element(s) for {what}, got {actual}")
        self.expected = expected
        self.actual = actual


class IntegerOverflow(TranscodeError):
    """Raised when an integer does not fit the declared width or sign.

    Attributes:
        value: The offending integer.
        target: Name of the target primitive, e.g. ``u8``.
    """

    def __init__(self, value: int, target: str) -> None:
        super().__init__(f"Integer {value} does not fit into {target}")
        self.value = value
        self.target = target


class UnknownSelector(TranscodeError):
    """Raised when leading selector bytes match no message or constructor.

    Attributes:
        selector: The unmatched selector bytes.
    """

    def __init__(self, selector: bytes, table: str = "contract metadata") -> None:
        super().__init__(f"No entry with selector 0x{selector.hex()} found in {table}")
        self.selector = selector


class TrailingBytes(TranscodeError):
    """Raised when bytes remain after a complete top-level value was decoded.

    Attributes:
        remaining: The unread bytes.
    """

    def __init__(self, remaining: bytes, context: str = "value") -> None:
        super().__init__(
            f"Input was longer than expected by {len(remaining)} byte(s) after decoding "
            f"{context}: 0x{remaining.hex()} left unread"
        )
        self.remaining = remaining


class RegistryResolutionError(TranscodeError):
    """Raised when a referenced type id is absent from the registry.

    Attributes:
        type_id: The unresolved id.
    """

    def __init__(self, type_id: int) -> None:
        super().__init__(f"Failed to resolve type with id {type_id}")
        self.type_id = type_id


class NotFound(TranscodeError):
    """Raised when a constructor or message name is unknown.

    Attributes:
        name: The requested name.
        suggestion: The closest known name, if any.
    """

    def __init__(self, name: str, known: list[str], suggestion: str | None = None) -> None:
        if suggestion is not None:
            hint = f"Did you mean '{suggestion}'?"
        else:
            hint = f"Should be one of: {', '.join(known)}"
        super().__init__(f"No constructor or message with the name '{name}' found.\n{hint}")
        self.name = name
        self.suggestion = suggestion


class ArityMismatch(TranscodeError):
    """Raised when the number of call arguments differs from the declared parameters."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Invalid number of input arguments for '{name}': expected {expected}, {actual} provided"
        )
        self.expected = expected
        self.actual = actual


class AmbiguousName(TranscodeError):
    """Raised when a constructor and a message share the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid metadata: both a constructor and message found with name '{name}'")
        self.name = name


class UnsupportedType(TranscodeError):
    """Raised for type descriptors the codec cannot transcode (bit sequences)."""


class InvalidEncoding(TranscodeError):
    """Raised when input bytes are not a valid encoding of the expected type."""


class UnexpectedEndOfInput(InvalidEncoding):
    """Raised when the input ends before a value is complete.

    Attributes:
        needed: Number of bytes requested.
        available: Number of bytes that were left.
    """

    def __init__(self, needed: int, available: int) -> None:
        super().__init__(f"Unexpected end of input: needed {needed} byte(s), {available} available")
        self.needed = needed
        self.available = available
