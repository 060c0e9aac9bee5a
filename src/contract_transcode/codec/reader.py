# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""A forward-only cursor over an in-memory byte buffer."""

from __future__ import annotations

from contract_transcode.errors import UnexpectedEndOfInput

# ###############
# Public Interface
# ###############


class ByteReader:
    """Consumes bytes from the front of a buffer.

    Attributes:
        position: Number of bytes consumed so far.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self.position = 0

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self.position

    def read(self, n: int) -> bytes:
        """Consume and return exactly *n* bytes.

        Raises:
            UnexpectedEndOfInput: If fewer than *n* bytes are left.
        """
        if n > self.remaining:
            raise UnexpectedEndOfInput(n, self.remaining)
        chunk = self._data[self.position : self.position + n]
        self.position += n
        return chunk

    def read_byte(self) -> int:
        """Consume and return a single byte."""
        return self.read(1)[0]

    def peek_byte(self) -> int:
        """Return the next byte without consuming it."""
        if self.remaining < 1:
            raise UnexpectedEndOfInput(1, 0)
        return self._data[self.position]

    def rest(self) -> bytes:
        """Return the unread bytes without consuming them."""
        return self._data[self.position :]
