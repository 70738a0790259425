"""Exception hierarchy for the bt client.

Every wire-level failure has its own class so callers can tell them apart;
all of them are terminal for the exchange in which they occur.
"""

from __future__ import annotations


class BtError(Exception):
    """Base class for all bt client errors."""


class ProtocolError(BtError):
    """A frame could not be encoded or decoded."""


class DataTooLongError(ProtocolError, ValueError):
    """The payload does not fit the 16-bit size field after frame overhead."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"data is too long: {length} bytes (maximum {limit})"
        )
        self.length = length
        self.limit = limit


class InvalidMagicError(ProtocolError):
    """The frame does not start with the 0x00 0x83 magic."""

    def __init__(self, magic: bytes) -> None:
        super().__init__(f"invalid magic: {magic.hex(' ')}")
        self.magic = magic


class UnexpectedEofError(ProtocolError, EOFError):
    """The stream ended before the requested number of bytes arrived."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"unexpected eof: needed {requested} bytes, {available} available"
        )
        self.requested = requested
        self.available = available


class UnsupportedTypeError(ProtocolError):
    """The response carries a value tag this client cannot decode."""

    def __init__(self, tag: int) -> None:
        super().__init__(f"unsupported type: 0x{tag:02X}")
        self.tag = tag


class FrameError(ProtocolError):
    """The frame is structurally malformed (bad size field, padding, ...)."""
