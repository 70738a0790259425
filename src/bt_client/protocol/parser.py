"""Response parsing: decode one typed value from a byte stream.

Response layout::

    +---------+---------+-----+-----------------------+
    |  Magic  |  Size   | Tag |        Value          |
    | 2 bytes | 2 bytes | 1 B | size - 2 bytes (*)    |
    +---------+---------+-----+-----------------------+

(*) Float32 values are always 4 bytes, whatever the size field says.

The decoder only ever moves forward: magic, size, tag, then the value.
Any failure is final for the frame.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from ..errors import InvalidMagicError, UnsupportedTypeError
from .byteorder import U16_MAX, decode_f32_be, decode_u16_be
from .framing import MAGIC
from .values import FloatValue, NullValue, StringValue, Tag, Value

logger = logging.getLogger(__name__)

SIZE_ADJUSTMENT = 2
FLOAT32_SIZE = 4


class ExactReader(Protocol):
    """Anything offering an exact-length read."""

    def read_exact(self, n: int) -> bytes: ...


ValueDecoder = Callable[[ExactReader, int], Value]


def decode_string(reader: ExactReader, value_length: int) -> StringValue:
    """Read ``value_length`` bytes and interpret them as UTF-8 text."""
    data = reader.read_exact(value_length)
    return StringValue(text=data.decode("utf-8", errors="replace"))


def decode_float32(reader: ExactReader, value_length: int) -> FloatValue:
    """Read a 4-byte big-endian float. ``value_length`` is ignored."""
    return FloatValue(value=decode_f32_be(reader.read_exact(FLOAT32_SIZE)))


def decode_null(reader: ExactReader, value_length: int) -> NullValue:
    """Null carries no value bytes."""
    return NullValue()


DEFAULT_DECODERS: dict[int, ValueDecoder] = {
    Tag.STRING: decode_string,
    Tag.FLOAT32: decode_float32,
    Tag.NULL: decode_null,
}


class FrameDecoder:
    """Decodes response frames, dispatching on the value tag.

    Usage::

        decoder = FrameDecoder()
        value = decoder.decode(reader)

    Extra tags can be handled by passing ``decoders`` or calling
    :meth:`register`.
    """

    def __init__(self, decoders: dict[int, ValueDecoder] | None = None) -> None:
        self._decoders: dict[int, ValueDecoder] = dict(DEFAULT_DECODERS)
        if decoders:
            self._decoders.update(decoders)

    def register(self, tag: int, decoder: ValueDecoder) -> None:
        """Install a decoder for ``tag``, replacing any existing one."""
        self._decoders[tag] = decoder

    def decode(self, reader: ExactReader) -> Value:
        """Decode exactly one response frame from ``reader``.

        Raises:
            InvalidMagicError: The frame does not start with the magic.
            UnsupportedTypeError: The tag has no decoder.
            UnexpectedEofError: The stream ran out at any step.
        """
        magic = reader.read_exact(2)
        if magic != MAGIC:
            raise InvalidMagicError(magic)

        size = decode_u16_be(reader.read_exact(2))
        # Wraps like a u16 for sizes below 2.
        value_length = (size - SIZE_ADJUSTMENT) & U16_MAX

        tag = reader.read_exact(1)[0]
        decoder = self._decoders.get(tag)
        if decoder is None:
            raise UnsupportedTypeError(tag)

        value = decoder(reader, value_length)
        logger.debug("Decoded tag 0x%02X (%d value bytes): %r", tag, value_length, value)
        return value


def decode_response(reader: ExactReader) -> Value:
    """Decode one response frame with the default tag set."""
    return FrameDecoder().decode(reader)
