"""Request frame builder and parser.

Frame layout::

    +---------+---------+------------+------------------+---------+
    |  Magic  |  Size   |  Reserved  |     Payload      |   Pad   |
    | 2 bytes | 2 bytes |  5 bytes   |  variable length |  1 byte |
    +---------+---------+------------+------------------+---------+

- Magic: 0x00 0x83
- Size: big-endian, 6 + length of payload
- Reserved: zero bytes
- Pad: a single zero byte closing the frame
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import DataTooLongError, FrameError, InvalidMagicError
from .byteorder import U16_MAX, decode_u16_be, encode_u16_be

MAGIC = b"\x00\x83"
RESERVED_SIZE = 5
SIZE_OFFSET = 6  # added to the payload length in the size field
FRAME_OVERHEAD = 10  # 2(magic) + 2(size) + 5(reserved) + 1(pad)
HEADER_SIZE = FRAME_OVERHEAD - 1
MAX_PAYLOAD_SIZE = U16_MAX - SIZE_OFFSET


@dataclass(frozen=True)
class Frame:
    """An outbound protocol frame."""

    payload: bytes

    def to_bytes(self) -> bytes:
        return encode(self.payload)

    def __repr__(self) -> str:
        return (
            f"Frame(size={len(self.payload) + SIZE_OFFSET}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def encode(payload: bytes | str) -> bytes:
    """Build the wire bytes for a single request frame.

    Args:
        payload: Message bytes. Text is encoded as UTF-8 first.

    Returns:
        ``10 + len(payload)`` bytes ready to send.

    Raises:
        DataTooLongError: If the payload does not fit the size field.
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")

    if len(payload) > MAX_PAYLOAD_SIZE:
        raise DataTooLongError(len(payload), MAX_PAYLOAD_SIZE)

    size = encode_u16_be(len(payload) + SIZE_OFFSET)
    return MAGIC + size + b"\x00" * RESERVED_SIZE + bytes(payload) + b"\x00"


def parse_frame(data: bytes) -> Frame:
    """Parse a complete request frame produced by :func:`encode`.

    Raises:
        InvalidMagicError: If the first two bytes are not the magic.
        FrameError: If the size field, reserved bytes or pad are wrong.
    """
    if len(data) < FRAME_OVERHEAD:
        raise FrameError(
            f"frame too short: {len(data)} bytes (minimum {FRAME_OVERHEAD})"
        )

    if data[0:2] != MAGIC:
        raise InvalidMagicError(bytes(data[0:2]))

    size = decode_u16_be(data[2:4])
    if size < SIZE_OFFSET:
        raise FrameError(f"size field {size} below minimum {SIZE_OFFSET}")

    payload_length = size - SIZE_OFFSET
    if len(data) != FRAME_OVERHEAD + payload_length:
        raise FrameError(
            f"frame length {len(data)} does not match size field {size}"
        )

    if any(data[4:HEADER_SIZE]):
        raise FrameError("reserved bytes must be zero")

    if data[-1] != 0:
        raise FrameError("missing trailing pad byte")

    return Frame(payload=bytes(data[HEADER_SIZE:-1]))
