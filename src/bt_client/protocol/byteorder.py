"""Fixed big-endian encodings used on the wire.

The wire is always big-endian; ``int.to_bytes`` and ``struct`` with an
explicit ``>`` byte order handle the swap on little-endian hosts.
"""

from __future__ import annotations

import struct

U16_MAX = 0xFFFF

_F32 = struct.Struct(">f")


def encode_u16_be(value: int) -> bytes:
    """Encode an unsigned 16-bit integer as two big-endian bytes."""
    if not 0 <= value <= U16_MAX:
        raise ValueError(f"u16 out of range: {value}")
    return value.to_bytes(2, "big")


def decode_u16_be(data: bytes) -> int:
    """Decode two big-endian bytes into an unsigned 16-bit integer."""
    if len(data) != 2:
        raise ValueError(f"u16 needs 2 bytes, got {len(data)}")
    return int.from_bytes(data, "big")


def encode_f32_be(value: float) -> bytes:
    """Encode a float as a big-endian IEEE-754 single."""
    return _F32.pack(value)


def decode_f32_be(data: bytes) -> float:
    """Decode four big-endian bytes as an IEEE-754 single."""
    if len(data) != 4:
        raise ValueError(f"f32 needs 4 bytes, got {len(data)}")
    return _F32.unpack(data)[0]
