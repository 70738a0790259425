"""Tests for response frame decoding."""

import struct

import pytest

from bt_client.errors import (
    InvalidMagicError,
    UnexpectedEofError,
    UnsupportedTypeError,
)
from bt_client.protocol.parser import FrameDecoder, decode_response
from bt_client.protocol.values import FloatValue, NullValue, StringValue, Tag
from bt_client.transport.stream_reader import BufferedStreamReader

from fakes import ArrivedTransport, ScriptedTransport, split


def _decode(data: bytes):
    return decode_response(BufferedStreamReader(ScriptedTransport([data])))


def _string_frame(text: bytes) -> bytes:
    return b"\x00\x83" + (len(text) + 2).to_bytes(2, "big") + b"\x06" + text


def test_decode_string():
    assert _decode(_string_frame(b"pong")) == StringValue(text="pong")


def test_decode_empty_string():
    """A zero-length string is a valid value."""
    assert _decode(b"\x00\x83\x00\x02\x06") == StringValue(text="")


def test_decode_utf8_string():
    assert _decode(_string_frame("héllo".encode("utf-8"))).text == "héllo"


def test_decode_float():
    data = b"\x00\x83\x00\x06\x2A" + struct.pack(">f", 3.5)
    assert _decode(data) == FloatValue(value=3.5)


def test_decode_float_ignores_size_field():
    """Float32 always reads four bytes, whatever the size field says."""
    data = b"\x00\x83\x00\x02\x2A" + struct.pack(">f", -2.25)
    assert _decode(data) == FloatValue(value=-2.25)


def test_decode_null_consumes_nothing_more():
    """Null stops after the tag byte, leaving later bytes unread."""
    reader = BufferedStreamReader(ScriptedTransport([b"\x00\x83\x00\x02\x00" + b"tail"]))
    assert decode_response(reader) == NullValue()
    assert reader.buffered == 4


def test_declared_length_longer_than_data():
    """7 value bytes declared, only 4 supplied."""
    with pytest.raises(UnexpectedEofError):
        _decode(b"\x00\x83\x00\x09\x06abcd")


def test_truncated_float():
    with pytest.raises(UnexpectedEofError):
        _decode(b"\x00\x83\x00\x06\x2A\x40\x60")


@pytest.mark.parametrize("data", [b"", b"\x00", b"\x00\x83", b"\x00\x83\x00\x02"])
def test_truncated_header(data):
    with pytest.raises(UnexpectedEofError):
        _decode(data)


def test_invalid_magic_before_size():
    """A bad magic fails before the size or tag bytes are consumed."""
    reader = BufferedStreamReader(ScriptedTransport([b"\x01\x83\x00\x02\x00"]))
    with pytest.raises(InvalidMagicError) as excinfo:
        decode_response(reader)
    assert excinfo.value.magic == b"\x01\x83"
    assert reader.buffered == 3


def test_unsupported_tag():
    """Unknown tags are reported, not skipped."""
    reader = BufferedStreamReader(ScriptedTransport([b"\x00\x83\x00\x04\x07ab"]))
    with pytest.raises(UnsupportedTypeError) as excinfo:
        decode_response(reader)
    assert excinfo.value.tag == 0x07
    assert "0x07" in str(excinfo.value)
    assert reader.buffered == 2


@pytest.mark.parametrize("size", [b"\x00\x00", b"\x00\x01"])
def test_small_size_float(size):
    """Float32 reads four bytes even when the size field is below 2."""
    data = b"\x00\x83" + size + b"\x2A" + struct.pack(">f", 3.5)
    assert _decode(data) == FloatValue(value=3.5)


@pytest.mark.parametrize("size", [b"\x00\x00", b"\x00\x01"])
def test_small_size_null(size):
    assert _decode(b"\x00\x83" + size + b"\x00") == NullValue()


@pytest.mark.parametrize("size", [b"\x00\x00", b"\x00\x01"])
def test_small_size_unknown_tag(size):
    with pytest.raises(UnsupportedTypeError) as excinfo:
        _decode(b"\x00\x83" + size + b"\x07")
    assert excinfo.value.tag == 0x07


def test_small_size_string_is_eof():
    """The wrapped length is far larger than anything supplied."""
    with pytest.raises(UnexpectedEofError):
        _decode(b"\x00\x83\x00\x01\x06abc")


def test_one_byte_arrivals_match_single_chunk():
    """Splitting the response into 1-byte writes does not change the result."""
    frames = [
        _string_frame(b"hello world"),
        b"\x00\x83\x00\x06\x2A" + struct.pack(">f", 3.5),
        b"\x00\x83\x00\x02\x00",
    ]
    for data in frames:
        whole = decode_response(BufferedStreamReader(ArrivedTransport([data])))
        pieces = decode_response(BufferedStreamReader(ArrivedTransport(split(data, 1))))
        assert whole == pieces


def test_one_byte_per_receive_is_eof():
    """A transport that only returns one byte per receive cannot fill a header."""
    transport = ScriptedTransport(split(b"\x00\x83\x00\x02\x00", 1))
    with pytest.raises(UnexpectedEofError):
        decode_response(BufferedStreamReader(transport))
    assert transport.calls == 1


def test_two_frames_from_one_reader():
    """The reader keeps surplus bytes for the next frame."""
    data = _string_frame(b"one") + b"\x00\x83\x00\x02\x00"
    reader = BufferedStreamReader(ScriptedTransport([data]))
    decoder = FrameDecoder()
    assert decoder.decode(reader) == StringValue(text="one")
    assert decoder.decode(reader) == NullValue()


def test_register_extra_tag():
    """New tags can be plugged in without touching the defaults."""
    decoder = FrameDecoder()
    decoder.register(0x01, lambda reader, n: StringValue(reader.read_exact(n).hex()))
    reader = BufferedStreamReader(ScriptedTransport([b"\x00\x83\x00\x04\x01\xbe\xef"]))
    assert decoder.decode(reader) == StringValue(text="beef")


def test_value_rendering():
    """Values print the way the command line shows them."""
    assert str(StringValue("pong")) == "pong"
    assert str(FloatValue(3.5)) == "3.5"
    assert str(FloatValue(1 / 3)) == "0.333333"
    assert str(NullValue()) == "NULL"
    assert NullValue().tag is Tag.NULL
