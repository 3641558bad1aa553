"""Tests for the 8-byte Frame codec."""

import io
import struct

import pytest

from lifx_lan_mcp.errors import (
    FieldRangeError,
    OriginOverflowError,
    ProtocolOverflowError,
    ShortReadError,
)
from lifx_lan_mcp.protocol.frame import (
    FRAME_SIZE,
    PROTOCOL_NUMBER,
    Frame,
    pack_frame_flags,
    unpack_frame_flags,
)
from lifx_lan_mcp.utils.wire import ByteOrder


def test_frame_size():
    """A frame always encodes to 8 bytes."""
    assert len(Frame().encode()) == FRAME_SIZE


def test_frame_defaults():
    """Defaults are addressable, protocol 1024, untagged."""
    frame = Frame()
    assert frame.addressable is True
    assert frame.tagged is False
    assert frame.protocol == PROTOCOL_NUMBER == 1024
    assert frame.encode() == b"\x00\x00\x00\x14\x00\x00\x00\x00"


def test_frame_tagged_bit():
    """Tagged sets bit 13 of the packed field."""
    data = Frame(tagged=True).encode()
    assert struct.unpack("<H", data[2:4])[0] == 0x3400


def test_frame_field_positions():
    """Size, packed flags and source sit at offsets 0, 2 and 4."""
    data = Frame(size=36, origin=1, source=0xDEADBEEF).encode()
    size, flags, source = struct.unpack("<HHI", data)
    assert size == 36
    assert flags == 0x4000 | 0x1000 | 1024
    assert source == 0xDEADBEEF


def test_origin_boundary():
    """origin=3 encodes; origin=4 overflows."""
    data = Frame(origin=3).encode()
    assert struct.unpack("<H", data[2:4])[0] >> 14 == 3
    with pytest.raises(OriginOverflowError) as exc_info:
        Frame(origin=4).encode()
    assert exc_info.value.maximum == 3
    assert exc_info.value.value == 4


def test_protocol_boundary():
    """protocol=4095 encodes; protocol=4096 overflows."""
    Frame(protocol=4095).encode()
    with pytest.raises(ProtocolOverflowError):
        Frame(protocol=4096).encode()


def test_overflow_errors_share_base():
    """Range errors are FieldRangeErrors and ValueErrors."""
    with pytest.raises(FieldRangeError):
        Frame(origin=4).encode()
    with pytest.raises(ValueError):
        Frame(protocol=-1).encode()


def test_size_out_of_u16():
    """A size larger than u16 fails rather than wrapping."""
    with pytest.raises(FieldRangeError):
        Frame(size=0x10000).encode()


def test_frame_roundtrip():
    """Every origin/tagged/addressable combination survives a round trip."""
    for origin in range(4):
        for tagged in (False, True):
            for addressable in (False, True):
                frame = Frame(
                    size=0xFFFF,
                    origin=origin,
                    tagged=tagged,
                    addressable=addressable,
                    protocol=4095,
                    source=0xFFFFFFFF,
                )
                assert Frame.decode(frame.encode()) == frame


def test_frame_big_endian():
    """Big-endian order writes the most significant byte first."""
    frame = Frame(size=36, source=1)
    data = frame.encode(ByteOrder.BIG)
    assert data[:2] == b"\x00\x24"
    assert data[4:] == b"\x00\x00\x00\x01"
    assert Frame.decode(data, ByteOrder.BIG) == frame


def test_frame_decode_from_stream():
    """Decoding consumes exactly 8 bytes of a stream."""
    stream = io.BytesIO(Frame(size=40).encode() + b"rest")
    assert Frame.decode(stream).size == 40
    assert stream.read() == b"rest"


def test_frame_short_read():
    """Fewer than 8 bytes raises ShortReadError."""
    with pytest.raises(ShortReadError) as exc_info:
        Frame.decode(b"\x00\x00\x00")
    assert exc_info.value.expected == 8
    assert exc_info.value.received == 3


def test_flag_helpers_inverse():
    """unpack_frame_flags inverts pack_frame_flags."""
    packed = pack_frame_flags(2, True, False, 1024)
    assert unpack_frame_flags(packed) == (2, True, False, 1024)


def test_frame_decode_across_partial_reads():
    """A stream that returns a few bytes at a time still yields a full frame."""

    class ChunkedStream(io.RawIOBase):
        def __init__(self, data: bytes):
            self._data = data

        def readable(self) -> bool:
            return True

        def readinto(self, buffer) -> int:
            chunk = self._data[:min(3, len(buffer))]
            buffer[:len(chunk)] = chunk
            self._data = self._data[len(chunk):]
            return len(chunk)

    frame = Frame(size=38, tagged=True, source=0xABCD)
    assert Frame.decode(ChunkedStream(frame.encode())) == frame
