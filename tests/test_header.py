"""Tests for the composed 36-byte Header."""

import io

import pytest

from lifx_lan_mcp.errors import OriginOverflowError, ShortReadError, StructuralError
from lifx_lan_mcp.protocol.frame import Frame
from lifx_lan_mcp.protocol.frame_address import FrameAddress
from lifx_lan_mcp.protocol.header import HEADER_SIZE, Header
from lifx_lan_mcp.protocol.message_types import MessageType
from lifx_lan_mcp.protocol.protocol_header import ProtocolHeader

MAC = bytes.fromhex("d073d5010203")


def _header(**kwargs) -> Header:
    return Header(
        frame=kwargs.get("frame", Frame()),
        frame_address=kwargs.get("frame_address", FrameAddress()),
        protocol_header=kwargs.get("protocol_header", ProtocolHeader()),
    )


def test_header_size():
    """A header always encodes to exactly 36 bytes."""
    assert HEADER_SIZE == 36
    assert len(_header().encode()) == HEADER_SIZE


def test_header_part_order():
    """Frame, then FrameAddress, then ProtocolHeader."""
    header = _header(
        frame=Frame(source=7),
        frame_address=FrameAddress(target=MAC, sequence=3),
        protocol_header=ProtocolHeader(type=MessageType.DEVICE_GET_LABEL),
    )
    data = header.encode()
    assert data[:8] == header.frame.encode()
    assert data[8:24] == header.frame_address.encode()
    assert data[24:] == header.protocol_header.encode()
    assert data[23] == 3
    assert data[32] == 23


def test_missing_part_rejected_at_construction():
    """A header cannot be built with an absent part."""
    with pytest.raises(StructuralError):
        Header(frame=None, frame_address=FrameAddress(), protocol_header=ProtocolHeader())
    with pytest.raises(StructuralError):
        Header(frame=Frame(), frame_address=None, protocol_header=ProtocolHeader())
    with pytest.raises(StructuralError):
        Header(frame=Frame(), frame_address=FrameAddress(), protocol_header=None)


def test_wrong_part_type_rejected():
    """Parts must be the right codec type."""
    with pytest.raises(StructuralError):
        Header(frame=FrameAddress(), frame_address=FrameAddress(), protocol_header=ProtocolHeader())


def test_part_removed_after_construction():
    """Clearing a part later fails at encode time instead of writing garbage."""
    header = _header()
    header.protocol_header = None
    with pytest.raises(StructuralError):
        header.encode()


def test_structural_error_is_type_error():
    """StructuralError can be caught as TypeError."""
    with pytest.raises(TypeError):
        Header(frame=None, frame_address=None, protocol_header=None)


def test_part_error_aborts_encode():
    """An invalid frame stops the whole header encode."""
    with pytest.raises(OriginOverflowError):
        _header(frame=Frame(origin=4)).encode()


def test_header_roundtrip():
    """A decoded header equals the one that was encoded."""
    header = _header(
        frame=Frame(size=100, tagged=True, source=0xCAFE),
        frame_address=FrameAddress(target=MAC, ack_required=True, sequence=200),
        protocol_header=ProtocolHeader(type=MessageType.DEVICE_ECHO_REQUEST),
    )
    assert Header.decode(header.encode()) == header


def test_header_new():
    """Header.new fills in protocol defaults."""
    header = Header.new(MessageType.LIGHT_GET, target=MAC, source=5, sequence=1, res_required=True)
    assert header.frame.protocol == 1024
    assert header.frame.addressable is True
    assert header.frame.source == 5
    assert header.frame_address.target == MAC
    assert header.frame_address.res_required is True
    assert header.message_type == 101


def test_header_new_broadcast_default():
    """Without a target, Header.new addresses every device."""
    assert Header.new(MessageType.DEVICE_GET_SERVICE).frame_address.is_broadcast


def test_header_decode_leaves_stream_at_payload():
    """Decoding reads exactly 36 bytes from a stream."""
    stream = io.BytesIO(_header().encode() + b"payload")
    Header.decode(stream)
    assert stream.read() == b"payload"


def test_header_short_read():
    """A truncated header raises ShortReadError."""
    with pytest.raises(ShortReadError):
        Header.decode(bytes(30))
