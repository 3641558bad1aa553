"""Tests for the 12-byte ProtocolHeader codec and message type names."""

import pytest

from lifx_lan_mcp.errors import ShortReadError
from lifx_lan_mcp.protocol.message_types import (
    MessageType,
    is_known_type,
    message_type_name,
)
from lifx_lan_mcp.protocol.protocol_header import PROTOCOL_HEADER_SIZE, ProtocolHeader
from lifx_lan_mcp.utils.wire import ByteOrder


def test_protocol_header_layout():
    """reserved u64, type u16, reserved_end u16."""
    data = ProtocolHeader(type=MessageType.LIGHT_STATE).encode()
    assert len(data) == PROTOCOL_HEADER_SIZE
    assert data == bytes(8) + b"\x6b\x00" + b"\x00\x00"


def test_protocol_header_big_endian():
    """Type is written most significant byte first in big-endian order."""
    data = ProtocolHeader(type=0x0102).encode(ByteOrder.BIG)
    assert data[8:10] == b"\x01\x02"


def test_protocol_header_roundtrip():
    """Reserved fields are carried through unvalidated."""
    header = ProtocolHeader(reserved=0xFFFFFFFFFFFFFFFF, type=9999, reserved_end=0xFFFF)
    assert ProtocolHeader.decode(header.encode()) == header


def test_protocol_header_short_read():
    """Fewer than 12 bytes raises ShortReadError."""
    with pytest.raises(ShortReadError):
        ProtocolHeader.decode(bytes(11))


def test_type_name():
    """Known codes have readable names; unknown codes do not fail."""
    assert ProtocolHeader(type=107).type_name == "LightState"
    assert ProtocolHeader(type=9999).type_name == "UnknownType"


def test_message_type_names():
    """Names are CamelCase versions of the enum members."""
    assert message_type_name(2) == "DeviceGetService"
    assert message_type_name(118) == "LightStatePower"
    assert message_type_name(45) == "DeviceAcknowledgement"
    assert message_type_name(0) == "UnknownType"


def test_message_type_codes():
    """Protocol codes are fixed constants."""
    assert MessageType.DEVICE_GET_SERVICE == 2
    assert MessageType.DEVICE_STATE_LOCATION == 50
    assert MessageType.DEVICE_ECHO_RESPONSE == 59
    assert MessageType.LIGHT_SET_COLOR == 102
    assert MessageType.LIGHT_STATE_POWER == 118


def test_is_known_type():
    """Only listed codes are known."""
    assert is_known_type(33)
    assert not is_known_type(4)
