"""Tests for the MCP tool surface."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock, patch

from lifx_lan_mcp.models import DeviceStatePower, LightSetColor
from lifx_lan_mcp.protocol.commands import build_get_service
from lifx_lan_mcp.protocol.packet import Packet


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_instance.prompt.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch.dict(sys.modules, {}):
        with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
            # Remove cached server module so it re-imports with our mock
            sys.modules.pop("lifx_lan_mcp.server", None)
            import lifx_lan_mcp.server as server_mod

    return server_mod


def test_list_message_types():
    """Every code is listed with its name and payload class."""
    server = _get_server_module()
    types = server.list_message_types()
    by_code = {entry["code"]: entry for entry in types}
    assert by_code[107] == {"code": 107, "name": "LightState", "payload": "LightState"}
    assert by_code[2]["payload"] == "EmptyPayload"
    assert by_code[50]["payload"] == "DeviceStateLocation"


def test_build_packet_set_power():
    """build_packet returns hex that decodes to the requested packet."""
    server = _get_server_module()
    result = server.build_packet(21, target="d0:73:d5:01:02:03", sequence=4, fields={"level": 65535})
    assert result["size"] == 38
    assert result["type_name"] == "DeviceSetPower"

    packet = Packet.decode(bytes.fromhex(result["hex"]))
    assert isinstance(packet.payload, DeviceStatePower)
    assert packet.payload.level == 65535
    assert packet.header.frame_address.target == bytes.fromhex("d073d5010203")
    assert packet.header.frame_address.sequence == 4


def test_build_packet_set_color():
    """Color dicts and duration_ms are converted to payload fields."""
    server = _get_server_module()
    result = server.build_packet(
        102,
        fields={
            "color": {"hue": 0, "saturation": 65535, "brightness": 65535, "kelvin": 3500},
            "duration_ms": 500,
        },
    )
    assert result["size"] == 49
    packet = Packet.decode(bytes.fromhex(result["hex"]))
    assert isinstance(packet.payload, LightSetColor)
    assert packet.payload.color.saturation == 65535


def test_build_packet_discovery_matches_builder():
    """A tagged GetService from the tool equals the builder's output."""
    server = _get_server_module()
    result = server.build_packet(2, tagged=True, res_required=True)
    assert bytes.fromhex(result["hex"]) == build_get_service().encode()


def test_build_packet_errors():
    """Bad input is reported, not raised."""
    server = _get_server_module()
    assert "error" in server.build_packet(9999)
    assert "error" in server.build_packet(21, target="zz")
    assert "error" in server.build_packet(21, fields={"bogus": 1})
    assert "error" in server.build_packet(21, fields={"level": 70000})
    assert "error" in server.build_packet(21, source=-1)


def test_decode_packet():
    """decode_packet returns header and payload fields."""
    server = _get_server_module()
    built = server.build_packet(24, target="d0:73:d5:01:02:03", fields={"label": "Desk"})
    result = server.decode_packet(built["hex"])
    assert result["header"]["target"] == "d0:73:d5:01:02:03"
    assert result["header"]["type_name"] == "DeviceSetLabel"
    assert result["header"]["size"] == 68
    assert result["payload_type"] == "DeviceStateLabel"
    assert result["payload"]["label"].startswith(b"Desk".hex())


def test_decode_packet_unknown_type():
    """An unknown type still reports the decoded header."""
    server = _get_server_module()
    data = bytearray(build_get_service(source=77).encode())
    data[32:34] = (9999).to_bytes(2, "little")
    result = server.decode_packet(data.hex())
    assert "error" in result
    assert result["header"]["type"] == 9999
    assert result["header"]["type_name"] == "UnknownType"
    assert result["header"]["source"] == 77


def test_decode_packet_bad_input():
    """Invalid hex and truncated packets are reported as errors."""
    server = _get_server_module()
    assert "error" in server.decode_packet("xyz")
    assert "error" in server.decode_packet("0000")


def test_header_layout_resource():
    """The layout resource lists all ten header fields."""
    server = _get_server_module()
    layout = json.loads(server.resource_header_layout())
    assert len(layout["header"]) == 10
    assert layout["header"][-1]["offset"] == 34


def test_explain_packet_prompt():
    """The prompt embeds the packet hex."""
    server = _get_server_module()
    assert "abcd" in server.explain_packet("abcd")
