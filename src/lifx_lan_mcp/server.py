"""MCP server entry point for the LIFX LAN packet codec.

Exposes tools, resources and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport. The server only
builds and decodes packets; it never talks to a device.
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import LifxProtocolError, UnknownTypeError
from .models.base import Payload
from .models.light import LightHSBK
from .protocol.header import Header
from .protocol.message_types import MessageType, message_type_name
from .protocol.packet import Packet
from .protocol.registry import lookup_payload
from .utils.address import format_mac, parse_mac

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "lifx-lan",
    instructions="Build and decode LIFX LAN protocol packets",
)


HEADER_LAYOUT = [
    {"offset": 0, "bytes": 2, "field": "size"},
    {"offset": 2, "bytes": 2, "field": "origin(2b) | tagged(1b) | addressable(1b) | protocol(12b)"},
    {"offset": 4, "bytes": 4, "field": "source"},
    {"offset": 8, "bytes": 8, "field": "target"},
    {"offset": 16, "bytes": 6, "field": "reserved block"},
    {"offset": 22, "bytes": 1, "field": "reserved(6b) | ack_required(1b) | res_required(1b)"},
    {"offset": 23, "bytes": 1, "field": "sequence"},
    {"offset": 24, "bytes": 8, "field": "reserved"},
    {"offset": 32, "bytes": 2, "field": "type"},
    {"offset": 34, "bytes": 2, "field": "reserved_end"},
]


def _header_dict(header: Header) -> dict[str, Any]:
    frame = header.frame
    address = header.frame_address
    return {
        "size": frame.size,
        "origin": frame.origin,
        "tagged": frame.tagged,
        "addressable": frame.addressable,
        "protocol": frame.protocol,
        "source": frame.source,
        "target": format_mac(address.target),
        "ack_required": address.ack_required,
        "res_required": address.res_required,
        "sequence": address.sequence,
        "type": header.protocol_header.type,
        "type_name": header.protocol_header.type_name,
    }


def _payload_from_fields(payload_cls: type[Payload], fields: dict[str, Any]) -> Payload:
    """Build a payload from JSON-style fields.

    ``color`` may be a dict of HSBK values and ``duration_ms`` an integer.
    Byte fields other than ``label`` are given as hex strings.
    """
    kwargs = dict(fields)
    if isinstance(kwargs.get("color"), dict):
        kwargs["color"] = LightHSBK(**kwargs["color"])
    if "duration_ms" in kwargs:
        kwargs["duration"] = timedelta(milliseconds=kwargs.pop("duration_ms"))
    for name, code in payload_cls.FIELDS:
        if code.endswith("s") and name != "label" and isinstance(kwargs.get(name), str):
            kwargs[name] = bytes.fromhex(kwargs[name])
    return payload_cls(**kwargs)


# ─── PACKET TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def list_message_types() -> list[dict[str, Any]]:
    """List every known message type with its code and payload class."""
    result = []
    for message_type in MessageType:
        payload_cls = lookup_payload(message_type)
        result.append({
            "code": int(message_type),
            "name": message_type.display_name,
            "payload": payload_cls.__name__ if payload_cls else None,
        })
    return result


@mcp.tool()
def build_packet(
    message_type: int,
    target: str = "00:00:00:00:00:00",
    source: int = 0,
    sequence: int = 0,
    tagged: bool = False,
    ack_required: bool = False,
    res_required: bool = False,
    fields: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Encode a packet and return it as hex.

    Args:
        message_type: Numeric message type code (see list_message_types).
        target: Device MAC address; all zeros with tagged=True broadcasts.
        source: Client identifier echoed back in responses.
        sequence: Sequence number (0-255).
        tagged: Set for broadcast discovery.
        ack_required: Ask the device for an acknowledgement.
        res_required: Ask the device for a state response.
        fields: Payload fields, e.g. {"level": 65535} or
            {"color": {"hue": 0, "saturation": 65535, "brightness": 65535,
            "kelvin": 3500}, "duration_ms": 1000}.
    """
    payload_cls = lookup_payload(message_type)
    if payload_cls is None:
        return {"error": f"Unknown message type {message_type}"}

    try:
        payload = _payload_from_fields(payload_cls, fields or {})
        packet = Packet.new(
            payload,
            message_type,
            target=parse_mac(target),
            source=source,
            sequence=sequence,
            tagged=tagged,
            ack_required=ack_required,
            res_required=res_required,
        )
        data = packet.encode()
    except (LifxProtocolError, TypeError, ValueError) as e:
        logger.warning("build_packet(%s) failed: %s", message_type, e)
        return {"error": str(e)}

    return {
        "hex": data.hex(),
        "size": len(data),
        "type_name": message_type_name(message_type),
    }


@mcp.tool()
def decode_packet(hex_data: str) -> dict[str, Any]:
    """Decode a hex-encoded packet into its header and payload fields.

    Args:
        hex_data: Packet bytes as hex; whitespace is ignored.
    """
    try:
        data = bytes.fromhex("".join(hex_data.split()))
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    try:
        packet = Packet.decode(data)
    except UnknownTypeError as e:
        logger.warning("decode_packet: %s", e)
        return {"error": str(e), "header": _header_dict(e.header)}
    except LifxProtocolError as e:
        logger.warning("decode_packet failed: %s", e)
        return {"error": str(e)}

    return {
        "header": _header_dict(packet.header),
        "payload_type": type(packet.payload).__name__,
        "payload": packet.payload.to_dict(),
    }


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("lifx://protocol/header-layout")
def resource_header_layout() -> str:
    """Byte layout of the 36-byte packet header."""
    return json.dumps({"byte_order": "little-endian", "header": HEADER_LAYOUT})


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def explain_packet(hex_data: str) -> str:
    """Walk through a captured packet field by field.

    Args:
        hex_data: Packet bytes as hex.
    """
    return f"""Decode this LIFX packet with the decode_packet tool: {hex_data}

Then explain:
- Who sent it (source) and which device it targets
- Whether it is a broadcast (tagged) or addressed message
- What the message type asks for or reports
- What the payload values mean in human terms

Use the lifx://protocol/header-layout resource for byte offsets."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
