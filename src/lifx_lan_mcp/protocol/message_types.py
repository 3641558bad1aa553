"""Message type codes carried in ``ProtocolHeader.type``.

Codes are fixed by the LIFX LAN protocol and must never be renumbered.
Generic device messages occupy 2-59, light messages 101-118.
"""

from __future__ import annotations

from enum import IntEnum

UNKNOWN_TYPE_NAME = "UnknownType"


class MessageType(IntEnum):
    """Message type identifiers."""

    # Device messages
    DEVICE_GET_SERVICE = 2
    DEVICE_STATE_SERVICE = 3
    DEVICE_GET_HOST_INFO = 12
    DEVICE_STATE_HOST_INFO = 13
    DEVICE_GET_HOST_FIRMWARE = 14
    DEVICE_STATE_HOST_FIRMWARE = 15
    DEVICE_GET_WIFI_INFO = 16
    DEVICE_STATE_WIFI_INFO = 17
    DEVICE_GET_WIFI_FIRMWARE = 18
    DEVICE_STATE_WIFI_FIRMWARE = 19
    DEVICE_GET_POWER = 20
    DEVICE_SET_POWER = 21
    DEVICE_STATE_POWER = 22
    DEVICE_GET_LABEL = 23
    DEVICE_SET_LABEL = 24
    DEVICE_STATE_LABEL = 25
    DEVICE_GET_VERSION = 32
    DEVICE_STATE_VERSION = 33
    DEVICE_GET_INFO = 34
    DEVICE_STATE_INFO = 35
    DEVICE_ACKNOWLEDGEMENT = 45
    DEVICE_GET_LOCATION = 48
    DEVICE_STATE_LOCATION = 50
    DEVICE_GET_GROUP = 51
    DEVICE_STATE_GROUP = 53
    DEVICE_ECHO_REQUEST = 58
    DEVICE_ECHO_RESPONSE = 59

    # Light messages
    LIGHT_GET = 101
    LIGHT_SET_COLOR = 102
    LIGHT_STATE = 107
    LIGHT_GET_POWER = 116
    LIGHT_SET_POWER = 117
    LIGHT_STATE_POWER = 118

    @property
    def display_name(self) -> str:
        """CamelCase protocol name, e.g. ``LightStatePower``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


def message_type_name(code: int) -> str:
    """Human-readable name for a type code, for diagnostics only.

    Unrecognised codes map to ``"UnknownType"``.
    """
    try:
        return MessageType(code).display_name
    except ValueError:
        return UNKNOWN_TYPE_NAME


def is_known_type(code: int) -> bool:
    return code in MessageType._value2member_map_
