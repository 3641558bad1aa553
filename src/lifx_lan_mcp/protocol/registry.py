"""Message type to payload class dispatch table.

Request/response pairs with the same shape share one payload class
(e.g. SetPower and StatePower both carry :class:`DeviceStatePower`).
Every ``Get*`` request and the acknowledgement carry no body and map to
:class:`EmptyPayload`. Codes missing from the table cannot be decoded.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ..models.base import EmptyPayload, Payload
from ..models.device import (
    DeviceEcho,
    DeviceStateGroup,
    DeviceStateHostFirmware,
    DeviceStateHostInfo,
    DeviceStateInfo,
    DeviceStateLabel,
    DeviceStateLocation,
    DeviceStatePower,
    DeviceStateService,
    DeviceStateVersion,
    DeviceStateWifiFirmware,
    DeviceStateWifiInfo,
)
from ..models.light import LightSetColor, LightSetPower, LightState, LightStatePower
from .message_types import MessageType

PAYLOAD_REGISTRY: Mapping[int, type[Payload]] = MappingProxyType({
    # Requests without a body
    MessageType.DEVICE_GET_SERVICE: EmptyPayload,
    MessageType.DEVICE_GET_HOST_INFO: EmptyPayload,
    MessageType.DEVICE_GET_HOST_FIRMWARE: EmptyPayload,
    MessageType.DEVICE_GET_WIFI_INFO: EmptyPayload,
    MessageType.DEVICE_GET_WIFI_FIRMWARE: EmptyPayload,
    MessageType.DEVICE_GET_POWER: EmptyPayload,
    MessageType.DEVICE_GET_LABEL: EmptyPayload,
    MessageType.DEVICE_GET_VERSION: EmptyPayload,
    MessageType.DEVICE_GET_INFO: EmptyPayload,
    MessageType.DEVICE_ACKNOWLEDGEMENT: EmptyPayload,
    MessageType.DEVICE_GET_LOCATION: EmptyPayload,
    MessageType.DEVICE_GET_GROUP: EmptyPayload,
    MessageType.LIGHT_GET: EmptyPayload,
    MessageType.LIGHT_GET_POWER: EmptyPayload,
    # Device messages
    MessageType.DEVICE_STATE_SERVICE: DeviceStateService,
    MessageType.DEVICE_STATE_HOST_INFO: DeviceStateHostInfo,
    MessageType.DEVICE_STATE_HOST_FIRMWARE: DeviceStateHostFirmware,
    MessageType.DEVICE_STATE_WIFI_INFO: DeviceStateWifiInfo,
    MessageType.DEVICE_STATE_WIFI_FIRMWARE: DeviceStateWifiFirmware,
    MessageType.DEVICE_SET_POWER: DeviceStatePower,
    MessageType.DEVICE_STATE_POWER: DeviceStatePower,
    MessageType.DEVICE_SET_LABEL: DeviceStateLabel,
    MessageType.DEVICE_STATE_LABEL: DeviceStateLabel,
    MessageType.DEVICE_STATE_VERSION: DeviceStateVersion,
    MessageType.DEVICE_STATE_INFO: DeviceStateInfo,
    MessageType.DEVICE_STATE_LOCATION: DeviceStateLocation,
    MessageType.DEVICE_STATE_GROUP: DeviceStateGroup,
    MessageType.DEVICE_ECHO_REQUEST: DeviceEcho,
    MessageType.DEVICE_ECHO_RESPONSE: DeviceEcho,
    # Light messages
    MessageType.LIGHT_SET_COLOR: LightSetColor,
    MessageType.LIGHT_STATE: LightState,
    MessageType.LIGHT_SET_POWER: LightSetPower,
    MessageType.LIGHT_STATE_POWER: LightStatePower,
})


def lookup_payload(message_type: int) -> type[Payload] | None:
    """Payload class for a type code, or ``None`` if unregistered."""
    return PAYLOAD_REGISTRY.get(message_type)


def codes_for(payload_cls: type) -> tuple[MessageType, ...]:
    """All type codes whose payload is exactly ``payload_cls``."""
    return tuple(
        MessageType(code) for code, cls in PAYLOAD_REGISTRY.items() if cls is payload_cls
    )


def payload_types() -> list[type[Payload]]:
    """Distinct payload classes in registration order."""
    seen: list[type[Payload]] = []
    for cls in PAYLOAD_REGISTRY.values():
        if cls not in seen:
            seen.append(cls)
    return seen
