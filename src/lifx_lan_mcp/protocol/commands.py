"""High-level packet builders for common requests.

Each builder returns a ready-to-encode :class:`Packet`. Requests that
expect a reply set ``res_required``; setters set ``ack_required`` so the
device confirms receipt with a DeviceAcknowledgement.
"""

from __future__ import annotations

from datetime import timedelta

from ..models.base import EmptyPayload, make_label
from ..models.device import DeviceEcho, DeviceStateLabel, DeviceStatePower
from ..models.light import LightHSBK, LightSetColor, LightSetPower
from .message_types import MessageType
from .packet import Packet
from .registry import lookup_payload

LIFX_PORT = 56700

POWER_OFF = 0
POWER_ON = 0xFFFF


def _power_level(on: bool | int) -> int:
    if isinstance(on, bool):
        return POWER_ON if on else POWER_OFF
    if on not in (POWER_OFF, POWER_ON):
        raise ValueError(f"Power level must be 0 or 65535, got {on}")
    return on


def build_get_service(source: int = 0, sequence: int = 0) -> Packet:
    """Build the tagged broadcast used for device discovery."""
    return Packet.new(
        EmptyPayload(),
        MessageType.DEVICE_GET_SERVICE,
        source=source,
        sequence=sequence,
        tagged=True,
        res_required=True,
    )


def build_get(
    message_type: MessageType,
    target: bytes | None = None,
    source: int = 0,
    sequence: int = 0,
) -> Packet:
    """Build any request whose body is empty (``Get*`` messages).

    Args:
        message_type: A code registered with :class:`EmptyPayload`.
        target: Device address; ``None`` broadcasts.
    """
    if lookup_payload(message_type) is not EmptyPayload:
        raise ValueError(f"{MessageType(message_type).display_name} is not an empty request")
    return Packet.new(
        EmptyPayload(),
        message_type,
        target=target,
        source=source,
        sequence=sequence,
        tagged=target is None,
        res_required=True,
    )


def build_set_power(
    target: bytes, on: bool | int, source: int = 0, sequence: int = 0
) -> Packet:
    """Build a DeviceSetPower request.

    Args:
        on: ``True``/``False`` or a raw level (0 or 65535).
    """
    return Packet.new(
        DeviceStatePower(level=_power_level(on)),
        MessageType.DEVICE_SET_POWER,
        target=target,
        source=source,
        sequence=sequence,
        ack_required=True,
    )


def build_set_label(
    target: bytes, label: str, source: int = 0, sequence: int = 0
) -> Packet:
    """Build a DeviceSetLabel request. Labels longer than 32 bytes raise."""
    return Packet.new(
        DeviceStateLabel(label=make_label(label)),
        MessageType.DEVICE_SET_LABEL,
        target=target,
        source=source,
        sequence=sequence,
        ack_required=True,
    )


def build_echo_request(
    target: bytes, data: bytes | str, source: int = 0, sequence: int = 0
) -> Packet:
    """Build a DeviceEchoRequest; ``data`` is padded or cut to 64 bytes."""
    return Packet.new(
        DeviceEcho.from_data(data),
        MessageType.DEVICE_ECHO_REQUEST,
        target=target,
        source=source,
        sequence=sequence,
        res_required=True,
    )


def build_light_set_color(
    target: bytes,
    color: LightHSBK,
    duration: timedelta = timedelta(0),
    source: int = 0,
    sequence: int = 0,
) -> Packet:
    """Build a LightSetColor request fading to ``color`` over ``duration``."""
    return Packet.new(
        LightSetColor(color=color, duration=duration),
        MessageType.LIGHT_SET_COLOR,
        target=target,
        source=source,
        sequence=sequence,
        ack_required=True,
    )


def build_light_set_power(
    target: bytes,
    on: bool | int,
    duration: timedelta = timedelta(0),
    source: int = 0,
    sequence: int = 0,
) -> Packet:
    """Build a LightSetPower request."""
    return Packet.new(
        LightSetPower(level=_power_level(on), duration=duration),
        MessageType.LIGHT_SET_POWER,
        target=target,
        source=source,
        sequence=sequence,
        ack_required=True,
    )
