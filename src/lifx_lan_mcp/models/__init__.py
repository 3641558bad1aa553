"""Message payload models for device and light messages."""

from .base import EmptyPayload, Payload, make_label
from .device import (
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
from .light import (
    LightHSBK,
    LightSetColor,
    LightSetPower,
    LightState,
    LightStatePower,
)
