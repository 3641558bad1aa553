"""Payloads for the generic device messages (type codes 2-59).

Timestamps on the wire are nanoseconds since the UNIX epoch; the
``*_time`` properties convert them to UTC datetimes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import ClassVar

from .base import LABEL_SIZE, Payload, fixed_bytes, trim_nul

ECHO_PAYLOAD_SIZE = 64
LOCATION_ID_SIZE = 16

SERVICE_UDP = 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def nanoseconds_to_datetime(nanoseconds: int) -> datetime | None:
    """Convert a ns epoch timestamp to a UTC datetime (``None`` for 0)."""
    if not nanoseconds:
        return None
    return _EPOCH + timedelta(microseconds=nanoseconds // 1000)


def power_repr(level: int) -> str:
    """Render a power level as ``0 (OFF)``, ``65535 (ON)`` or the number."""
    if level == 0:
        return "0 (OFF)"
    if level == 0xFFFF:
        return "65535 (ON)"
    return str(level)


@dataclass
class DeviceStateService(Payload):
    """Response to GetService: service kind (1 = UDP) and port.

    A port of 0 means the service is temporarily unavailable.
    """

    FIELDS: ClassVar = (("service", "B"), ("port", "I"))
    service: int = SERVICE_UDP
    port: int = 0


@dataclass
class DeviceStateHostInfo(Payload):
    """Host MCU radio statistics."""

    FIELDS: ClassVar = (("signal", "f"), ("tx", "I"), ("rx", "I"), ("reserved", "h"))
    signal: float = 0.0  # milliwatts
    tx: int = 0
    rx: int = 0
    reserved: int = 0


@dataclass
class DeviceStateHostFirmware(Payload):
    """Host firmware build time and version."""

    FIELDS: ClassVar = (("build", "Q"), ("reserved", "Q"), ("version", "I"))
    build: int = 0
    reserved: int = 0
    version: int = 0

    @property
    def build_time(self) -> datetime | None:
        return nanoseconds_to_datetime(self.build)


@dataclass
class DeviceStateWifiInfo(DeviceStateHostInfo):
    """Wifi subsystem radio statistics."""


@dataclass
class DeviceStateWifiFirmware(DeviceStateHostFirmware):
    """Wifi subsystem firmware build time and version."""


@dataclass
class DeviceStatePower(Payload):
    """Device power level; used by both SetPower and StatePower.

    The level is either 0 (off) or 65535 (on).
    """

    FIELDS: ClassVar = (("level", "H"),)
    level: int = 0

    def __repr__(self) -> str:
        return f"DeviceStatePower(level={power_repr(self.level)})"


@dataclass
class DeviceStateLabel(Payload):
    """Device label; used by both SetLabel and StateLabel."""

    FIELDS: ClassVar = (("label", f"{LABEL_SIZE}s"),)
    label: bytes = bytes(LABEL_SIZE)

    @property
    def label_text(self) -> str:
        return trim_nul(self.label)

    def __repr__(self) -> str:
        return f"DeviceStateLabel(label={self.label_text!r})"


@dataclass
class DeviceStateVersion(Payload):
    """Hardware vendor, product and version ids."""

    FIELDS: ClassVar = (("vendor", "I"), ("product", "I"), ("version", "I"))
    vendor: int = 0
    product: int = 0
    version: int = 0


@dataclass
class DeviceStateInfo(Payload):
    """Current time, uptime and last downtime, all in nanoseconds."""

    FIELDS: ClassVar = (("time", "Q"), ("uptime", "Q"), ("downtime", "Q"))
    time: int = 0
    uptime: int = 0
    downtime: int = 0

    @property
    def current_time(self) -> datetime | None:
        return nanoseconds_to_datetime(self.time)


@dataclass
class DeviceStateLocation(Payload):
    """Location id, location label and last-update timestamp."""

    FIELDS: ClassVar = (
        ("location", f"{LOCATION_ID_SIZE}s"),
        ("label", f"{LABEL_SIZE}s"),
        ("updated_at", "Q"),
    )
    location: bytes = bytes(LOCATION_ID_SIZE)
    label: bytes = bytes(LABEL_SIZE)
    updated_at: int = 0

    @property
    def label_text(self) -> str:
        return trim_nul(self.label)

    @property
    def updated_time(self) -> datetime | None:
        return nanoseconds_to_datetime(self.updated_at)


@dataclass
class DeviceStateGroup(Payload):
    """Group id, group label and last-update timestamp."""

    FIELDS: ClassVar = (
        ("group", f"{LOCATION_ID_SIZE}s"),
        ("label", f"{LABEL_SIZE}s"),
        ("updated_at", "Q"),
    )
    group: bytes = bytes(LOCATION_ID_SIZE)
    label: bytes = bytes(LABEL_SIZE)
    updated_at: int = 0

    @property
    def label_text(self) -> str:
        return trim_nul(self.label)

    @property
    def updated_time(self) -> datetime | None:
        return nanoseconds_to_datetime(self.updated_at)


@dataclass
class DeviceEcho(Payload):
    """64 opaque bytes; the device echoes an EchoRequest body back."""

    FIELDS: ClassVar = (("payload", f"{ECHO_PAYLOAD_SIZE}s"),)
    payload: bytes = field(default_factory=lambda: bytes(ECHO_PAYLOAD_SIZE))

    @classmethod
    def from_data(cls, data: bytes | str, truncate: bool = True) -> DeviceEcho:
        return cls(payload=fixed_bytes(data, ECHO_PAYLOAD_SIZE, "DeviceEcho.payload", truncate=truncate))

    def __repr__(self) -> str:
        return f"DeviceEcho(payload={trim_nul(self.payload)!r})"
