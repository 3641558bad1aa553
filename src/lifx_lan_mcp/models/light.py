"""Payloads for light messages (type codes 101-118).

Colors are HSBK values: hue, saturation and brightness each span the full
u16 range, kelvin is the color temperature (2500 warm to 9000 cool).
Transition durations travel as u32 milliseconds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, ClassVar

from ..errors import DurationOverflowError, StructuralError
from .base import LABEL_SIZE, Payload, fixed_bytes, trim_nul
from .device import power_repr

MAX_DURATION_MS = 0xFFFFFFFF  # 49 days, 17:02:47.295

_HSBK_FIELDS = (("hue", "H"), ("saturation", "H"), ("brightness", "H"), ("kelvin", "H"))


def duration_to_ms(duration: timedelta | int, field_name: str = "duration") -> int:
    """Convert a transition duration to whole milliseconds for the wire.

    Integers are taken as milliseconds already.

    Raises:
        DurationOverflowError: If negative or larger than a u32 can hold.
    """
    if isinstance(duration, timedelta):
        ms = duration // timedelta(milliseconds=1)
    else:
        ms = int(duration)
    if not 0 <= ms <= MAX_DURATION_MS:
        raise DurationOverflowError(
            field_name, duration, MAX_DURATION_MS,
            message=f"{field_name} would overflow uint32 milliseconds: {duration!r}",
        )
    return ms


def ms_to_duration(ms: int) -> timedelta:
    return timedelta(milliseconds=ms)


@dataclass
class LightHSBK(Payload):
    """Hue, saturation, brightness and kelvin (8 bytes)."""

    FIELDS: ClassVar = _HSBK_FIELDS
    hue: int = 0
    saturation: int = 0
    brightness: int = 0
    kelvin: int = 3500

    @classmethod
    def from_degrees(
        cls, hue: float, saturation: float, brightness: float, kelvin: int = 3500
    ) -> LightHSBK:
        """Build from hue in degrees and saturation/brightness in percent."""
        return cls(
            hue=round(min(hue % 360, 359) / 359 * 0xFFFF),
            saturation=round(max(0.0, min(saturation, 100.0)) / 100 * 0xFFFF),
            brightness=round(max(0.0, min(brightness, 100.0)) / 100 * 0xFFFF),
            kelvin=kelvin,
        )

    @property
    def hue_degrees(self) -> int:
        return round(self.hue * 359 / 0xFFFF)

    @property
    def saturation_percent(self) -> int:
        return self.saturation * 100 // 0xFFFF

    @property
    def brightness_percent(self) -> int:
        return self.brightness * 100 // 0xFFFF

    def __repr__(self) -> str:
        return (
            f"LightHSBK(hue={self.hue} ({self.hue_degrees}°), "
            f"saturation={self.saturation} ({self.saturation_percent}%), "
            f"brightness={self.brightness} ({self.brightness_percent}%), "
            f"kelvin={self.kelvin})"
        )


def _color_values(owner: str, color: LightHSBK | None) -> list[int]:
    if color is None:
        raise StructuralError(f"{owner}.color must be set before encoding")
    return [color.hue, color.saturation, color.brightness, color.kelvin]


@dataclass
class LightSetColor(Payload):
    """Change the light color over ``duration``."""

    FIELDS: ClassVar = (("reserved", "B"), *_HSBK_FIELDS, ("duration", "I"))
    reserved: int = 0
    color: LightHSBK = field(default_factory=LightHSBK)
    duration: timedelta = timedelta(0)

    def _wire_values(self) -> tuple:
        return (
            self.reserved,
            *_color_values("LightSetColor", self.color),
            duration_to_ms(self.duration, "LightSetColor.duration"),
        )

    @classmethod
    def _from_wire(cls, values: tuple) -> LightSetColor:
        reserved, hue, saturation, brightness, kelvin, duration = values
        return cls(
            reserved=reserved,
            color=LightHSBK(hue, saturation, brightness, kelvin),
            duration=ms_to_duration(duration),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "reserved": self.reserved,
            "color": self.color.to_dict(),
            "duration_ms": duration_to_ms(self.duration),
        }


@dataclass
class LightState(Payload):
    """Current color, power and label reported by a light (52 bytes)."""

    FIELDS: ClassVar = (
        *_HSBK_FIELDS,
        ("reserved", "H"),
        ("power", "H"),
        ("label", f"{LABEL_SIZE}s"),
        ("reserved_b", "Q"),
    )
    color: LightHSBK = field(default_factory=LightHSBK)
    reserved: int = 0
    power: int = 0
    label: bytes = bytes(LABEL_SIZE)
    reserved_b: int = 0

    def _wire_values(self) -> tuple:
        return (
            *_color_values("LightState", self.color),
            self.reserved,
            self.power,
            fixed_bytes(self.label, LABEL_SIZE, "LightState.label"),
            self.reserved_b,
        )

    @classmethod
    def _from_wire(cls, values: tuple) -> LightState:
        hue, saturation, brightness, kelvin, reserved, power, label, reserved_b = values
        return cls(
            color=LightHSBK(hue, saturation, brightness, kelvin),
            reserved=reserved,
            power=power,
            label=label,
            reserved_b=reserved_b,
        )

    @property
    def label_text(self) -> str:
        return trim_nul(self.label)

    def __repr__(self) -> str:
        return (
            f"LightState(color={self.color!r}, power={power_repr(self.power)}, "
            f"label={self.label_text!r})"
        )


@dataclass
class LightSetPower(Payload):
    """Change the light power level (0 or 65535) over ``duration``."""

    FIELDS: ClassVar = (("level", "H"), ("duration", "I"))
    level: int = 0
    duration: timedelta = timedelta(0)

    def _wire_values(self) -> tuple:
        return (self.level, duration_to_ms(self.duration, "LightSetPower.duration"))

    @classmethod
    def _from_wire(cls, values: tuple) -> LightSetPower:
        level, duration = values
        return cls(level=level, duration=ms_to_duration(duration))

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "duration_ms": duration_to_ms(self.duration)}

    def __repr__(self) -> str:
        return f"LightSetPower(level={power_repr(self.level)}, duration={self.duration})"


@dataclass
class LightStatePower(Payload):
    """Current light power level."""

    FIELDS: ClassVar = (("level", "H"),)
    level: int = 0

    def __repr__(self) -> str:
        return f"LightStatePower(level={power_repr(self.level)})"
