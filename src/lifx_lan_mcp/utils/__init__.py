"""Shared helpers: device address conversion and fixed-width wire fields."""

from .address import (
    BROADCAST_TARGET,
    decode_target,
    encode_target,
    format_mac,
    parse_mac,
)
from .wire import DEFAULT_BYTE_ORDER, ByteOrder
