"""Conversion between 6-byte device addresses and the 64-bit target field.

The target field is 8 bytes wide on the wire. A 6-byte MAC address is
left-justified into it: byte 0 lands in bits 63-56, byte 5 in bits 23-16,
and the low 16 bits are zero-filled.
"""

from __future__ import annotations

import re

from ..errors import MalformedTargetError

TARGET_SIZE = 6
BROADCAST_TARGET = bytes(TARGET_SIZE)

_MAC_SEPARATORS = re.compile(r"[:\-.\s]")


def normalize_target(target: bytes | bytearray) -> bytes:
    """Return the 6 significant bytes of ``target``.

    Accepts exactly 6 bytes, or 8 bytes whose last two bytes are zero
    (the padded form the protocol documentation uses).

    Raises:
        MalformedTargetError: For any other shape.
    """
    if not isinstance(target, (bytes, bytearray)):
        raise MalformedTargetError(target)
    if len(target) == TARGET_SIZE:
        return bytes(target)
    if len(target) == 8 and target[6] == 0 and target[7] == 0:
        return bytes(target[:TARGET_SIZE])
    raise MalformedTargetError(target)


def encode_target(target: bytes | bytearray) -> int:
    """Pack a device address into the upper 48 bits of a u64."""
    value = 0
    for i, byte in enumerate(normalize_target(target)):
        value |= byte << (56 - 8 * i)
    return value


def decode_target(value: int) -> bytes:
    """Extract the 6-byte device address from a u64 target value."""
    return bytes((value >> (56 - 8 * i)) & 0xFF for i in range(TARGET_SIZE))


def format_mac(target: bytes | bytearray) -> str:
    """Render a target as ``01:23:45:67:89:ab``."""
    return ":".join(f"{b:02x}" for b in normalize_target(target))


def parse_mac(text: str | bytes | bytearray) -> bytes:
    """Parse a MAC address string (``:``/``-`` separated or bare hex).

    Byte strings are validated and returned as-is.
    """
    if isinstance(text, (bytes, bytearray)):
        return normalize_target(text)
    digits = _MAC_SEPARATORS.sub("", text.strip())
    try:
        raw = bytes.fromhex(digits)
    except ValueError as e:
        raise MalformedTargetError(text) from e
    return normalize_target(raw)
