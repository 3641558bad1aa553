"""Exception types raised by the LIFX LAN packet codec.

Every error derives from :class:`LifxProtocolError`, so callers can catch
the whole family at once while still telling the failure modes apart.
Nothing in the codec retries or swallows these; they always reach the
caller that asked for the encode or decode.
"""

from __future__ import annotations

from typing import Any


class LifxProtocolError(Exception):
    """Base exception for all codec errors."""


class FieldRangeError(LifxProtocolError, ValueError):
    """A field value does not fit the bit width it is packed into.

    Attributes:
        field: Name of the offending field (e.g. ``"Frame.origin"``).
        value: The rejected value.
        maximum: Largest value the field can hold, if it has one.
    """

    def __init__(self, field: str, value: Any, maximum: int | None = None, message: str | None = None):
        self.field = field
        self.value = value
        self.maximum = maximum
        if message is None:
            if maximum is None:
                message = f"{field} value {value!r} is out of range"
            else:
                message = f"{field} cannot be larger than {maximum}, got {value!r}"
        super().__init__(message)


class OriginOverflowError(FieldRangeError):
    """``Frame.origin`` does not fit in 2 bits."""


class ProtocolOverflowError(FieldRangeError):
    """``Frame.protocol`` does not fit in 12 bits."""


class ReservedOverflowError(FieldRangeError):
    """``FrameAddress.reserved`` does not fit in 6 bits."""


class DurationOverflowError(FieldRangeError):
    """A transition duration does not fit the u32 millisecond field."""


class MalformedTargetError(LifxProtocolError, ValueError):
    """The target address is not 6 bytes (or 8 bytes ending in two zeros).

    Attributes:
        target: The rejected target value.
    """

    def __init__(self, target: Any):
        self.target = target
        length = len(target) if hasattr(target, "__len__") else "?"
        super().__init__(
            f"Target must contain exactly 6 bytes (or 8 bytes whose last two "
            f"are zero), got {length} bytes: {target!r}"
        )


class StructuralError(LifxProtocolError, TypeError):
    """A required sub-component of a header or packet is missing."""


class SizeOverflowError(LifxProtocolError):
    """The encoded packet would not fit in the u16 ``Frame.size`` field.

    Attributes:
        size: Total packet size that was computed.
        maximum: Largest size the field can hold.
    """

    def __init__(self, size: int, maximum: int):
        self.size = size
        self.maximum = maximum
        super().__init__(
            f"Size of packet ({size}) would overflow the Frame.size "
            f"u16 field (max {maximum})"
        )


class UnknownTypeError(LifxProtocolError):
    """A decoded header names a message type with no registered payload.

    The header itself decoded cleanly and is kept on the exception so the
    caller can still inspect source, target and sequence.

    Attributes:
        message_type: The unrecognised type code.
        header: The fully decoded :class:`~lifx_lan_mcp.protocol.header.Header`.
    """

    def __init__(self, message_type: int, header: Any = None):
        self.message_type = message_type
        self.header = header
        super().__init__(f"Unknown message type {message_type}")


class ShortReadError(LifxProtocolError, EOFError):
    """The stream ran out before a fixed-size field was fully read.

    Attributes:
        expected: Number of bytes requested.
        received: Number of bytes actually available.
    """

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Unexpected end of stream: wanted {expected} bytes, got {received}"
        )
