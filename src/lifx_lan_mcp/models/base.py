"""Base class shared by every message payload.

Each payload has a fixed-size binary representation with no length
prefix; the message type in the header is what tells a receiver how many
bytes to read. Subclasses describe their layout as ``(name, struct code)``
pairs in ``FIELDS`` and the base class does the packing.
"""

from __future__ import annotations

import struct
from dataclasses import asdict, dataclass
from typing import Any, ClassVar

from ..errors import FieldRangeError
from ..utils.wire import (
    DEFAULT_BYTE_ORDER,
    ByteOrder,
    Readable,
    as_stream,
    pack,
    read_struct,
)

LABEL_SIZE = 32


def fixed_bytes(value: bytes | bytearray | str, size: int, field: str, truncate: bool = False) -> bytes:
    """Zero-pad ``value`` to ``size`` bytes.

    Strings are UTF-8 encoded first. Longer input raises unless
    ``truncate`` is set.
    """
    if isinstance(value, str):
        value = value.encode("utf-8")
    if len(value) > size:
        if not truncate:
            raise FieldRangeError(
                field, value, message=f"{field} cannot be larger than {size} bytes, got {len(value)}"
            )
        value = value[:size]
    return bytes(value) + bytes(size - len(value))


def make_label(text: bytes | str, truncate: bool = False) -> bytes:
    """Build a 32-byte device label."""
    return fixed_bytes(text, LABEL_SIZE, "label", truncate=truncate)


def trim_nul(value: bytes) -> str:
    """Decode a NUL-padded byte field for display."""
    return value.rstrip(b"\x00").decode("utf-8", errors="replace")


@dataclass
class Payload:
    """Base class for message payloads."""

    FIELDS: ClassVar[tuple[tuple[str, str], ...]] = ()

    @classmethod
    def wire_format(cls) -> str:
        return "".join(code for _, code in cls.FIELDS)

    @classmethod
    def size(cls) -> int:
        """Encoded length in bytes."""
        return struct.calcsize("<" + cls.wire_format())

    def _wire_values(self) -> tuple:
        values = []
        for name, code in self.FIELDS:
            value = getattr(self, name)
            if code.endswith("s"):
                value = fixed_bytes(value, int(code[:-1]), f"{type(self).__name__}.{name}")
            values.append(value)
        return tuple(values)

    @classmethod
    def _from_wire(cls, values: tuple) -> Payload:
        return cls(**{name: value for (name, _), value in zip(cls.FIELDS, values)})

    def encode(self, order: ByteOrder = DEFAULT_BYTE_ORDER) -> bytes:
        return pack(order, self.wire_format(), *self._wire_values(), field=type(self).__name__)

    @classmethod
    def decode(cls, data: Readable, order: ByteOrder = DEFAULT_BYTE_ORDER) -> Payload:
        """Read ``size()`` bytes and build a new payload."""
        return cls._from_wire(read_struct(as_stream(data), order, cls.wire_format()))

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable view; byte fields are rendered as hex."""
        return _jsonable(asdict(self))


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return value


@dataclass
class EmptyPayload(Payload):
    """Zero-length body used by ``Get*`` requests and acknowledgements."""

    def __repr__(self) -> str:
        return "EmptyPayload()"
