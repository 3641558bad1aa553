"""Low-level helpers for reading and writing fixed-width wire fields.

All multi-byte fields of a packet share one byte order. LIFX devices use
little-endian, which is the default everywhere in this package.
"""

from __future__ import annotations

import io
import struct
from enum import Enum
from typing import BinaryIO, Union

from ..errors import FieldRangeError, ShortReadError


class ByteOrder(str, Enum):
    """Byte order of multi-byte wire fields, as a ``struct`` prefix."""

    LITTLE = "<"
    BIG = ">"


DEFAULT_BYTE_ORDER = ByteOrder.LITTLE

Readable = Union[BinaryIO, bytes, bytearray, memoryview]


def pack(order: ByteOrder, fmt: str, *values, field: str = "value") -> bytes:
    """Pack ``values`` with ``struct`` using ``order``.

    Raises:
        FieldRangeError: If a value does not fit its C type.
    """
    try:
        return struct.pack(ByteOrder(order).value + fmt, *values)
    except struct.error as e:
        raise FieldRangeError(field, values, message=f"{field}: {e}") from e


def as_stream(data: Readable) -> BinaryIO:
    """Return a binary stream over ``data``, wrapping raw bytes if needed."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(data))
    return data


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``stream``.

    Raw streams may return fewer bytes than asked for; reading continues
    until ``size`` bytes arrive or the stream is exhausted.

    Raises:
        ShortReadError: If the stream ends first.
    """
    data = bytearray()
    while len(data) < size:
        chunk = stream.read(size - len(data))
        if not chunk:
            raise ShortReadError(size, len(data))
        data += chunk
    return bytes(data)


def read_struct(stream: BinaryIO, order: ByteOrder, fmt: str) -> tuple:
    """Read and unpack one ``struct`` format from ``stream``."""
    layout = struct.Struct(ByteOrder(order).value + fmt)
    return layout.unpack(read_exact(stream, layout.size))
