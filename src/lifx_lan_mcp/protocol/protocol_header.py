"""ProtocolHeader codec: bytes 24-35 of the packet header.

Three plain fields, no bit packing: reserved (u64), type (u16),
reserved_end (u16).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..utils.wire import DEFAULT_BYTE_ORDER, ByteOrder, Readable, as_stream, pack, read_struct
from .message_types import message_type_name

PROTOCOL_HEADER_SIZE = 12


@dataclass
class ProtocolHeader:
    """Message type of the payload that follows the header."""

    reserved: int = 0
    type: int = 0
    reserved_end: int = 0

    def encode(self, order: ByteOrder = DEFAULT_BYTE_ORDER) -> bytes:
        return pack(
            order, "QHH", self.reserved, self.type, self.reserved_end,
            field="ProtocolHeader",
        )

    @classmethod
    def decode(cls, data: Readable, order: ByteOrder = DEFAULT_BYTE_ORDER) -> ProtocolHeader:
        reserved, type_, reserved_end = read_struct(as_stream(data), order, "QHH")
        return cls(reserved=reserved, type=type_, reserved_end=reserved_end)

    @property
    def type_name(self) -> str:
        return message_type_name(self.type)

    def __repr__(self) -> str:
        return f"ProtocolHeader(type={int(self.type)} ({self.type_name}))"
