"""Frame codec: the first 8 bytes of every packet header.

Frame layout::

    +---------+----------------------------------------------+---------+
    |  Size   | origin | tagged | addressable |   protocol   | Source  |
    | 2 bytes |  2 b   |  1 b   |     1 b     |     12 b     | 4 bytes |
    +---------+----------------------------------------------+---------+

The middle u16 packs four fields; bit positions are counted from the
least significant bit of the decoded integer:

    ========== ====== ======
    field      bits   mask
    ========== ====== ======
    origin     15-14  0xC000
    tagged     13     0x2000
    addressable 12    0x1000
    protocol   11-0   0x0FFF
    ========== ====== ======
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import OriginOverflowError, ProtocolOverflowError
from ..utils.wire import (
    DEFAULT_BYTE_ORDER,
    ByteOrder,
    Readable,
    as_stream,
    pack,
    read_struct,
)

FRAME_SIZE = 8

PROTOCOL_NUMBER = 1024

MAX_ORIGIN = 0x3  # 2 bits
MAX_PROTOCOL = 0xFFF  # 12 bits

ORIGIN_SHIFT = 14
TAGGED_BIT = 1 << 13
ADDRESSABLE_BIT = 1 << 12
PROTOCOL_MASK = 0x0FFF


def pack_frame_flags(origin: int, tagged: bool, addressable: bool, protocol: int) -> int:
    """Combine origin/tagged/addressable/protocol into one u16."""
    if not 0 <= origin <= MAX_ORIGIN:
        raise OriginOverflowError("Frame.origin", origin, MAX_ORIGIN)
    if not 0 <= protocol <= MAX_PROTOCOL:
        raise ProtocolOverflowError("Frame.protocol", protocol, MAX_PROTOCOL)
    value = (origin << ORIGIN_SHIFT) | (protocol & PROTOCOL_MASK)
    if tagged:
        value |= TAGGED_BIT
    if addressable:
        value |= ADDRESSABLE_BIT
    return value


def unpack_frame_flags(value: int) -> tuple[int, bool, bool, int]:
    """Split a packed u16 into (origin, tagged, addressable, protocol)."""
    return (
        (value >> ORIGIN_SHIFT) & MAX_ORIGIN,
        bool(value & TAGGED_BIT),
        bool(value & ADDRESSABLE_BIT),
        value & PROTOCOL_MASK,
    )


@dataclass
class Frame:
    """Message size, addressing mode, protocol number and source id.

    ``size`` is the size of the whole packet including this header. It is
    filled in by :meth:`Packet.encode <lifx_lan_mcp.protocol.packet.Packet.encode>`;
    whatever the caller sets is overwritten there.

    For discovery (``DeviceGetService``) set ``tagged=True`` and leave the
    frame address target all zeros; every other message should carry the
    device's own address with ``tagged=False``.
    """

    size: int = 0
    origin: int = 0
    tagged: bool = False
    addressable: bool = True
    protocol: int = PROTOCOL_NUMBER
    source: int = 0

    def encode(self, order: ByteOrder = DEFAULT_BYTE_ORDER) -> bytes:
        """Serialize to 8 bytes.

        Raises:
            OriginOverflowError: If ``origin`` > 3.
            ProtocolOverflowError: If ``protocol`` > 4095.
            FieldRangeError: If ``size`` or ``source`` do not fit u16/u32.
        """
        flags = pack_frame_flags(self.origin, self.tagged, self.addressable, self.protocol)
        return (
            pack(order, "H", self.size, field="Frame.size")
            + pack(order, "H", flags)
            + pack(order, "I", self.source, field="Frame.source")
        )

    @classmethod
    def decode(cls, data: Readable, order: ByteOrder = DEFAULT_BYTE_ORDER) -> Frame:
        """Read 8 bytes and build a new Frame.

        No range checks are needed: origin and protocol are read from
        2 and 12 bits respectively.
        """
        size, flags, source = read_struct(as_stream(data), order, "HHI")
        origin, tagged, addressable, protocol = unpack_frame_flags(flags)
        return cls(
            size=size,
            origin=origin,
            tagged=tagged,
            addressable=addressable,
            protocol=protocol,
            source=source,
        )

    def __repr__(self) -> str:
        return (
            f"Frame(size={self.size}, origin={self.origin}, tagged={self.tagged}, "
            f"addressable={self.addressable}, protocol={self.protocol}, "
            f"source=0x{self.source:X})"
        )
