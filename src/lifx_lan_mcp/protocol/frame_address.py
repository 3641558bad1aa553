"""FrameAddress codec: bytes 8-23 of the packet header.

Layout::

    +----------+----------------+--------------------------------+----------+
    |  Target  | Reserved block | reserved | ack_req | res_req   | Sequence |
    | 8 bytes  |    6 bytes     |   6 b    |   1 b   |   1 b     |  1 byte  |
    +----------+----------------+--------------------------------+----------+

The flags byte packs three fields (bit 7 is the most significant):

    ============ ===== =====
    field        bits  mask
    ============ ===== =====
    reserved     7-2   0xFC
    ack_required 1     0x02
    res_required 0     0x01
    ============ ===== =====
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import FieldRangeError, ReservedOverflowError
from ..utils.address import (
    BROADCAST_TARGET,
    decode_target,
    encode_target,
    format_mac,
)
from ..utils.wire import (
    DEFAULT_BYTE_ORDER,
    ByteOrder,
    Readable,
    as_stream,
    pack,
    read_exact,
    read_struct,
)

FRAME_ADDRESS_SIZE = 16
RESERVED_BLOCK_SIZE = 6

MAX_RESERVED = 0x3F  # 6 bits

RESERVED_SHIFT = 2
ACK_REQUIRED_BIT = 1 << 1
RES_REQUIRED_BIT = 1 << 0


def pack_address_flags(reserved: int, ack_required: bool, res_required: bool) -> int:
    """Combine reserved/ack_required/res_required into one u8."""
    if not 0 <= reserved <= MAX_RESERVED:
        raise ReservedOverflowError("FrameAddress.reserved", reserved, MAX_RESERVED)
    value = reserved << RESERVED_SHIFT
    if ack_required:
        value |= ACK_REQUIRED_BIT
    if res_required:
        value |= RES_REQUIRED_BIT
    return value


def unpack_address_flags(value: int) -> tuple[int, bool, bool]:
    """Split a packed u8 into (reserved, ack_required, res_required)."""
    return (
        (value >> RESERVED_SHIFT) & MAX_RESERVED,
        bool(value & ACK_REQUIRED_BIT),
        bool(value & RES_REQUIRED_BIT),
    )


@dataclass
class FrameAddress:
    """Target device, response requirements and sequence number.

    ``target`` is the device MAC address. All zeros (the default) together
    with ``Frame.tagged`` addresses every device on the network. An 8-byte
    value is accepted only when its last two bytes are zero.
    """

    target: bytes = BROADCAST_TARGET
    reserved_block: bytes = field(default_factory=lambda: bytes(RESERVED_BLOCK_SIZE))
    reserved: int = 0
    ack_required: bool = False
    res_required: bool = False
    sequence: int = 0

    def encode(self, order: ByteOrder = DEFAULT_BYTE_ORDER) -> bytes:
        """Serialize to 16 bytes.

        Raises:
            ReservedOverflowError: If ``reserved`` > 63.
            MalformedTargetError: If ``target`` is not a valid address.
            FieldRangeError: If ``reserved_block`` is not 6 bytes or
                ``sequence`` does not fit a u8.
        """
        flags = pack_address_flags(self.reserved, self.ack_required, self.res_required)
        if len(self.reserved_block) != RESERVED_BLOCK_SIZE:
            raise FieldRangeError(
                "FrameAddress.reserved_block",
                self.reserved_block,
                message=(
                    f"FrameAddress.reserved_block must be {RESERVED_BLOCK_SIZE} "
                    f"bytes, got {len(self.reserved_block)}"
                ),
            )
        return (
            pack(order, "Q", encode_target(self.target))
            + bytes(self.reserved_block)
            + pack(order, "BB", flags, self.sequence, field="FrameAddress.sequence")
        )

    @classmethod
    def decode(cls, data: Readable, order: ByteOrder = DEFAULT_BYTE_ORDER) -> FrameAddress:
        """Read 16 bytes and build a new FrameAddress."""
        stream = as_stream(data)
        (target,) = read_struct(stream, order, "Q")
        reserved_block = read_exact(stream, RESERVED_BLOCK_SIZE)
        flags, sequence = read_struct(stream, order, "BB")
        reserved, ack_required, res_required = unpack_address_flags(flags)
        return cls(
            target=decode_target(target),
            reserved_block=reserved_block,
            reserved=reserved,
            ack_required=ack_required,
            res_required=res_required,
            sequence=sequence,
        )

    @property
    def is_broadcast(self) -> bool:
        return not any(self.target)

    def __repr__(self) -> str:
        try:
            target = format_mac(self.target)
        except ValueError:
            target = repr(self.target)
        return (
            f"FrameAddress(target={target}, ack_required={self.ack_required}, "
            f"res_required={self.res_required}, sequence={self.sequence})"
        )
