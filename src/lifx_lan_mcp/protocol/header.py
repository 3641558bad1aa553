"""The 36-byte packet header: Frame + FrameAddress + ProtocolHeader.

Layout (offsets in bytes)::

    0   size                       (Frame)
    2   origin|tagged|addressable|protocol
    4   source
    8   target                     (FrameAddress)
    16  reserved block
    22  reserved|ack_required|res_required
    23  sequence
    24  reserved                   (ProtocolHeader)
    32  type
    34  reserved_end
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import StructuralError
from ..utils.wire import DEFAULT_BYTE_ORDER, ByteOrder, Readable, as_stream
from .frame import FRAME_SIZE, Frame
from .frame_address import FRAME_ADDRESS_SIZE, FrameAddress
from .protocol_header import PROTOCOL_HEADER_SIZE, ProtocolHeader

HEADER_SIZE = FRAME_SIZE + FRAME_ADDRESS_SIZE + PROTOCOL_HEADER_SIZE  # 36

_PARTS = (
    ("frame", Frame),
    ("frame_address", FrameAddress),
    ("protocol_header", ProtocolHeader),
)


@dataclass
class Header:
    """A complete packet header. All three parts are required."""

    frame: Frame
    frame_address: FrameAddress
    protocol_header: ProtocolHeader

    def __post_init__(self) -> None:
        self._require_parts()

    def _require_parts(self) -> None:
        for name, kind in _PARTS:
            part = getattr(self, name)
            if part is None:
                raise StructuralError(f"Header.{name} cannot be None")
            if not isinstance(part, kind):
                raise StructuralError(
                    f"Header.{name} must be a {kind.__name__}, got {type(part).__name__}"
                )

    @classmethod
    def new(
        cls,
        message_type: int,
        target: bytes | None = None,
        source: int = 0,
        sequence: int = 0,
        tagged: bool = False,
        ack_required: bool = False,
        res_required: bool = False,
    ) -> Header:
        """Build a header with protocol defaults for one message type."""
        frame_address = FrameAddress(
            ack_required=ack_required,
            res_required=res_required,
            sequence=sequence,
        )
        if target is not None:
            frame_address.target = target
        return cls(
            frame=Frame(tagged=tagged, source=source),
            frame_address=frame_address,
            protocol_header=ProtocolHeader(type=int(message_type)),
        )

    def encode(self, order: ByteOrder = DEFAULT_BYTE_ORDER) -> bytes:
        """Serialize to exactly 36 bytes.

        The first error raised by any part aborts the whole encode.
        """
        self._require_parts()
        return (
            self.frame.encode(order)
            + self.frame_address.encode(order)
            + self.protocol_header.encode(order)
        )

    @classmethod
    def decode(cls, data: Readable, order: ByteOrder = DEFAULT_BYTE_ORDER) -> Header:
        """Read 36 bytes: Frame, then FrameAddress, then ProtocolHeader."""
        stream = as_stream(data)
        frame = Frame.decode(stream, order)
        frame_address = FrameAddress.decode(stream, order)
        protocol_header = ProtocolHeader.decode(stream, order)
        return cls(frame=frame, frame_address=frame_address, protocol_header=protocol_header)

    @property
    def message_type(self) -> int:
        return self.protocol_header.type

    def __repr__(self) -> str:
        return (
            f"Header({self.frame!r}, {self.frame_address!r}, "
            f"{self.protocol_header!r})"
        )
