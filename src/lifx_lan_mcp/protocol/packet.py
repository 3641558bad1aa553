"""A complete packet: 36-byte header followed by a type-specific payload.

Payloads are anything that honours the codec contract: an
``encode(order) -> bytes`` method and a ``decode(stream, order)``
classmethod returning a new instance. The message type in the header is
what selects the payload class on decode; see :mod:`.registry`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..errors import SizeOverflowError, StructuralError, UnknownTypeError
from ..utils.wire import DEFAULT_BYTE_ORDER, ByteOrder, Readable, as_stream
from .header import HEADER_SIZE, Header
from .message_types import message_type_name
from .registry import codes_for, lookup_payload

logger = logging.getLogger(__name__)

MAX_PACKET_SIZE = 0xFFFF  # Frame.size is a u16


@dataclass
class Packet:
    """One message, inbound or outbound."""

    header: Header
    payload: Any

    def __post_init__(self) -> None:
        self._require_parts()

    def _require_parts(self) -> None:
        if self.header is None:
            raise StructuralError("Packet.header cannot be None")
        if not isinstance(self.header, Header):
            raise StructuralError(
                f"Packet.header must be a Header, got {type(self.header).__name__}"
            )
        if self.payload is None:
            raise StructuralError("Packet.payload cannot be None")
        if not callable(getattr(self.payload, "encode", None)):
            raise StructuralError(
                f"Packet.payload must provide encode(), got {type(self.payload).__name__}"
            )

    @classmethod
    def new(
        cls,
        payload: Any,
        message_type: int | None = None,
        target: bytes | None = None,
        source: int = 0,
        sequence: int = 0,
        tagged: bool = False,
        ack_required: bool = False,
        res_required: bool = False,
    ) -> Packet:
        """Build a packet around ``payload``.

        ``message_type`` may be omitted when the payload class is
        registered under exactly one code.
        """
        if message_type is None:
            codes = codes_for(type(payload))
            if len(codes) != 1:
                raise StructuralError(
                    f"message_type is required for {type(payload).__name__} "
                    f"(registered codes: {[int(c) for c in codes]})"
                )
            message_type = codes[0]
        header = Header.new(
            message_type,
            target=target,
            source=source,
            sequence=sequence,
            tagged=tagged,
            ack_required=ack_required,
            res_required=res_required,
        )
        return cls(header=header, payload=payload)

    @property
    def message_type(self) -> int:
        return self.header.protocol_header.type

    @property
    def size(self) -> int:
        """Total encoded size; always recomputed from the payload."""
        return HEADER_SIZE + len(self.payload.encode(DEFAULT_BYTE_ORDER))

    def encode(self, order: ByteOrder = DEFAULT_BYTE_ORDER) -> bytes:
        """Serialize header and payload.

        The payload is encoded first so that ``header.frame.size`` can be
        set to the real total before the header is written.

        Raises:
            StructuralError: If the header or payload is missing.
            SizeOverflowError: If the total exceeds 65535 bytes.
            LifxProtocolError: Anything raised by the header or payload codecs.
        """
        self._require_parts()
        payload = self.payload.encode(order)

        total = HEADER_SIZE + len(payload)
        if total > MAX_PACKET_SIZE:
            raise SizeOverflowError(total, MAX_PACKET_SIZE)

        self.header.frame.size = total
        header = self.header.encode(order)

        logger.debug(
            "Encoded packet: type=%d (%s), size=%d",
            self.message_type,
            message_type_name(self.message_type),
            total,
        )
        return header + payload

    @classmethod
    def decode(cls, data: Readable, order: ByteOrder = DEFAULT_BYTE_ORDER) -> Packet:
        """Decode a header, then the payload its type code selects.

        Raises:
            ShortReadError: If the data ends early.
            UnknownTypeError: If the type code has no registered payload;
                the decoded header is attached to the exception.
        """
        stream = as_stream(data)
        header = Header.decode(stream, order)

        message_type = header.protocol_header.type
        payload_cls = lookup_payload(message_type)
        if payload_cls is None:
            raise UnknownTypeError(message_type, header)

        payload = payload_cls.decode(stream, order)
        logger.debug(
            "Decoded packet: type=%d (%s), size=%d",
            message_type,
            message_type_name(message_type),
            header.frame.size,
        )
        return cls(header=header, payload=payload)

    def __repr__(self) -> str:
        return f"Packet(header={self.header!r}, payload={self.payload!r})"
