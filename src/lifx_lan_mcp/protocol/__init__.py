"""Protocol layer: header codecs, message types, payload dispatch and packet builders."""

from .frame import FRAME_SIZE, PROTOCOL_NUMBER, Frame
from .frame_address import FRAME_ADDRESS_SIZE, FrameAddress
from .protocol_header import PROTOCOL_HEADER_SIZE, ProtocolHeader
from .header import HEADER_SIZE, Header
from .message_types import MessageType, message_type_name
from .registry import PAYLOAD_REGISTRY, codes_for, lookup_payload, payload_types
from .packet import MAX_PACKET_SIZE, Packet
from .commands import LIFX_PORT
