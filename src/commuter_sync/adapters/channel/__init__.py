"""Message channel adapters."""

from commuter_sync.adapters.channel.codec import (
    MessageDecodeError,
    MessageType,
    decode_inbound,
    decode_outbound,
    encode,
    encode_outbound,
)
from commuter_sync.adapters.channel.loopback_channel import LoopbackChannel
from commuter_sync.adapters.channel.websocket_channel import WebSocketChannel

__all__ = [
    "LoopbackChannel",
    "MessageDecodeError",
    "MessageType",
    "WebSocketChannel",
    "decode_inbound",
    "decode_outbound",
    "encode",
    "encode_outbound",
]
