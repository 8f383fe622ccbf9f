"""Ports (interfaces) for the ports-and-adapters architecture."""

from commuter_sync.domain.ports.message_channel import ChannelHandlers, MessageChannel
from commuter_sync.domain.ports.presentation_adapter import PresentationAdapter

__all__ = [
    "ChannelHandlers",
    "MessageChannel",
    "PresentationAdapter",
]
