"""In-process channel connecting the client to a companion callable."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from commuter_sync.adapters.channel.codec import (
    MessageDecodeError,
    decode_inbound,
    encode_outbound,
    encoded_size,
)
from commuter_sync.domain.models.messages import OutboundMessage
from commuter_sync.domain.ports.message_channel import ChannelHandlers, MessageChannel

logger = logging.getLogger(__name__)

CompanionEndpoint = Callable[[dict[str, Any]], None]


class LoopbackChannel(MessageChannel):
    """Message channel that never leaves the process.

    Outbound messages are encoded to wire payloads and handed to the
    companion endpoint; the companion answers through ``deliver``. Every
    callback is deferred with ``loop.call_soon`` so handlers never re-enter
    each other, and size limits are enforced exactly as on a real link.
    """

    def __init__(
        self,
        companion: CompanionEndpoint | None = None,
        inbox_size: int = 2048,
        outbox_size: int = 2048,
    ) -> None:
        self._companion = companion
        self._inbox_size = inbox_size
        self._outbox_size = outbox_size
        self._handlers: ChannelHandlers | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._is_open = False

    def connect(self, companion: CompanionEndpoint) -> None:
        self._companion = companion

    def register_handlers(self, handlers: ChannelHandlers) -> None:
        self._handlers = handlers

    async def open(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._is_open = True
        logger.info(
            f"Loopback channel open (inbox {self._inbox_size} B, outbox {self._outbox_size} B)"
        )

    async def close(self) -> None:
        self._is_open = False
        logger.info("Loopback channel closed")

    def send(self, message: OutboundMessage) -> None:
        loop = self._require_loop()
        payload = encode_outbound(message)

        if not self._is_open or self._companion is None:
            loop.call_soon(self._report_failed, message, "channel is not connected")
            return
        size = encoded_size(payload)
        if size > self._outbox_size:
            loop.call_soon(
                self._report_failed,
                message,
                f"message of {size} B exceeds outbox of {self._outbox_size} B",
            )
            return

        loop.call_soon(self._transmit, message, payload)

    def deliver(self, payload: dict[str, Any]) -> None:
        """Queue a companion payload for the client."""
        self._require_loop().call_soon(self._receive, payload)

    def _transmit(self, message: OutboundMessage, payload: dict[str, Any]) -> None:
        if self._handlers is not None:
            self._handlers.on_sent(message)
        if self._companion is not None:
            self._companion(payload)

    def _receive(self, payload: dict[str, Any]) -> None:
        if self._handlers is None or not self._is_open:
            logger.debug("Discarding inbound payload: no handlers or channel closed")
            return

        size = encoded_size(payload)
        if size > self._inbox_size:
            self._handlers.on_dropped(f"inbound message of {size} B exceeds inbox")
            return
        try:
            message = decode_inbound(payload)
        except MessageDecodeError as e:
            self._handlers.on_dropped(str(e))
            return
        self._handlers.on_received(message)

    def _report_failed(self, message: OutboundMessage, reason: str) -> None:
        if self._handlers is not None:
            self._handlers.on_failed(message, reason)

    def _require_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop
