"""WebSocket channel to the companion process, built on aiohttp."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

import aiohttp

from commuter_sync.adapters.channel.codec import (
    MessageDecodeError,
    decode_inbound,
    encode_outbound,
    parse_frame,
    to_json,
)
from commuter_sync.domain.models.messages import OutboundMessage
from commuter_sync.domain.ports.message_channel import ChannelHandlers, MessageChannel

if TYPE_CHECKING:
    from aiohttp import ClientSession, ClientWebSocketResponse

logger = logging.getLogger(__name__)


class WebSocketChannel(MessageChannel):
    """Message channel over a single WebSocket connection.

    Frames are JSON text objects. Inbound frames larger than ``inbox_size`` or
    that fail to decode are reported as dropped; the connection stays up.
    Outbound messages wait in a bounded queue; a full queue, an oversized
    frame or a transport error is reported as a failed send.
    """

    def __init__(
        self,
        url: str,
        session: ClientSession,
        inbox_size: int = 2048,
        outbox_size: int = 2048,
        queue_length: int = 8,
    ) -> None:
        """Initialize the channel.

        Args:
            url: WebSocket URL of the companion.
            session: Shared aiohttp client session.
            inbox_size: Maximum inbound frame size in bytes.
            outbox_size: Maximum outbound frame size in bytes.
            queue_length: Number of outbound messages that may wait for the socket.
        """
        self._url = url
        self._session = session
        self._inbox_size = inbox_size
        self._outbox_size = outbox_size
        self._outbox: asyncio.Queue[tuple[OutboundMessage, str]] = asyncio.Queue(
            maxsize=queue_length
        )
        self._handlers: ChannelHandlers | None = None
        self._ws: ClientWebSocketResponse | None = None
        self._reader_task: asyncio.Task | None = None
        self._writer_task: asyncio.Task | None = None

    @property
    def is_open(self) -> bool:
        return self._ws is not None and not self._ws.closed

    def register_handlers(self, handlers: ChannelHandlers) -> None:
        self._handlers = handlers

    async def open(self) -> None:
        if self.is_open:
            logger.warning("WebSocket channel already open")
            return

        # Size limits are enforced per frame below, so oversized frames drop instead of
        # closing the connection.
        self._ws = await self._session.ws_connect(self._url, max_msg_size=0, heartbeat=30.0)
        self._reader_task = asyncio.create_task(self._read_loop())
        self._writer_task = asyncio.create_task(self._write_loop())
        logger.info(
            f"WebSocket channel open to {self._url} "
            f"(inbox {self._inbox_size} B, outbox {self._outbox_size} B)"
        )

    async def close(self) -> None:
        for task in (self._writer_task, self._reader_task):
            if task and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        self._writer_task = None
        self._reader_task = None

        if self._ws is not None:
            await self._ws.close()
            self._ws = None
        logger.info("WebSocket channel closed")

    def send(self, message: OutboundMessage) -> None:
        loop = asyncio.get_running_loop()
        frame = to_json(encode_outbound(message))

        if not self.is_open:
            loop.call_soon(self._report_failed, message, "channel is not open")
            return
        size = len(frame.encode("utf-8"))
        if size > self._outbox_size:
            loop.call_soon(
                self._report_failed,
                message,
                f"message of {size} B exceeds outbox of {self._outbox_size} B",
            )
            return
        try:
            self._outbox.put_nowait((message, frame))
        except asyncio.QueueFull:
            loop.call_soon(self._report_failed, message, "outbox is full")

    async def _write_loop(self) -> None:
        while True:
            message, frame = await self._outbox.get()
            try:
                if self._ws is None or self._ws.closed:
                    raise ConnectionResetError("WebSocket is closed")
                await self._ws.send_str(frame)
            except (aiohttp.ClientError, ConnectionResetError) as e:
                self._report_failed(message, str(e) or type(e).__name__)
            else:
                if self._handlers is not None:
                    self._handlers.on_sent(message)
            finally:
                self._outbox.task_done()

    async def _read_loop(self) -> None:
        if self._ws is None:
            return
        async for ws_message in self._ws:
            if ws_message.type == aiohttp.WSMsgType.TEXT:
                self._handle_frame(ws_message.data)
            elif ws_message.type == aiohttp.WSMsgType.BINARY:
                self._report_dropped("binary frames are not supported")
            elif ws_message.type == aiohttp.WSMsgType.ERROR:
                logger.error(f"WebSocket error: {self._ws.exception()}")
                break
        logger.warning("WebSocket connection to companion closed")

    def _handle_frame(self, frame: str) -> None:
        size = len(frame.encode("utf-8"))
        if size > self._inbox_size:
            self._report_dropped(f"inbound message of {size} B exceeds inbox")
            return
        try:
            message = decode_inbound(parse_frame(frame))
        except MessageDecodeError as e:
            self._report_dropped(str(e))
            return
        if self._handlers is not None:
            self._handlers.on_received(message)

    def _report_dropped(self, reason: str) -> None:
        if self._handlers is not None:
            self._handlers.on_dropped(reason)

    def _report_failed(self, message: OutboundMessage, reason: str) -> None:
        if self._handlers is not None:
            self._handlers.on_failed(message, reason)
