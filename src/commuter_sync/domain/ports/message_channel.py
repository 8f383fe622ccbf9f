"""Message channel port."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from commuter_sync.domain.models.messages import InboundMessage, OutboundMessage


@dataclass(frozen=True)
class ChannelHandlers:
    """Callbacks a channel invokes, one at a time, on the event loop."""

    on_received: Callable[[InboundMessage], None]
    on_dropped: Callable[[str], None]
    on_sent: Callable[[OutboundMessage], None]
    on_failed: Callable[[OutboundMessage, str], None]


class MessageChannel(ABC):
    """Port for the size-bounded, unreliable link to the companion process.

    ``send`` never blocks and never raises for transport problems: the outcome
    is reported later through ``on_sent`` or ``on_failed``.
    """

    @abstractmethod
    def register_handlers(self, handlers: ChannelHandlers) -> None:
        """Register the inbound/outbound event callbacks."""
        ...

    @abstractmethod
    async def open(self) -> None:
        """Open the channel with its bounded inbox/outbox."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the channel."""
        ...

    @abstractmethod
    def send(self, message: OutboundMessage) -> None:
        """Queue a message for delivery."""
        ...
