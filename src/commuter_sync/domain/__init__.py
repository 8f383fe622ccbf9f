"""Domain layer - protocol state, messages and ports."""

from commuter_sync.domain.models import (
    JourneyDetail,
    LoadState,
    Station,
    SyncSession,
    TrainDeparture,
)
from commuter_sync.domain.ports import (
    ChannelHandlers,
    MessageChannel,
    PresentationAdapter,
)

__all__ = [
    "ChannelHandlers",
    "JourneyDetail",
    "LoadState",
    "MessageChannel",
    "PresentationAdapter",
    "Station",
    "SyncSession",
    "TrainDeparture",
]
