"""Domain models for the commuter sync protocol."""

from commuter_sync.domain.models.bounded_slots import BoundedSlots
from commuter_sync.domain.models.journey import MAX_JOURNEY_LEGS, JourneyDetail, JourneyLeg
from commuter_sync.domain.models.load_state import LoadState, RequestKind
from commuter_sync.domain.models.messages import (
    AcknowledgeMessage,
    DepartureCountMessage,
    DepartureMessage,
    DetailLegCountMessage,
    DetailLegMessage,
    InboundMessage,
    OutboundMessage,
    RequestDetailsMessage,
    RequestScheduleMessage,
    SetActiveRouteMessage,
    StationCountMessage,
    StationMessage,
)
from commuter_sync.domain.models.station import (
    DEFAULT_STATIONS,
    MAX_FAVORITE_STATIONS,
    Station,
    StationSet,
)
from commuter_sync.domain.models.summary_slice import SummarySlice
from commuter_sync.domain.models.sync_session import SyncSession
from commuter_sync.domain.models.train_departure import MAX_DEPARTURES, TrainDeparture

__all__ = [
    "DEFAULT_STATIONS",
    "MAX_DEPARTURES",
    "MAX_FAVORITE_STATIONS",
    "MAX_JOURNEY_LEGS",
    "AcknowledgeMessage",
    "BoundedSlots",
    "DepartureCountMessage",
    "DepartureMessage",
    "DetailLegCountMessage",
    "DetailLegMessage",
    "InboundMessage",
    "JourneyDetail",
    "JourneyLeg",
    "LoadState",
    "OutboundMessage",
    "RequestDetailsMessage",
    "RequestKind",
    "RequestScheduleMessage",
    "SetActiveRouteMessage",
    "Station",
    "StationCountMessage",
    "StationMessage",
    "StationSet",
    "SummarySlice",
    "SyncSession",
    "TrainDeparture",
]
