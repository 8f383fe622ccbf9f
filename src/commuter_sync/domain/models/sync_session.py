"""Sync session domain model."""

from dataclasses import dataclass, field

from commuter_sync.domain.models.bounded_slots import BoundedSlots
from commuter_sync.domain.models.journey import JourneyDetail
from commuter_sync.domain.models.load_state import LoadState, RequestKind
from commuter_sync.domain.models.station import StationSet
from commuter_sync.domain.models.train_departure import MAX_DEPARTURES, TrainDeparture


@dataclass
class SyncSession:
    """All client-side protocol state.

    Owned by the event loop; protocol components receive it by reference and
    are its only writers. Presentation code only reads it.
    """

    stations: StationSet = field(default_factory=StationSet)
    departures: BoundedSlots[TrainDeparture] = field(
        default_factory=lambda: BoundedSlots(MAX_DEPARTURES, TrainDeparture)
    )
    departure_count: int = 0
    journey: JourneyDetail = field(default_factory=JourneyDetail)
    load_state: LoadState = LoadState.IDLE
    loading: bool = False
    failed: bool = False
    background: bool = False
    selected_departure_index: int = 0
    request_ids: dict[RequestKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in RequestKind}
    )

    @property
    def received_departures(self) -> list[TrainDeparture]:
        return self.departures.head(self.departure_count)
