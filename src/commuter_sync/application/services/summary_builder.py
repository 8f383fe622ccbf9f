"""Builds at-a-glance summary slices from the received departures."""

from commuter_sync.domain.models.summary_slice import SummarySlice
from commuter_sync.domain.models.sync_session import SyncSession
from commuter_sync.domain.models.train_departure import TrainDeparture


def format_summary_subtitle(departure: TrainDeparture) -> str:
    """Format one departure as "08:14 (+3) • Plat. 5 • Brussels-South"."""
    if departure.is_delayed:
        time_part = f"{departure.depart_time} (+{departure.depart_delay})"
    else:
        time_part = departure.depart_time
    return f"{time_part} • Plat. {departure.platform} • {departure.destination}"


def build_summary_slices(session: SyncSession, limit: int) -> list[SummarySlice]:
    """One slice per received departure, at most ``limit``."""
    if limit < 1:
        return []
    return [
        SummarySlice(
            subtitle=format_summary_subtitle(departure),
            expiration_time=departure.depart_timestamp,
        )
        for departure in session.received_departures[:limit]
    ]
