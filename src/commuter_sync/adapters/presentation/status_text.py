"""Text rendering of the departure list and the journey detail view."""

from commuter_sync.domain.models.journey import JourneyDetail, JourneyLeg
from commuter_sync.domain.models.load_state import LoadState
from commuter_sync.domain.models.sync_session import SyncSession
from commuter_sync.domain.models.train_departure import TrainDeparture

_LOADING_MESSAGES: dict[LoadState, str] = {
    LoadState.CONNECTING: "Connecting to phone...",
    LoadState.FETCHING: "Loading trains...",
    LoadState.RECEIVING: "Receiving trains...",
    LoadState.ERROR: "Connection failed",
}


def list_status(session: SyncSession) -> str | None:
    """Status line shown instead of the departure rows, or None when rows are shown."""
    if not session.stations.received:
        return "Loading..."
    if session.loading:
        return _LOADING_MESSAGES.get(session.load_state, "Loading...")
    if session.failed:
        return "Connection failed"
    if session.departure_count == 0:
        return "No connections found"
    return None


def route_header(session: SyncSession) -> str:
    from_station = session.stations.from_station
    to_station = session.stations.to_station
    if from_station is None or to_station is None:
        return "Route: ..."
    return f"Route: {from_station.name} > {to_station.name}"


def format_departure_row(departure: TrainDeparture) -> str:
    """One list row: "08:14+3 > 09:02+3  IC  0:48 · Antwerp-Central  [5]"."""
    if departure.depart_delay > 0 or departure.arrive_delay > 0:
        times = (
            f"{departure.depart_time}+{departure.depart_delay} > "
            f"{departure.arrive_time}+{departure.arrive_delay}"
        )
    else:
        times = f"{departure.depart_time} > {departure.arrive_time}"

    train_type = departure.train_type if departure.is_direct else f"{departure.train_type}*"
    platform = f"({departure.platform})" if departure.platform_changed else f"[{departure.platform}]"
    return f"{times}  {train_type}  {departure.duration} · {departure.destination}  {platform}"


def _with_delay(time: str, delay: int) -> str:
    return f"{time} +{delay}" if delay > 0 else time


def format_leg_lines(leg: JourneyLeg) -> list[str]:
    stops = f"{leg.stop_count} stop{'' if leg.stop_count == 1 else 's'}"
    depart_platform = (
        f"({leg.depart_platform})" if leg.depart_platform_changed else f"[{leg.depart_platform}]"
    )
    arrive_platform = (
        f"({leg.arrive_platform})" if leg.arrive_platform_changed else f"[{leg.arrive_platform}]"
    )
    return [
        f"{_with_delay(leg.depart_time, leg.depart_delay)}  {depart_platform}",
        leg.depart_station,
        f"  {leg.vehicle} to {leg.direction}",
        f"  {stops}",
        f"{_with_delay(leg.arrive_time, leg.arrive_delay)}  {arrive_platform}",
        leg.arrive_station,
    ]


def detail_lines(journey: JourneyDetail) -> list[str]:
    """Lines of the journey detail view."""
    if journey.failed:
        return ["Could not load journey details"]
    if not journey.received:
        return ["Loading journey details..."]

    lines: list[str] = []
    for index, leg in enumerate(journey.received_legs):
        if index > 0:
            lines.append("")
        lines.extend(format_leg_lines(leg))
    return lines
