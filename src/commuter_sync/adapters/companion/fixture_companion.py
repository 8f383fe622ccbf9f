"""Companion-side responder serving canned connections.

Plays the far side of the channel for simulation and integration tests: it
acknowledges schedule requests, then streams a count followed by one message
per departure, and answers detail requests with a leg count followed by the
legs. Ids are echoed back exactly as received.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from commuter_sync.adapters.channel.codec import MessageDecodeError, decode_outbound, encode
from commuter_sync.domain.models.journey import JourneyLeg
from commuter_sync.domain.models.messages import (
    AcknowledgeMessage,
    DepartureCountMessage,
    DepartureMessage,
    DetailLegCountMessage,
    DetailLegMessage,
    RequestDetailsMessage,
    RequestScheduleMessage,
    SetActiveRouteMessage,
    StationCountMessage,
    StationMessage,
)
from commuter_sync.domain.models.station import DEFAULT_STATIONS, Station
from commuter_sync.domain.models.train_departure import MAX_DEPARTURES, TrainDeparture

if TYPE_CHECKING:
    from commuter_sync.adapters.channel.loopback_channel import LoopbackChannel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixtureConnection:
    """A departure row plus the legs of its journey."""

    departure: TrainDeparture
    legs: list[JourneyLeg] = field(default_factory=list)


class FixtureCompanion:
    """Answers client requests arriving on a loopback channel."""

    def __init__(
        self,
        channel: LoopbackChannel,
        connections: list[FixtureConnection],
        stations: tuple[Station, ...] | list[Station] = DEFAULT_STATIONS,
    ) -> None:
        self._channel = channel
        self._connections = connections
        self._stations = list(stations)
        self.schedule_requests: list[RequestScheduleMessage] = []
        self.detail_requests: list[RequestDetailsMessage] = []
        channel.connect(self)

    def __call__(self, payload: dict[str, Any]) -> None:
        try:
            request = decode_outbound(payload)
        except MessageDecodeError as e:
            logger.warning(f"Companion ignoring request: {e}")
            return

        if isinstance(request, RequestScheduleMessage):
            self._answer_schedule(request)
        else:
            self._answer_details(request)

    def push_stations(self) -> None:
        """Send the favorite station list to the client."""
        logger.info(f"Companion sending {len(self._stations)} stations")
        self._deliver(StationCountMessage(count=len(self._stations)))
        for index, station in enumerate(self._stations):
            self._deliver(
                StationMessage(index=index, name=station.name, station_id=station.station_id)
            )

    def set_active_route(self, from_station_id: str, to_station_id: str) -> bool:
        """Ask the client to switch to a route between two favorite stations."""
        station_ids = [station.station_id for station in self._stations]
        if from_station_id not in station_ids or to_station_id not in station_ids:
            logger.info("Active route stations not in favorites")
            return False
        self._deliver(
            SetActiveRouteMessage(
                from_index=station_ids.index(from_station_id),
                to_index=station_ids.index(to_station_id),
            )
        )
        return True

    def _answer_schedule(self, request: RequestScheduleMessage) -> None:
        self.schedule_requests.append(request)
        logger.info(
            f"Companion: schedule request [ID {request.request_id}] "
            f"{request.from_station_id} -> {request.to_station_id}"
        )
        self._deliver(AcknowledgeMessage(request_id=request.request_id))

        connections = self._connections[:MAX_DEPARTURES]
        self._deliver(DepartureCountMessage(request_id=request.request_id, count=len(connections)))
        for index, connection in enumerate(connections):
            self._deliver(
                DepartureMessage(
                    request_id=request.request_id, index=index, **asdict(connection.departure)
                )
            )

    def _answer_details(self, request: RequestDetailsMessage) -> None:
        self.detail_requests.append(request)
        if request.departure_index >= len(self._connections):
            logger.warning(f"Companion: no connection at index {request.departure_index}")
            return

        legs = self._connections[request.departure_index].legs
        self._deliver(
            DetailLegCountMessage(
                request_id=request.request_id,
                count=len(legs),
                departure_index=request.departure_index,
            )
        )
        for leg_index, leg in enumerate(legs):
            self._deliver(
                DetailLegMessage(request_id=request.request_id, leg_index=leg_index, **asdict(leg))
            )

    def _deliver(self, message: Any) -> None:
        self._channel.deliver(encode(message))


def sample_connections(now: datetime) -> list[FixtureConnection]:
    """A few Brussels-Central -> Antwerp-Central connections starting after ``now``."""
    connections: list[FixtureConnection] = []
    for offset, (train_type, delay, platform, direct) in enumerate(
        [("IC", 0, "3", True), ("IC", 4, "5", True), ("L", 0, "12", False), ("IC", 0, "3", True)]
    ):
        depart = now + timedelta(minutes=12 + 20 * offset)
        arrive = depart + timedelta(minutes=48 if direct else 71)
        vehicle = f"{train_type} {2130 + offset}"
        departure = TrainDeparture(
            destination="Antwerp-Central",
            depart_time=depart.strftime("%H:%M"),
            arrive_time=arrive.strftime("%H:%M"),
            platform=platform,
            train_type=train_type,
            duration="0:48" if direct else "1:11",
            depart_delay=delay,
            arrive_delay=delay,
            is_direct=direct,
            platform_changed=platform == "5",
            depart_timestamp=int(depart.timestamp()),
        )
        if direct:
            legs = [
                JourneyLeg(
                    depart_station="Brussels-Central",
                    arrive_station="Antwerp-Central",
                    depart_time=departure.depart_time,
                    arrive_time=departure.arrive_time,
                    depart_platform=platform,
                    arrive_platform="21",
                    depart_delay=delay,
                    arrive_delay=delay,
                    vehicle=vehicle,
                    direction="Antwerp-Central",
                    stop_count=3,
                    depart_platform_changed=departure.platform_changed,
                )
            ]
        else:
            change = depart + timedelta(minutes=22)
            legs = [
                JourneyLeg(
                    depart_station="Brussels-Central",
                    arrive_station="Mechelen",
                    depart_time=departure.depart_time,
                    arrive_time=change.strftime("%H:%M"),
                    depart_platform=platform,
                    arrive_platform="7",
                    vehicle=vehicle,
                    direction="Mechelen",
                    stop_count=5,
                ),
                JourneyLeg(
                    depart_station="Mechelen",
                    arrive_station="Antwerp-Central",
                    depart_time=(change + timedelta(minutes=9)).strftime("%H:%M"),
                    arrive_time=departure.arrive_time,
                    depart_platform="4",
                    arrive_platform="22",
                    vehicle="IC 2411",
                    direction="Antwerp-Central",
                    stop_count=2,
                ),
            ]
        connections.append(FixtureConnection(departure=departure, legs=legs))
    return connections
