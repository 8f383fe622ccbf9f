"""Favorite station configuration sync with a default fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from commuter_sync.domain.models.station import MAX_FAVORITE_STATIONS

if TYPE_CHECKING:
    from commuter_sync.application.services.sync_services import SyncServices, SyncSettings
    from commuter_sync.domain.contracts.timer_scheduler import TimerHandle
    from commuter_sync.domain.models.messages import (
        SetActiveRouteMessage,
        StationCountMessage,
        StationMessage,
    )
    from commuter_sync.domain.models.sync_session import SyncSession

logger = logging.getLogger(__name__)


class StationConfigSync:
    """Receives the favorite station list once, or falls back to defaults.

    A configuration timer is armed on start. Whichever comes first wins: the
    last station of a pushed list, or the timer, which installs the default
    stations. Either way the first schedule request follows.
    """

    def __init__(
        self,
        session: SyncSession,
        services: SyncServices,
        settings: SyncSettings,
        request_schedule: Callable[[], bool],
    ) -> None:
        """Initialize the station sync.

        Args:
            session: The session whose station set is filled.
            services: Timers and presentation collaborators.
            settings: Configuration timeout and default stations.
            request_schedule: Starts a foreground schedule fetch.
        """
        self._session = session
        self._services = services
        self._settings = settings
        self._request_schedule = request_schedule
        self._timeout: TimerHandle | None = None

    def start(self) -> None:
        self._cancel_timeout()
        self._timeout = self._services.timers.call_later(
            self._settings.config_timeout_ms, self.handle_timeout
        )
        logger.info(f"Config timeout timer started ({self._settings.config_timeout_ms} ms)")

    def handle_station_count(self, message: StationCountMessage) -> None:
        stations = self._session.stations
        count = stations.set_count(message.count)
        stations.received = False
        logger.info(f"Expecting {count} favorite stations")

    def handle_station(self, message: StationMessage) -> None:
        stations = self._session.stations
        if not stations.put(message.index, message.name, message.station_id):
            logger.warning(
                f"Dropping station {message.index}: at most {MAX_FAVORITE_STATIONS} stations"
            )
            return

        station = stations.slots[message.index]
        logger.info(f"Received station {message.index}: {station.name} ({station.station_id})")

        if message.index == stations.count - 1:
            stations.received = True
            self._cancel_timeout()
            logger.info("All stations received, requesting initial data")
            self._services.presentation.reload()
            self._request_schedule()

    def handle_timeout(self) -> None:
        self._timeout = None
        stations = self._session.stations
        if stations.received:
            return

        logger.warning("Config timeout - falling back to default stations")
        stations.replace_all(self._settings.default_stations)
        stations.received = True
        self._services.presentation.reload()
        self._request_schedule()

    def handle_set_active_route(self, message: SetActiveRouteMessage) -> None:
        stations = self._session.stations
        if not stations.select_route(message.from_index, message.to_index):
            logger.warning(
                f"Ignoring active route {message.from_index} -> {message.to_index}: "
                f"{stations.count} stations configured"
            )
            return

        logger.info(
            f"Active route set: {stations.slots[message.from_index].name} -> "
            f"{stations.slots[message.to_index].name}"
        )
        self._services.presentation.reload()
        self._request_schedule()

    def cycle_from_station(self) -> bool:
        stations = self._session.stations
        if stations.count == 0:
            return False
        stations.from_index = (stations.from_index + 1) % stations.count
        logger.info(f"From station changed to: {stations.slots[stations.from_index].name}")
        return self._request_schedule()

    def cycle_to_station(self) -> bool:
        stations = self._session.stations
        if stations.count == 0:
            return False
        stations.to_index = (stations.to_index + 1) % stations.count
        logger.info(f"To station changed to: {stations.slots[stations.to_index].name}")
        return self._request_schedule()

    def shutdown(self) -> None:
        self._cancel_timeout()

    def _cancel_timeout(self) -> None:
        if self._timeout is not None:
            self._timeout.cancel()
            self._timeout = None
