"""Schedule fetch lifecycle: CONNECTING -> FETCHING -> RECEIVING -> COMPLETE/ERROR."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from commuter_sync.application.services.summary_builder import build_summary_slices
from commuter_sync.domain.models.load_state import LoadState, RequestKind
from commuter_sync.domain.models.messages import (
    AcknowledgeMessage,
    DepartureCountMessage,
    DepartureMessage,
    RequestScheduleMessage,
)

if TYPE_CHECKING:
    from commuter_sync.application.services.departure_reassembler import DepartureReassembler
    from commuter_sync.application.services.request_sequencer import RequestSequencer
    from commuter_sync.application.services.sync_services import SyncServices, SyncSettings
    from commuter_sync.domain.contracts.timer_scheduler import TimerHandle
    from commuter_sync.domain.models.sync_session import SyncSession

logger = logging.getLogger(__name__)

TransitionListener = Callable[[LoadState, LoadState], None]


class LoadStateMachine:
    """Drives one schedule fetch at a time.

    Every handler runs on the event loop, one at a time. Responses carrying a
    superseded request id are ignored, as are responses that do not fit the
    current state. There is no automatic retry: after ERROR only a new explicit
    request starts over.
    """

    def __init__(
        self,
        session: SyncSession,
        sequencer: RequestSequencer,
        departures: DepartureReassembler,
        services: SyncServices,
        settings: SyncSettings,
        on_background_complete: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the state machine.

        Args:
            session: The session to drive.
            sequencer: Issues and validates schedule request ids.
            departures: Reassembler for the departure rows.
            services: Channel, timers, presentation and summary collaborators.
            settings: Protocol settings (loading timeout, summary size).
            on_background_complete: Called after a background fetch completes,
                e.g. to let the host go idle.
        """
        self._session = session
        self._sequencer = sequencer
        self._departures = departures
        self._services = services
        self._settings = settings
        self._on_background_complete = on_background_complete
        self._timeout: TimerHandle | None = None
        self._listeners: list[TransitionListener] = []

    @property
    def state(self) -> LoadState:
        return self._session.load_state

    def add_transition_listener(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    def request_schedule(self, background: bool = False) -> bool:
        """Start a new schedule fetch for the active from/to pair.

        Returns:
            False if no stations are loaded; no request id is consumed then.
        """
        stations = self._session.stations
        from_station = stations.from_station
        to_station = stations.to_station
        if from_station is None or to_station is None:
            logger.warning("Cannot request schedule: no stations loaded")
            return False

        request_id = self._sequencer.issue(RequestKind.SCHEDULE)

        self._departures.reset()
        self._session.loading = True
        self._session.failed = False
        self._session.background = background
        self._transition(LoadState.CONNECTING)
        self._arm_timeout()

        self._services.channel.send(
            RequestScheduleMessage(
                from_station_id=from_station.station_id,
                to_station_id=to_station.station_id,
                request_id=request_id,
            )
        )
        self._services.presentation.reload()

        logger.info(
            f"Requesting schedule [ID {request_id}]: {from_station.name} -> {to_station.name}"
            f"{' (background)' if background else ''}"
        )
        return True

    def handle_acknowledge(self, message: AcknowledgeMessage) -> None:
        if not self._is_live(message.request_id, "acknowledgment"):
            return
        if self.state != LoadState.CONNECTING:
            logger.debug(f"Ignoring acknowledgment [ID {message.request_id}] in {self.state.value}")
            return

        logger.info(f"Request acknowledged [ID {message.request_id}], fetching schedule")
        self._transition(LoadState.FETCHING)
        self._services.presentation.reload()

    def handle_departure_count(self, message: DepartureCountMessage) -> None:
        if not self._is_live(message.request_id, "count"):
            return
        if self.state not in (LoadState.CONNECTING, LoadState.FETCHING):
            logger.debug(f"Ignoring count [ID {message.request_id}] in {self.state.value}")
            return
        if not self._departures.declare(message.count):
            return

        if self.state == LoadState.CONNECTING:
            # The acknowledgment was lost; the count proves the companion is fetching.
            self._transition(LoadState.FETCHING)
        self._transition(LoadState.RECEIVING)
        logger.info(f"Expecting {message.count} departures [ID {message.request_id}]")

        if message.count == 0:
            self._complete()

    def handle_departure(self, message: DepartureMessage) -> None:
        if message.request_id is not None and not self._is_live(message.request_id, "departure"):
            return
        # Rows may arrive after the last index completed the list.
        if self.state not in (LoadState.RECEIVING, LoadState.COMPLETE):
            logger.debug(f"Ignoring departure {message.index} in {self.state.value}")
            return
        if not self._departures.apply(message):
            return

        if self.state == LoadState.RECEIVING and self._departures.is_final(message.index):
            self._complete()
        elif not self._session.background:
            # Redraw in place; a full reload would reset the scroll position.
            self._services.presentation.mark_dirty()

    def handle_timeout(self) -> None:
        self._timeout = None
        if not self.state.is_in_flight:
            return
        logger.warning(f"Loading timeout in {self.state.value} - transitioning to ERROR state")
        self._fail()

    def handle_send_failure(self, message: RequestScheduleMessage, reason: str) -> None:
        if not self._sequencer.is_live(RequestKind.SCHEDULE, message.request_id):
            logger.info(f"Send failure for superseded schedule request [ID {message.request_id}]")
            return
        if not self.state.is_in_flight:
            return
        logger.error(f"Schedule request [ID {message.request_id}] failed to send: {reason}")
        self._fail()

    def shutdown(self) -> None:
        self._cancel_timeout()

    def _is_live(self, request_id: int, what: str) -> bool:
        if self._sequencer.is_live(RequestKind.SCHEDULE, request_id):
            return True
        logger.warning(
            f"Ignoring stale {what} [ID {request_id}] "
            f"(expected {self._sequencer.live_id(RequestKind.SCHEDULE)})"
        )
        return False

    def _complete(self) -> None:
        self._cancel_timeout()
        self._transition(LoadState.COMPLETE)
        self._session.loading = False
        logger.info(f"All {self._session.departure_count} departures received")

        self._services.summary_refresher.refresh(
            build_summary_slices(self._session, self._settings.summary_slice_limit)
        )

        if self._session.background:
            logger.info("Background update complete")
            self._session.background = False
            if self._on_background_complete is not None:
                self._on_background_complete()
        else:
            self._services.presentation.reload()

    def _fail(self) -> None:
        self._cancel_timeout()
        self._transition(LoadState.ERROR)
        self._session.loading = False
        self._session.failed = True
        self._session.background = False
        self._services.presentation.reload()

    def _arm_timeout(self) -> None:
        self._cancel_timeout()
        self._timeout = self._services.timers.call_later(
            self._settings.loading_timeout_ms, self.handle_timeout
        )

    def _cancel_timeout(self) -> None:
        if self._timeout is not None:
            self._timeout.cancel()
            self._timeout = None

    def _transition(self, new_state: LoadState) -> None:
        old_state = self._session.load_state
        self._session.load_state = new_state
        logger.debug(f"Load state {old_state.value} -> {new_state.value}")
        for listener in self._listeners:
            listener(old_state, new_state)
