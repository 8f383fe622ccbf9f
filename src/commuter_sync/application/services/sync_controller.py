"""Sync controller: owns the session and routes channel events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from commuter_sync.application.services.departure_reassembler import DepartureReassembler
from commuter_sync.application.services.journey_reassembler import JourneyReassembler
from commuter_sync.application.services.load_state_machine import LoadStateMachine
from commuter_sync.application.services.request_sequencer import RequestSequencer
from commuter_sync.application.services.station_config_sync import StationConfigSync
from commuter_sync.application.services.summary_builder import build_summary_slices
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
from commuter_sync.domain.models.sync_session import SyncSession
from commuter_sync.domain.ports.message_channel import ChannelHandlers

if TYPE_CHECKING:
    from commuter_sync.application.services.sync_services import SyncServices, SyncSettings
    from commuter_sync.domain.models.messages import InboundMessage, OutboundMessage

logger = logging.getLogger(__name__)


class SyncController:
    """Single owner of a ``SyncSession``.

    Wires the request sequencer, load state machine, reassemblers and station
    sync together and dispatches every channel event to the component that
    handles it. All entry points are meant to be called on the event loop.
    """

    def __init__(
        self,
        services: SyncServices,
        settings: SyncSettings,
        session: SyncSession | None = None,
        on_background_complete: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            services: External collaborators (channel, timers, presentation, summary).
            settings: Protocol settings.
            session: Session to own; a fresh one is created if omitted.
            on_background_complete: Called after a background fetch completes.
        """
        self.session = session if session is not None else SyncSession()
        self._services = services
        self._settings = settings

        self.sequencer = RequestSequencer(self.session)
        self.departures = DepartureReassembler(self.session)
        self.load_state_machine = LoadStateMachine(
            self.session,
            self.sequencer,
            self.departures,
            services,
            settings,
            on_background_complete=on_background_complete,
        )
        self.journeys = JourneyReassembler(self.session, self.sequencer, services)
        self.station_sync = StationConfigSync(
            self.session, services, settings, request_schedule=self.request_schedule
        )

        self._inbound_handlers: dict[type, Callable[[Any], None]] = {
            AcknowledgeMessage: self.load_state_machine.handle_acknowledge,
            DepartureCountMessage: self.load_state_machine.handle_departure_count,
            DepartureMessage: self.load_state_machine.handle_departure,
            DetailLegCountMessage: self.journeys.handle_leg_count,
            DetailLegMessage: self.journeys.handle_leg,
            StationCountMessage: self.station_sync.handle_station_count,
            StationMessage: self.station_sync.handle_station,
            SetActiveRouteMessage: self.station_sync.handle_set_active_route,
        }

    def attach(self) -> None:
        """Register this controller's handlers on the channel."""
        self._services.channel.register_handlers(
            ChannelHandlers(
                on_received=self.handle_inbound,
                on_dropped=self.handle_inbound_dropped,
                on_sent=self.handle_outbound_sent,
                on_failed=self.handle_outbound_failed,
            )
        )

    def start(self) -> None:
        """Begin the station configuration sync."""
        self.station_sync.start()

    def shutdown(self) -> None:
        """Cancel all timers and publish a final summary."""
        self.load_state_machine.shutdown()
        self.station_sync.shutdown()
        if self.session.departure_count > 0:
            logger.info(
                f"Updating summary on exit (departures: {self.session.departure_count})"
            )
            self._services.summary_refresher.refresh(
                build_summary_slices(self.session, self._settings.summary_slice_limit)
            )

    # User-facing operations

    def request_schedule(self) -> bool:
        return self.load_state_machine.request_schedule(background=False)

    def request_background_fetch(self) -> bool:
        logger.info("Background trigger requesting summary update")
        return self.load_state_machine.request_schedule(background=True)

    def select_departure(self, index: int) -> bool:
        return self.journeys.select_departure(index)

    def close_detail(self) -> None:
        self._services.presentation.close_detail()

    def cycle_from_station(self) -> bool:
        return self.station_sync.cycle_from_station()

    def cycle_to_station(self) -> bool:
        return self.station_sync.cycle_to_station()

    # Channel events

    def handle_inbound(self, message: InboundMessage) -> None:
        handler = self._inbound_handlers.get(type(message))
        if handler is None:
            logger.warning(f"No handler for inbound {type(message).__name__}")
            return
        handler(message)

    def handle_inbound_dropped(self, reason: str) -> None:
        # Recovery is left to the loading timeout.
        logger.error(f"Message dropped: {reason}")

    def handle_outbound_sent(self, message: OutboundMessage) -> None:
        logger.info(f"Outbox send success: {type(message).__name__} [ID {message.request_id}]")

    def handle_outbound_failed(self, message: OutboundMessage, reason: str) -> None:
        logger.error(f"Outbox send failed: {type(message).__name__}: {reason}")
        if isinstance(message, RequestScheduleMessage):
            self.load_state_machine.handle_send_failure(message, reason)
        elif isinstance(message, RequestDetailsMessage):
            self.journeys.handle_send_failure(message, reason)
