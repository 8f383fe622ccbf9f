"""Reassembly of journey details (legs) for a selected departure."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from commuter_sync.application.services.field_merge import merge_message_fields
from commuter_sync.domain.models.journey import (
    LEG_TEXT_FIELDS,
    LEG_VALUE_FIELDS,
    MAX_JOURNEY_LEGS,
    JourneyDetail,
)
from commuter_sync.domain.models.load_state import RequestKind
from commuter_sync.domain.models.messages import (
    DetailLegCountMessage,
    DetailLegMessage,
    RequestDetailsMessage,
)

if TYPE_CHECKING:
    from commuter_sync.application.services.request_sequencer import RequestSequencer
    from commuter_sync.application.services.sync_services import SyncServices
    from commuter_sync.domain.models.sync_session import SyncSession

logger = logging.getLogger(__name__)


class JourneyReassembler:
    """Requests and collects the legs of one journey.

    Leg count and leg messages share one message type; both are id-checked
    only when they carry an id. The journey is received when the leg with index
    ``leg_count - 1`` arrives, without checking the earlier legs.
    """

    def __init__(
        self, session: SyncSession, sequencer: RequestSequencer, services: SyncServices
    ) -> None:
        self._session = session
        self._sequencer = sequencer
        self._services = services

    def select_departure(self, index: int) -> bool:
        """Request the journey detail of departure ``index`` and show the detail view."""
        if not 0 <= index < self._session.departure_count:
            logger.warning(
                f"Cannot select departure {index}: "
                f"{self._session.departure_count} departures available"
            )
            return False

        departure = self._session.departures[index]
        logger.info(f"Selected train to {departure.destination}")

        self._session.selected_departure_index = index
        self._session.journey = JourneyDetail(departure_index=index)
        request_id = self._sequencer.issue(RequestKind.DETAIL)

        self._services.channel.send(
            RequestDetailsMessage(departure_index=index, request_id=request_id)
        )
        logger.info(f"Detail request [ID {request_id}] sent for departure {index}")

        self._services.presentation.show_detail()
        return True

    def handle_leg_count(self, message: DetailLegCountMessage) -> None:
        if not self._accepts(message.request_id):
            return
        if not 0 < message.count <= MAX_JOURNEY_LEGS:
            logger.warning(f"Dropping leg count {message.count}: expected 1..{MAX_JOURNEY_LEGS}")
            return

        self._session.journey.leg_count = message.count
        logger.info(
            f"Expecting {message.count} legs "
            f"[ID {message.request_id if message.request_id is not None else 'none'}]"
        )

    def handle_leg(self, message: DetailLegMessage) -> None:
        if not self._accepts(message.request_id):
            return

        journey = self._session.journey
        if not journey.legs.in_bounds(message.leg_index):
            logger.warning(f"Dropping leg {message.leg_index}: at most {MAX_JOURNEY_LEGS} legs")
            return

        leg = journey.legs[message.leg_index]
        merge_message_fields(leg, message, LEG_TEXT_FIELDS, LEG_VALUE_FIELDS)
        logger.info(f"Received leg {message.leg_index}: {leg.depart_station} -> {leg.arrive_station}")

        if message.leg_index == journey.leg_count - 1:
            journey.received = True
            logger.info("All legs received")
            if self._services.presentation.is_detail_active():
                self._services.presentation.redraw_detail()

    def handle_send_failure(self, message: RequestDetailsMessage, reason: str) -> None:
        if not self._sequencer.is_live(RequestKind.DETAIL, message.request_id):
            logger.info(f"Send failure for superseded detail request [ID {message.request_id}]")
            return

        logger.error(f"Detail request [ID {message.request_id}] failed to send: {reason}")
        self._session.journey.failed = True
        if self._services.presentation.is_detail_active():
            self._services.presentation.redraw_detail()

    def _accepts(self, request_id: int | None) -> bool:
        if request_id is None or self._sequencer.is_live(RequestKind.DETAIL, request_id):
            return True
        logger.warning(
            f"Ignoring stale detail [ID {request_id}] "
            f"(expected {self._sequencer.live_id(RequestKind.DETAIL)})"
        )
        return False
