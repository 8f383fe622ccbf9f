"""Presentation adapter that renders the views to the log."""

import logging

from commuter_sync.adapters.presentation.status_text import (
    detail_lines,
    format_departure_row,
    list_status,
    route_header,
)
from commuter_sync.domain.models.sync_session import SyncSession
from commuter_sync.domain.ports.presentation_adapter import PresentationAdapter

logger = logging.getLogger(__name__)


class LoggingPresentationAdapter(PresentationAdapter):
    """Renders the departure list and the detail view as log lines.

    Only reads the session. ``last_list`` and ``last_detail`` hold the most
    recent rendering for inspection.
    """

    def __init__(self, session: SyncSession) -> None:
        self._session = session
        self._detail_active = False
        self.last_list: list[str] = []
        self.last_detail: list[str] = []
        self.reload_count = 0

    def reload(self) -> None:
        self.reload_count += 1
        self.last_list = self._render_list()
        for line in self.last_list:
            logger.info(line)

    def mark_dirty(self) -> None:
        self.last_list = self._render_list()
        logger.debug(f"Departure list redrawn ({self._session.departure_count} rows)")

    def show_detail(self) -> None:
        self._detail_active = True
        self.redraw_detail()

    def redraw_detail(self) -> None:
        self.last_detail = detail_lines(self._session.journey)
        for line in self.last_detail:
            logger.info(line)

    def close_detail(self) -> None:
        self._detail_active = False
        self.last_detail = []

    def is_detail_active(self) -> bool:
        return self._detail_active

    def _render_list(self) -> list[str]:
        lines = [route_header(self._session)]
        status = list_status(self._session)
        if status is not None:
            lines.append(status)
        else:
            lines.extend(
                format_departure_row(departure)
                for departure in self._session.received_departures
            )
        return lines
