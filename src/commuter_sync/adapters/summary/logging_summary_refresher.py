"""Summary refresher that logs the published slices."""

import logging

from commuter_sync.domain.contracts.summary_refresher import SummaryRefresherProtocol
from commuter_sync.domain.models.summary_slice import SummarySlice

logger = logging.getLogger(__name__)


class LoggingSummaryRefresher(SummaryRefresherProtocol):
    """Keeps the last published summary and writes it to the log."""

    def __init__(self) -> None:
        self.last_slices: list[SummarySlice] = []
        self.refresh_count = 0

    def refresh(self, slices: list[SummarySlice]) -> None:
        self.last_slices = list(slices)
        self.refresh_count += 1
        if not slices:
            logger.info("Summary cleared")
            return
        logger.info(f"Summary updated with {len(slices)} slice(s)")
        for summary_slice in slices:
            logger.info(f"  {summary_slice.subtitle} (expires {summary_slice.expiration_time})")
