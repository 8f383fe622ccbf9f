"""Periodic trigger for background schedule fetches."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from commuter_sync.domain.contracts.background_trigger import BackgroundTriggerProtocol

if TYPE_CHECKING:
    from commuter_sync.domain.contracts.background_trigger import BackgroundFetchTarget

logger = logging.getLogger(__name__)


class BackgroundTrigger(BackgroundTriggerProtocol):
    """Requests a background fetch immediately, then once per interval."""

    def __init__(self, target: BackgroundFetchTarget, interval_seconds: float) -> None:
        """Initialize the trigger.

        Args:
            target: Receives the background fetch requests.
            interval_seconds: Seconds between two requests.
        """
        self.target = target
        self.interval_seconds = interval_seconds
        self.trigger_count = 0
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the background trigger."""
        if self._task is not None and not self._task.done():
            logger.warning("Background trigger already running")
            return

        self._task = asyncio.create_task(self._trigger_loop())
        logger.info(f"Started background trigger (every {self.interval_seconds} s)")

    async def stop(self) -> None:
        """Stop the background trigger."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Background trigger cancelled")
            logger.info("Stopped background trigger")
        self._task = None

    async def _trigger_loop(self) -> None:
        self._trigger()
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                self._trigger()
        except asyncio.CancelledError:
            logger.info("Background trigger cancelled")
            raise

    def _trigger(self) -> None:
        self.trigger_count += 1
        if not self.target.request_background_fetch():
            logger.warning("Background fetch was not started")
