"""Timer scheduler backed by the asyncio event loop."""

import asyncio
from collections.abc import Callable

from commuter_sync.domain.contracts.timer_scheduler import TimerHandle, TimerSchedulerProtocol


class AsyncioTimerScheduler(TimerSchedulerProtocol):
    """Arms single-shot timers with ``loop.call_later``.

    The returned ``asyncio.TimerHandle`` already satisfies ``TimerHandle``:
    cancelling a fired or cancelled handle is a no-op.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)
