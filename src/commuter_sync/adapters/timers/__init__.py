"""Event-loop timers."""

from commuter_sync.adapters.timers.asyncio_timer_scheduler import AsyncioTimerScheduler

__all__ = ["AsyncioTimerScheduler"]
