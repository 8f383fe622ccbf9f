"""Protocol for single-shot timers."""

from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """Handle to an armed timer."""

    def cancel(self) -> None:
        """Cancel the timer. Cancelling a fired or cancelled timer is a no-op."""
        ...


class TimerSchedulerProtocol(Protocol):
    """Protocol for arming single-shot timers on the event loop."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds.

        Args:
            delay_ms: Delay in milliseconds.
            callback: Function invoked on the event loop when the timer fires.

        Returns:
            A handle that can cancel the timer.
        """
        ...
