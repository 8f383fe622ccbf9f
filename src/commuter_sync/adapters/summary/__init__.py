"""At-a-glance summary consumers."""

from commuter_sync.adapters.summary.logging_summary_refresher import LoggingSummaryRefresher

__all__ = ["LoggingSummaryRefresher"]
