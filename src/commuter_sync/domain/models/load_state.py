"""Load state and request class enums."""

from enum import Enum


class LoadState(str, Enum):
    """Lifecycle of a schedule fetch."""

    IDLE = "idle"
    CONNECTING = "connecting"  # waiting for the companion to acknowledge
    FETCHING = "fetching"  # companion is calling the schedule API
    RECEIVING = "receiving"  # departure rows are arriving
    COMPLETE = "complete"
    ERROR = "error"

    @property
    def is_in_flight(self) -> bool:
        return self in (LoadState.CONNECTING, LoadState.FETCHING, LoadState.RECEIVING)


class RequestKind(str, Enum):
    """Request classes with independent id counters."""

    SCHEDULE = "schedule"
    DETAIL = "detail"
