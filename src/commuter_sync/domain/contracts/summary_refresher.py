"""Protocol for publishing the departure summary."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from commuter_sync.domain.models.summary_slice import SummarySlice


class SummaryRefresherProtocol(Protocol):
    """Protocol for the at-a-glance summary consumer."""

    def refresh(self, slices: list["SummarySlice"]) -> None:
        """Replace the published summary.

        Args:
            slices: Summary slices, soonest departure first. May be empty.
        """
        ...
