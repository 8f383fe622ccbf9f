"""Reassembly of the departure list from indexed row messages."""

import logging

from commuter_sync.application.services.field_merge import merge_message_fields
from commuter_sync.domain.models.messages import DepartureMessage
from commuter_sync.domain.models.sync_session import SyncSession
from commuter_sync.domain.models.train_departure import (
    DEPARTURE_TEXT_FIELDS,
    DEPARTURE_VALUE_FIELDS,
)

logger = logging.getLogger(__name__)


class DepartureReassembler:
    """Fills the fixed departure slots from a declared count of indexed rows.

    Rows are independent: each one overwrites a single slot. The list counts as
    complete when the row with index ``count - 1`` arrives, whether or not the
    earlier rows made it.
    """

    def __init__(self, session: SyncSession) -> None:
        self._session = session

    @property
    def declared_count(self) -> int:
        return self._session.departure_count

    def reset(self) -> None:
        self._session.departure_count = 0

    def declare(self, count: int) -> bool:
        """Set the number of rows to expect.

        Returns:
            False (and leaves the session untouched) if ``count`` does not fit.
        """
        capacity = self._session.departures.capacity
        if not 0 <= count <= capacity:
            logger.warning(f"Dropping departure count {count}: capacity is {capacity}")
            return False
        self._session.departure_count = count
        return True

    def apply(self, message: DepartureMessage) -> bool:
        """Merge one row into its slot.

        Returns:
            False if the index is outside the declared range.
        """
        if not 0 <= message.index < self._session.departure_count:
            logger.warning(
                f"Dropping departure {message.index}: "
                f"expected index below {self._session.departure_count}"
            )
            return False

        departure = self._session.departures[message.index]
        merge_message_fields(departure, message, DEPARTURE_TEXT_FIELDS, DEPARTURE_VALUE_FIELDS)
        logger.info(f"Received departure {message.index}: {departure.destination}")
        return True

    def is_final(self, index: int) -> bool:
        return index == self._session.departure_count - 1
