"""Summary slice domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SummarySlice:
    """One line of the at-a-glance summary, valid until the train leaves."""

    subtitle: str
    expiration_time: int  # unix seconds, 0 = no expiration
