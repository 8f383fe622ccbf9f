"""Train departure domain model."""

from dataclasses import dataclass

MAX_DEPARTURES = 11


@dataclass
class TrainDeparture:
    """One connection between the active from/to stations.

    Mutable on purpose: the record is filled in place, one message at a time.
    """

    destination: str = ""
    depart_time: str = ""
    arrive_time: str = ""
    platform: str = ""
    train_type: str = ""
    duration: str = ""
    depart_delay: int = 0  # minutes, 0 = on time
    arrive_delay: int = 0
    is_direct: bool = True  # False = requires a connection
    platform_changed: bool = False
    depart_timestamp: int = 0  # unix seconds, used as summary expiration

    @property
    def is_delayed(self) -> bool:
        return self.depart_delay > 0


# Fields carried as text on the wire. A message without one of these keeps the old value.
DEPARTURE_TEXT_FIELDS: tuple[str, ...] = (
    "destination",
    "depart_time",
    "arrive_time",
    "platform",
    "train_type",
    "duration",
)

# Numeric and flag fields. A message without one of these resets it to its default.
DEPARTURE_VALUE_FIELDS: tuple[str, ...] = (
    "depart_delay",
    "arrive_delay",
    "is_direct",
    "platform_changed",
    "depart_timestamp",
)
