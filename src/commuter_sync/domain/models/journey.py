"""Journey detail domain models."""

from dataclasses import dataclass, field

from commuter_sync.domain.models.bounded_slots import BoundedSlots

MAX_JOURNEY_LEGS = 4  # at most 3 connections


@dataclass
class JourneyLeg:
    """One vehicle ride within a journey."""

    depart_station: str = ""
    arrive_station: str = ""
    depart_time: str = ""
    arrive_time: str = ""
    depart_platform: str = ""
    arrive_platform: str = ""
    depart_delay: int = 0
    arrive_delay: int = 0
    vehicle: str = ""  # e.g. "IC 1234"
    direction: str = ""
    stop_count: int = 0
    depart_platform_changed: bool = False
    arrive_platform_changed: bool = False


LEG_TEXT_FIELDS: tuple[str, ...] = (
    "depart_station",
    "arrive_station",
    "depart_time",
    "arrive_time",
    "depart_platform",
    "arrive_platform",
    "vehicle",
    "direction",
)

LEG_VALUE_FIELDS: tuple[str, ...] = (
    "depart_delay",
    "arrive_delay",
    "stop_count",
    "depart_platform_changed",
    "arrive_platform_changed",
)


@dataclass
class JourneyDetail:
    """Legs of the currently selected departure. Replaced on every detail request."""

    departure_index: int = 0
    legs: BoundedSlots[JourneyLeg] = field(
        default_factory=lambda: BoundedSlots(MAX_JOURNEY_LEGS, JourneyLeg)
    )
    leg_count: int = 0
    received: bool = False
    failed: bool = False

    @property
    def received_legs(self) -> list[JourneyLeg]:
        return self.legs.head(self.leg_count)
