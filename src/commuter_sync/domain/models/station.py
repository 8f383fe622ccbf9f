"""Station domain models."""

from dataclasses import dataclass, field, replace

from commuter_sync.domain.models.bounded_slots import BoundedSlots

MAX_FAVORITE_STATIONS = 6


@dataclass(frozen=True)
class Station:
    """A favorite station as configured on the companion."""

    name: str
    station_id: str  # iRail id, e.g. "BE.NMBS.008813003"


DEFAULT_STATIONS: tuple[Station, ...] = (
    Station(name="Brussels-Central", station_id="BE.NMBS.008813003"),
    Station(name="Antwerp-Central", station_id="BE.NMBS.008821006"),
    Station(name="Ghent-Sint-Pieters", station_id="BE.NMBS.008892007"),
    Station(name="Liège-Guillemins", station_id="BE.NMBS.008841004"),
    Station(name="Leuven", station_id="BE.NMBS.008833001"),
)


def _empty_station() -> Station:
    return Station(name="", station_id="")


@dataclass
class StationSet:
    """Ordered favorite stations plus the active from/to pair.

    Both route indices stay below ``count`` whenever ``count > 0``.
    """

    slots: BoundedSlots[Station] = field(
        default_factory=lambda: BoundedSlots(MAX_FAVORITE_STATIONS, _empty_station)
    )
    count: int = 0
    from_index: int = 0
    to_index: int = 1
    received: bool = False

    @property
    def stations(self) -> list[Station]:
        return self.slots.head(self.count)

    @property
    def from_station(self) -> Station | None:
        return self.slots[self.from_index] if self.count > 0 else None

    @property
    def to_station(self) -> Station | None:
        return self.slots[self.to_index] if self.count > 0 else None

    def set_count(self, count: int) -> int:
        """Set the declared station count, clamped to capacity. Returns the stored count."""
        self.count = max(0, min(count, MAX_FAVORITE_STATIONS))
        self._clamp_route()
        return self.count

    def put(self, index: int, name: str | None, station_id: str | None) -> bool:
        """Fill one slot; fields passed as None keep their previous value."""
        if not self.slots.in_bounds(index):
            return False
        current = self.slots[index]
        self.slots[index] = replace(
            current,
            name=name if name is not None else current.name,
            station_id=station_id if station_id is not None else current.station_id,
        )
        return True

    def replace_all(self, stations: tuple[Station, ...] | list[Station]) -> None:
        """Install a complete station list and reset the route to the first two entries."""
        self.slots.reset()
        kept = list(stations)[:MAX_FAVORITE_STATIONS]
        for index, station in enumerate(kept):
            self.slots[index] = station
        self.count = len(kept)
        self.from_index = 0
        self.to_index = 1
        self._clamp_route()

    def select_route(self, from_index: int, to_index: int) -> bool:
        """Activate a from/to pair if both indices are in range."""
        if not (0 <= from_index < self.count and 0 <= to_index < self.count):
            return False
        self.from_index = from_index
        self.to_index = to_index
        return True

    def _clamp_route(self) -> None:
        if self.count == 0:
            return
        if self.from_index >= self.count:
            self.from_index = 0
        if self.to_index >= self.count:
            self.to_index = min(1, self.count - 1)
