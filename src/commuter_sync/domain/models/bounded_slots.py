"""Fixed-capacity slot container."""

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class BoundedSlots(Generic[T]):
    """Fixed number of slots addressed by validated position.

    Every slot always holds a value (created by ``factory``), so a record can be
    filled field by field as fragments arrive. Positions outside
    ``[0, capacity)`` are rejected with ``IndexError``; callers check
    ``in_bounds`` first when the position comes from external input.
    """

    def __init__(self, capacity: int, factory: Callable[[], T]) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._factory = factory
        self._slots: list[T] = [factory() for _ in range(capacity)]

    @property
    def capacity(self) -> int:
        return self._capacity

    def in_bounds(self, index: int) -> bool:
        return 0 <= index < self._capacity

    def __getitem__(self, index: int) -> T:
        if not self.in_bounds(index):
            raise IndexError(f"slot {index} out of range (capacity {self._capacity})")
        return self._slots[index]

    def __setitem__(self, index: int, value: T) -> None:
        if not self.in_bounds(index):
            raise IndexError(f"slot {index} out of range (capacity {self._capacity})")
        self._slots[index] = value

    def __len__(self) -> int:
        return self._capacity

    def __iter__(self) -> Iterator[T]:
        return iter(self._slots)

    def head(self, count: int) -> list[T]:
        """Return the first ``count`` slots, clamped to the capacity."""
        return self._slots[: max(0, min(count, self._capacity))]

    def reset(self) -> None:
        """Refill every slot with a fresh value."""
        self._slots = [self._factory() for _ in range(self._capacity)]
