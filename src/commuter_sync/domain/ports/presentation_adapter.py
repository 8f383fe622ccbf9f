"""Presentation adapter port."""

from abc import ABC, abstractmethod


class PresentationAdapter(ABC):
    """Port for the departure list and detail views.

    Implementations read the session during a redraw but never mutate it.
    """

    @abstractmethod
    def reload(self) -> None:
        """Fully reload the departure list (resets scroll position)."""
        ...

    @abstractmethod
    def mark_dirty(self) -> None:
        """Redraw list rows in place."""
        ...

    @abstractmethod
    def show_detail(self) -> None:
        """Push the journey detail view."""
        ...

    @abstractmethod
    def redraw_detail(self) -> None:
        """Redraw the journey detail view."""
        ...

    @abstractmethod
    def close_detail(self) -> None:
        """Pop the journey detail view."""
        ...

    @abstractmethod
    def is_detail_active(self) -> bool:
        """Whether the detail view is currently shown."""
        ...
