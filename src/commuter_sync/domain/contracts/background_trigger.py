"""Protocols for periodic background fetches."""

from typing import Protocol


class BackgroundFetchTarget(Protocol):
    """Something that can run a schedule fetch without refreshing the UI."""

    def request_background_fetch(self) -> bool:
        """Start a background schedule fetch.

        Returns:
            True if a request was issued.
        """
        ...


class BackgroundTriggerProtocol(Protocol):
    """Protocol for the periodic background trigger."""

    async def start(self) -> None:
        """Start triggering."""
        ...

    async def stop(self) -> None:
        """Stop triggering."""
        ...
