"""Background update triggers."""

from commuter_sync.adapters.background.background_trigger import BackgroundTrigger

__all__ = ["BackgroundTrigger"]
