"""Presentation adapters."""

from commuter_sync.adapters.presentation.logging_presentation_adapter import (
    LoggingPresentationAdapter,
)

__all__ = ["LoggingPresentationAdapter"]
