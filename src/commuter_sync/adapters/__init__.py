"""Adapters layer - channels, timers, presentation and configuration."""

from commuter_sync.adapters.background import BackgroundTrigger
from commuter_sync.adapters.channel import LoopbackChannel, WebSocketChannel
from commuter_sync.adapters.config import AppConfig
from commuter_sync.adapters.presentation import LoggingPresentationAdapter
from commuter_sync.adapters.summary import LoggingSummaryRefresher
from commuter_sync.adapters.timers import AsyncioTimerScheduler

__all__ = [
    "AppConfig",
    "AsyncioTimerScheduler",
    "BackgroundTrigger",
    "LoggingPresentationAdapter",
    "LoggingSummaryRefresher",
    "LoopbackChannel",
    "WebSocketChannel",
]
