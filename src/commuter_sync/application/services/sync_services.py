"""Collaborators and settings shared by the protocol components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from commuter_sync.domain.models.station import DEFAULT_STATIONS, Station
from commuter_sync.domain.models.train_departure import MAX_DEPARTURES

if TYPE_CHECKING:
    from commuter_sync.domain.contracts.summary_refresher import SummaryRefresherProtocol
    from commuter_sync.domain.contracts.timer_scheduler import TimerSchedulerProtocol
    from commuter_sync.domain.ports import MessageChannel, PresentationAdapter


@dataclass(frozen=True)
class SyncServices:
    """External collaborators of the sync session."""

    channel: MessageChannel
    timers: TimerSchedulerProtocol
    presentation: PresentationAdapter
    summary_refresher: SummaryRefresherProtocol


@dataclass(frozen=True)
class SyncSettings:
    """Tunables of the sync protocol."""

    loading_timeout_ms: int = 10_000
    config_timeout_ms: int = 3_000
    summary_slice_limit: int = MAX_DEPARTURES
    default_stations: tuple[Station, ...] = field(default=DEFAULT_STATIONS)
