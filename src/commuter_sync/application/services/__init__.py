"""Application services (use cases) for the sync protocol."""

from commuter_sync.application.services.departure_reassembler import DepartureReassembler
from commuter_sync.application.services.journey_reassembler import JourneyReassembler
from commuter_sync.application.services.load_state_machine import LoadStateMachine
from commuter_sync.application.services.request_sequencer import RequestSequencer
from commuter_sync.application.services.station_config_sync import StationConfigSync
from commuter_sync.application.services.summary_builder import (
    build_summary_slices,
    format_summary_subtitle,
)
from commuter_sync.application.services.sync_controller import SyncController
from commuter_sync.application.services.sync_services import SyncServices, SyncSettings

__all__ = [
    "DepartureReassembler",
    "JourneyReassembler",
    "LoadStateMachine",
    "RequestSequencer",
    "StationConfigSync",
    "SyncController",
    "SyncServices",
    "SyncSettings",
    "build_summary_slices",
    "format_summary_subtitle",
]
