"""Companion-side fixtures for simulation."""

from commuter_sync.adapters.companion.fixture_companion import (
    FixtureCompanion,
    FixtureConnection,
    sample_connections,
)

__all__ = ["FixtureCompanion", "FixtureConnection", "sample_connections"]
