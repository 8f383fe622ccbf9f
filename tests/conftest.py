"""Shared fixtures."""

import pytest

from tests.fakes import TEST_STATIONS, Harness, make_harness


@pytest.fixture
def harness() -> Harness:
    """A started controller with no stations yet."""
    harness = make_harness()
    harness.controller.start()
    return harness


@pytest.fixture
def loaded_harness(harness: Harness) -> Harness:
    """A controller whose favorite stations arrived and whose first request is in flight."""
    harness.load_stations(TEST_STATIONS)
    return harness
