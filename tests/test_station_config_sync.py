"""Tests for the favorite station configuration sync."""

from commuter_sync.application.services import SyncSettings
from commuter_sync.domain.models import (
    DEFAULT_STATIONS,
    LoadState,
    SetActiveRouteMessage,
    Station,
    StationCountMessage,
    StationMessage,
)
from tests.fakes import TEST_STATIONS, Harness, make_harness


def _config_timer(harness: Harness):
    return next(t for t in harness.timers.timers if t.delay_ms == SyncSettings().config_timeout_ms)


def test_start_arms_config_timer(harness: Harness) -> None:
    """Given a fresh controller, when started, then the configuration timer is armed."""
    timer = _config_timer(harness)

    assert timer.active
    assert harness.channel.sent == []


def test_config_timeout_installs_defaults_and_requests_once(harness: Harness) -> None:
    """Given no station messages, when the config timer fires, then 5 defaults are installed and one request goes out."""
    _config_timer(harness).fire()

    stations = harness.session.stations
    assert stations.count == 5
    assert stations.stations == list(DEFAULT_STATIONS)
    assert stations.received is True
    assert (stations.from_index, stations.to_index) == (0, 1)
    assert len(harness.channel.schedule_requests) == 1
    assert harness.channel.schedule_requests[0].from_station_id == DEFAULT_STATIONS[0].station_id
    assert harness.session.load_state == LoadState.CONNECTING


def test_config_timeout_uses_configured_defaults() -> None:
    """Given custom default stations, when the config timer fires, then they are installed."""
    defaults = (
        Station(name="Leuven", station_id="BE.NMBS.008833001"),
        Station(name="Mechelen", station_id="BE.NMBS.008822004"),
    )
    harness = make_harness(SyncSettings(default_stations=defaults))
    harness.controller.start()

    _config_timer(harness).fire()

    assert harness.session.stations.stations == list(defaults)


def test_last_station_completes_sync(harness: Harness) -> None:
    """Given a pushed station list, when the last station arrives, then the timer is cancelled and a request goes out."""
    timer = _config_timer(harness)

    harness.load_stations(TEST_STATIONS)

    assert timer.cancelled is True
    assert harness.session.stations.received is True
    assert harness.session.stations.stations == TEST_STATIONS
    assert len(harness.channel.schedule_requests) == 1


def test_station_list_arriving_before_timeout_prevents_defaults(harness: Harness) -> None:
    """Given a received station list, when a late timer callback runs, then nothing changes."""
    harness.load_stations(TEST_STATIONS)

    harness.controller.station_sync.handle_timeout()

    assert harness.session.stations.count == 3
    assert len(harness.channel.schedule_requests) == 1


def test_partial_station_list_falls_back_to_defaults(harness: Harness) -> None:
    """Given only some stations arrived, when the config timer fires, then the defaults replace them."""
    harness.receive(StationCountMessage(count=3))
    harness.receive(StationMessage(index=0, name="Oostende", station_id="BE.NMBS.008891702"))

    _config_timer(harness).fire()

    assert harness.session.stations.stations == list(DEFAULT_STATIONS)


def test_station_count_is_clamped(harness: Harness) -> None:
    """Given a count above capacity, when it arrives, then six stations are expected."""
    harness.receive(StationCountMessage(count=9))

    assert harness.session.stations.count == 6


def test_out_of_range_station_is_dropped(harness: Harness) -> None:
    """Given capacity 6, when station 6 arrives, then no slot changes."""
    harness.receive(StationCountMessage(count=2))

    harness.receive(StationMessage(index=6, name="Brugge", station_id="BE.NMBS.008891009"))

    assert all(station.name == "" for station in harness.session.stations.slots)


def test_station_message_without_name_keeps_previous_name(harness: Harness) -> None:
    """Given a filled slot, when a message without name arrives, then only the id changes."""
    harness.receive(StationCountMessage(count=3))
    harness.receive(StationMessage(index=0, name="Brussels-South", station_id="A"))

    harness.receive(StationMessage(index=0, station_id="BE.NMBS.008814001"))

    station = harness.session.stations.slots[0]
    assert station.name == "Brussels-South"
    assert station.station_id == "BE.NMBS.008814001"


def test_set_active_route_in_range_requests_once(loaded_harness: Harness) -> None:
    """Given loaded stations, when an in-range route is set, then exactly one request for the new pair goes out."""
    before = len(loaded_harness.channel.schedule_requests)

    loaded_harness.receive(SetActiveRouteMessage(from_index=2, to_index=0))

    requests = loaded_harness.channel.schedule_requests
    assert len(requests) == before + 1
    assert requests[-1].from_station_id == TEST_STATIONS[2].station_id
    assert requests[-1].to_station_id == TEST_STATIONS[0].station_id
    stations = loaded_harness.session.stations
    assert (stations.from_index, stations.to_index) == (2, 0)


def test_set_active_route_out_of_range_is_ignored(loaded_harness: Harness) -> None:
    """Given three stations, when a route with index 3 is set, then nothing is sent and the pair is unchanged."""
    before = len(loaded_harness.channel.schedule_requests)

    loaded_harness.receive(SetActiveRouteMessage(from_index=1, to_index=3))

    assert len(loaded_harness.channel.schedule_requests) == before
    stations = loaded_harness.session.stations
    assert (stations.from_index, stations.to_index) == (0, 1)


def test_cycle_stations_wraps_and_requests(loaded_harness: Harness) -> None:
    """Given three stations, when cycling the from station three times, then it wraps to the first."""
    for expected in (1, 2, 0):
        assert loaded_harness.controller.cycle_from_station() is True
        assert loaded_harness.session.stations.from_index == expected

    assert loaded_harness.controller.cycle_to_station() is True
    assert loaded_harness.session.stations.to_index == 2
    assert loaded_harness.channel.schedule_requests[-1].to_station_id == TEST_STATIONS[2].station_id


def test_cycle_without_stations_is_noop(harness: Harness) -> None:
    """Given no stations, when cycling, then nothing is requested."""
    assert harness.controller.cycle_from_station() is False
    assert harness.controller.cycle_to_station() is False
    assert harness.channel.sent == []


def test_shrinking_station_list_clamps_route(loaded_harness: Harness) -> None:
    """Given route 2 -> 1, when a list of one station is pushed, then both indices point at it."""
    loaded_harness.receive(SetActiveRouteMessage(from_index=2, to_index=1))

    loaded_harness.load_stations([Station(name="Gent-Dampoort", station_id="BE.NMBS.008893120")])

    stations = loaded_harness.session.stations
    assert (stations.from_index, stations.to_index) == (0, 0)
