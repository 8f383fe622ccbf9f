"""Tests for the schedule fetch lifecycle."""

from commuter_sync.application.services import SyncSettings
from commuter_sync.domain.models import (
    AcknowledgeMessage,
    DepartureCountMessage,
    DepartureMessage,
    LoadState,
    RequestKind,
)
from tests.fakes import TEST_STATIONS, FakeTimer, Harness, make_harness


def _loading_timer(harness: Harness) -> FakeTimer:
    timers = [t for t in harness.timers.active if t.delay_ms == SyncSettings().loading_timeout_ms]
    assert len(timers) == 1
    return timers[0]


def _record_transitions(harness: Harness) -> list[tuple[LoadState, LoadState]]:
    transitions: list[tuple[LoadState, LoadState]] = []
    harness.controller.load_state_machine.add_transition_listener(
        lambda old, new: transitions.append((old, new))
    )
    return transitions


def test_request_without_stations_is_noop() -> None:
    """Given no configured stations, when requesting a schedule, then state stays IDLE and no id is used."""
    harness = make_harness()

    assert harness.controller.request_schedule() is False

    assert harness.session.load_state == LoadState.IDLE
    assert harness.session.request_ids[RequestKind.SCHEDULE] == 0
    assert harness.channel.sent == []
    assert harness.presentation.calls == []


def test_request_enters_connecting_and_sends_active_pair(loaded_harness: Harness) -> None:
    """Given loaded stations, when the first request goes out, then it carries the from/to ids and a fresh id."""
    session = loaded_harness.session

    assert session.load_state == LoadState.CONNECTING
    assert session.loading is True
    assert session.failed is False
    request = loaded_harness.channel.schedule_requests[-1]
    assert request.from_station_id == TEST_STATIONS[0].station_id
    assert request.to_station_id == TEST_STATIONS[1].station_id
    assert request.request_id == 1
    _loading_timer(loaded_harness)


def test_acknowledge_moves_to_fetching(loaded_harness: Harness) -> None:
    """Given CONNECTING, when the live id is acknowledged, then state is FETCHING and the list reloads."""
    reloads = loaded_harness.presentation.count("reload")

    loaded_harness.receive(AcknowledgeMessage(request_id=loaded_harness.last_schedule_id()))

    assert loaded_harness.session.load_state == LoadState.FETCHING
    assert loaded_harness.presentation.count("reload") == reloads + 1


def test_stale_count_does_not_mutate_state(loaded_harness: Harness) -> None:
    """Given live id 5, when a count with id 4 arrives, then nothing changes."""
    for _ in range(4):
        loaded_harness.controller.request_schedule()
    assert loaded_harness.last_schedule_id() == 5
    loaded_harness.receive(AcknowledgeMessage(request_id=5))
    transitions = _record_transitions(loaded_harness)

    loaded_harness.receive(DepartureCountMessage(request_id=4, count=3))

    assert loaded_harness.session.load_state == LoadState.FETCHING
    assert loaded_harness.session.departure_count == 0
    assert transitions == []


def test_stale_acknowledge_and_rows_are_ignored(loaded_harness: Harness) -> None:
    """Given a superseded request, when its ack and rows arrive, then the live fetch is untouched."""
    old_id = loaded_harness.last_schedule_id()
    loaded_harness.controller.request_schedule()
    live_id = loaded_harness.last_schedule_id()

    loaded_harness.receive(AcknowledgeMessage(request_id=old_id))
    assert loaded_harness.session.load_state == LoadState.CONNECTING

    loaded_harness.receive(AcknowledgeMessage(request_id=live_id))
    loaded_harness.receive(DepartureCountMessage(request_id=live_id, count=2))
    loaded_harness.receive(DepartureMessage(request_id=old_id, index=1, destination="Stale"))

    assert loaded_harness.session.load_state == LoadState.RECEIVING
    assert loaded_harness.session.departures[1].destination == ""


def test_zero_count_completes_without_rows(loaded_harness: Harness) -> None:
    """Given count 0, when it arrives, then CONNECTING->FETCHING->RECEIVING->COMPLETE and loading ends."""
    transitions = _record_transitions(loaded_harness)
    request_id = loaded_harness.last_schedule_id()

    loaded_harness.receive(AcknowledgeMessage(request_id=request_id))
    loaded_harness.receive(DepartureCountMessage(request_id=request_id, count=0))

    assert transitions == [
        (LoadState.CONNECTING, LoadState.FETCHING),
        (LoadState.FETCHING, LoadState.RECEIVING),
        (LoadState.RECEIVING, LoadState.COMPLETE),
    ]
    assert loaded_harness.session.loading is False
    assert loaded_harness.summary.refreshes == [[]]
    assert loaded_harness.timers.active == []


def test_count_without_acknowledge_passes_through_fetching(loaded_harness: Harness) -> None:
    """Given a lost ack, when the live count arrives in CONNECTING, then the state still walks through FETCHING."""
    transitions = _record_transitions(loaded_harness)

    loaded_harness.receive(
        DepartureCountMessage(request_id=loaded_harness.last_schedule_id(), count=2)
    )

    assert transitions == [
        (LoadState.CONNECTING, LoadState.FETCHING),
        (LoadState.FETCHING, LoadState.RECEIVING),
    ]


def test_rows_in_order_complete_exactly_after_last(loaded_harness: Harness) -> None:
    """Given count 3, when rows 0,1,2 arrive in order, then COMPLETE is reached only after row 2."""
    request_id = loaded_harness.last_schedule_id()
    loaded_harness.receive(AcknowledgeMessage(request_id=request_id))
    loaded_harness.receive(DepartureCountMessage(request_id=request_id, count=3))

    states = []
    for index, destination in enumerate(["Antwerp-Central", "Mechelen", "Antwerp-Berchem"]):
        loaded_harness.receive(
            DepartureMessage(request_id=request_id, index=index, destination=destination)
        )
        states.append(loaded_harness.session.load_state)

    assert states == [LoadState.RECEIVING, LoadState.RECEIVING, LoadState.COMPLETE]
    assert [d.destination for d in loaded_harness.session.received_departures] == [
        "Antwerp-Central",
        "Mechelen",
        "Antwerp-Berchem",
    ]
    assert loaded_harness.presentation.count("mark_dirty") == 2
    assert len(loaded_harness.summary.refreshes) == 1
    assert len(loaded_harness.summary.refreshes[0]) == 3


def test_completion_only_needs_last_index(loaded_harness: Harness) -> None:
    """Given count 3, when rows 2 then 0 arrive, then COMPLETE is reached on row 2 and row 0 is still merged."""
    request_id = loaded_harness.last_schedule_id()
    loaded_harness.receive(AcknowledgeMessage(request_id=request_id))
    loaded_harness.receive(DepartureCountMessage(request_id=request_id, count=3))

    loaded_harness.receive(DepartureMessage(request_id=request_id, index=2, destination="Last"))
    assert loaded_harness.session.load_state == LoadState.COMPLETE

    loaded_harness.receive(DepartureMessage(request_id=request_id, index=0, destination="First"))
    assert loaded_harness.session.load_state == LoadState.COMPLETE
    assert loaded_harness.session.departures[0].destination == "First"
    assert loaded_harness.session.departures[2].destination == "Last"


def test_late_row_after_complete_redraws_without_completing_again(loaded_harness: Harness) -> None:
    """Given a completed list, when a live row for an earlier index arrives, then it is merged and only marks the view dirty."""
    request_id = loaded_harness.last_schedule_id()
    loaded_harness.receive(DepartureCountMessage(request_id=request_id, count=2))
    loaded_harness.receive(DepartureMessage(request_id=request_id, index=1, destination="Lier"))
    transitions = _record_transitions(loaded_harness)
    refreshes = len(loaded_harness.summary.refreshes)
    reloads = loaded_harness.presentation.count("reload")
    dirty = loaded_harness.presentation.count("mark_dirty")

    loaded_harness.receive(DepartureMessage(request_id=request_id, index=0, destination="Mechelen"))
    loaded_harness.receive(DepartureMessage(request_id=request_id, index=1, destination="Lier"))

    assert transitions == []
    assert [d.destination for d in loaded_harness.session.received_departures] == [
        "Mechelen",
        "Lier",
    ]
    assert loaded_harness.presentation.count("mark_dirty") == dirty + 2
    assert loaded_harness.presentation.count("reload") == reloads
    assert len(loaded_harness.summary.refreshes) == refreshes


def test_stale_row_after_complete_is_ignored(loaded_harness: Harness) -> None:
    """Given a completed list and a newer request, when a row with the old id arrives, then nothing changes."""
    old_id = loaded_harness.last_schedule_id()
    loaded_harness.deliver_schedule(old_id, ["Antwerp-Central"])
    loaded_harness.controller.request_schedule()

    loaded_harness.receive(DepartureMessage(request_id=old_id, index=0, destination="Stale"))

    assert loaded_harness.session.load_state == LoadState.CONNECTING
    assert loaded_harness.session.departures[0].destination == "Antwerp-Central"


def test_repeated_row_keeps_absent_text_and_resets_values(loaded_harness: Harness) -> None:
    """Given a merged row, when the same index arrives with only a depart time, then text is kept and values take defaults."""
    request_id = loaded_harness.last_schedule_id()
    loaded_harness.receive(DepartureCountMessage(request_id=request_id, count=2))
    loaded_harness.receive(
        DepartureMessage(
            request_id=request_id,
            index=0,
            destination="Antwerp-Central",
            platform="5",
            depart_delay=3,
            arrive_delay=2,
            is_direct=False,
            platform_changed=True,
            depart_timestamp=1_700_000_000,
        )
    )

    loaded_harness.receive(DepartureMessage(request_id=request_id, index=0, depart_time="08:14"))

    departure = loaded_harness.session.departures[0]
    assert departure.destination == "Antwerp-Central"
    assert departure.platform == "5"
    assert departure.depart_time == "08:14"
    assert departure.depart_delay == 0
    assert departure.arrive_delay == 0
    assert departure.is_direct is True
    assert departure.platform_changed is False
    assert departure.depart_timestamp == 0
    assert loaded_harness.session.load_state == LoadState.RECEIVING


def test_row_without_id_is_accepted(loaded_harness: Harness) -> None:
    """Given RECEIVING, when a row carries no request id, then it is merged."""
    request_id = loaded_harness.last_schedule_id()
    loaded_harness.receive(DepartureCountMessage(request_id=request_id, count=2))

    loaded_harness.receive(DepartureMessage(index=0, destination="Leuven"))

    assert loaded_harness.session.departures[0].destination == "Leuven"


def test_oversized_count_is_dropped(loaded_harness: Harness) -> None:
    """Given a count above capacity, when it arrives, then it is dropped and the fetch stays in flight."""
    request_id = loaded_harness.last_schedule_id()
    loaded_harness.receive(AcknowledgeMessage(request_id=request_id))

    loaded_harness.receive(DepartureCountMessage(request_id=request_id, count=12))

    assert loaded_harness.session.load_state == LoadState.FETCHING
    assert loaded_harness.session.departure_count == 0

    _loading_timer(loaded_harness).fire()
    assert loaded_harness.session.load_state == LoadState.ERROR


def test_out_of_range_row_is_dropped(loaded_harness: Harness) -> None:
    """Given count 2, when row 5 arrives, then no slot changes and the fetch continues."""
    request_id = loaded_harness.last_schedule_id()
    loaded_harness.receive(DepartureCountMessage(request_id=request_id, count=2))

    loaded_harness.receive(DepartureMessage(request_id=request_id, index=5, destination="Nowhere"))

    assert loaded_harness.session.load_state == LoadState.RECEIVING
    assert all(d.destination == "" for d in loaded_harness.session.departures)


def test_timeout_in_each_in_flight_state_fails() -> None:
    """Given CONNECTING, FETCHING or RECEIVING, when the loading timer fires, then state is ERROR."""
    for steps in range(3):
        harness = make_harness()
        harness.controller.start()
        harness.load_stations(TEST_STATIONS)
        request_id = harness.last_schedule_id()
        if steps >= 1:
            harness.receive(AcknowledgeMessage(request_id=request_id))
        if steps >= 2:
            harness.receive(DepartureCountMessage(request_id=request_id, count=3))

        _loading_timer(harness).fire()

        assert harness.session.load_state == LoadState.ERROR
        assert harness.session.loading is False
        assert harness.session.failed is True


def test_timeout_after_complete_is_noop(loaded_harness: Harness) -> None:
    """Given COMPLETE, when a stale timer callback runs, then state stays COMPLETE."""
    timer = _loading_timer(loaded_harness)
    loaded_harness.deliver_schedule(loaded_harness.last_schedule_id(), ["Antwerp-Central"])
    assert timer.cancelled is True

    loaded_harness.controller.load_state_machine.handle_timeout()

    assert loaded_harness.session.load_state == LoadState.COMPLETE
    assert loaded_harness.session.failed is False


def test_new_request_after_error_starts_over(loaded_harness: Harness) -> None:
    """Given ERROR, when the user requests again, then a new fetch starts with failed cleared."""
    _loading_timer(loaded_harness).fire()
    assert loaded_harness.session.load_state == LoadState.ERROR

    assert loaded_harness.controller.request_schedule() is True

    assert loaded_harness.session.load_state == LoadState.CONNECTING
    assert loaded_harness.session.failed is False
    assert loaded_harness.last_schedule_id() == 2


def test_send_failure_of_live_request_fails_fetch(loaded_harness: Harness) -> None:
    """Given an in-flight request, when its send fails, then state is ERROR without waiting for the timer."""
    loaded_harness.channel.fail_last()

    assert loaded_harness.session.load_state == LoadState.ERROR
    assert loaded_harness.session.failed is True
    assert loaded_harness.timers.active == []


def test_send_failure_of_superseded_request_is_ignored(loaded_harness: Harness) -> None:
    """Given a newer request, when the old request's send fails, then the live fetch continues."""
    stale = loaded_harness.channel.sent[-1]
    loaded_harness.controller.request_schedule()

    assert loaded_harness.channel.handlers is not None
    loaded_harness.channel.handlers.on_failed(stale, "late failure")

    assert loaded_harness.session.load_state == LoadState.CONNECTING


def test_background_fetch_suppresses_reload_and_calls_hook() -> None:
    """Given a background fetch, when it completes, then the summary refreshes without a list reload."""
    completed: list[bool] = []
    harness = make_harness(on_background_complete=lambda: completed.append(True))
    harness.controller.start()
    harness.load_stations(TEST_STATIONS)
    harness.deliver_schedule(harness.last_schedule_id(), ["Antwerp-Central"])
    harness.presentation.calls.clear()

    assert harness.controller.request_background_fetch() is True
    request_id = harness.last_schedule_id()
    harness.receive(DepartureCountMessage(request_id=request_id, count=2))
    harness.receive(DepartureMessage(request_id=request_id, index=0, destination="Mechelen"))
    harness.receive(DepartureMessage(request_id=request_id, index=1, destination="Lier"))

    assert harness.session.load_state == LoadState.COMPLETE
    assert harness.session.background is False
    assert completed == [True]
    assert "mark_dirty" not in harness.presentation.calls
    assert harness.presentation.count("reload") == 1  # only when the request went out
    assert [s.subtitle.split(" • ")[-1] for s in harness.summary.refreshes[-1]] == [
        "Mechelen",
        "Lier",
    ]
    assert len(harness.summary.refreshes) == 2
