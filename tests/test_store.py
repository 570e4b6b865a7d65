from __future__ import annotations

import logging

from pytournee.config import TourneeConfig
from pytournee.models.actions import CollectParcel, StartRound, StartStop
from pytournee.models.definitions import StopDefinition
from pytournee.models.state import RoundStatus
from pytournee.state.builder import build_round
from pytournee.state.store import RoundStore


def test_store_builds_initial_round(store: RoundStore, definitions) -> None:
    assert store.state == build_round(definitions)
    assert store.definitions == definitions


def test_apply_replaces_state(store: RoundStore) -> None:
    before = store.state

    after = store.apply(StartRound())

    assert after is store.state
    assert after is not before
    assert after.status == RoundStatus.IN_PROGRESS


def test_listeners_receive_previous_and_current(store: RoundStore) -> None:
    calls = []
    store.subscribe(lambda previous, current: calls.append((previous, current)))
    before = store.state

    store.apply(StartStop(stop_id=1))

    assert len(calls) == 1
    assert calls[0][0] is before
    assert calls[0][1] is store.state


def test_listeners_are_not_called_for_noops(store: RoundStore) -> None:
    calls = []
    store.subscribe(lambda previous, current: calls.append(current))

    store.apply(StartStop(stop_id=404))
    store.apply(CollectParcel(stop_id=1, parcel_name="Inconnu", photo="p"))

    assert calls == []


def test_unsubscribe(store: RoundStore) -> None:
    calls = []
    unsubscribe = store.subscribe(lambda previous, current: calls.append(current))
    unsubscribe()
    unsubscribe()

    store.apply(StartRound())

    assert calls == []


def test_failing_listener_does_not_block_others(store: RoundStore) -> None:
    calls = []

    def _boom(previous, current) -> None:
        raise RuntimeError("boom")

    store.subscribe(_boom)
    store.subscribe(lambda previous, current: calls.append(current))

    store.apply(StartRound())

    assert calls == [store.state]


def test_reset_rebuilds_from_current_definitions(store: RoundStore, definitions) -> None:
    store.apply(StartRound())
    store.apply(StartStop(stop_id=1))

    fresh = store.reset()

    assert fresh == build_round(definitions)


def test_reset_with_new_definitions_replaces_static_data(store: RoundStore) -> None:
    other = (StopDefinition(id=9, address="9 Rue X", latitude=0.0, longitude=0.0),)

    store.reset(other)
    store.apply(StartStop(stop_id=9))
    fresh = store.reset()

    assert fresh.order == (9,)
    assert store.definitions == other


def test_debug_actions_logs_redacted_payload(definitions, clock, caplog) -> None:
    store = RoundStore(definitions, config=TourneeConfig(debug_actions=True), clock=clock)

    with caplog.at_level(logging.DEBUG, logger="pytournee.state.store"):
        store.apply(StartStop(stop_id=1))

    assert any("start_stop" in record.getMessage() for record in caplog.records)
