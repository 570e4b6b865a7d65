from __future__ import annotations

import pytest

from pytournee.dispatch import RoundDispatcher, build_action
from pytournee.exceptions import TourneeActionError
from pytournee.models.actions import StartStop
from pytournee.models.analysis import ParcelAnalysis
from pytournee.models.state import ParcelStatus, RoundStatus, StopStatus, UnloadingStatus


def test_full_round_through_named_operations(dispatcher: RoundDispatcher) -> None:
    dispatcher.start_round()
    dispatcher.swap_stops(1, 2)
    dispatcher.start_stop(2)
    dispatcher.collect_parcel(2, "Frigo", "file:///frigo.jpg", {"recyclingScore": 9, "conditionScore": 7})
    dispatcher.complete_stop(2, StopStatus.SUCCESS)
    dispatcher.start_stop(1)
    dispatcher.refuse_parcel(1, "Lave-linge 1", "Appareil non DEEE")
    dispatcher.collect_parcel(1, "Micro-ondes", "file:///mo.jpg")
    dispatcher.set_parcel_analysis(1, "Micro-ondes", ParcelAnalysis(recycling_score=3, condition_score=2))
    dispatcher.set_stop_photo(1, "file:///door.jpg")
    dispatcher.complete_stop(1, "success")
    dispatcher.start_stop(3)
    dispatcher.complete_stop(3, "failed", "Personne absente")
    dispatcher.complete_round()
    dispatcher.unlock_unloading()
    dispatcher.start_unloading()
    dispatcher.scan_parcel_at_unloading(2, "Frigo")
    state = dispatcher.scan_parcel_at_unloading(1, "Micro-ondes")
    state = dispatcher.complete_unloading()

    assert state is dispatcher.state
    assert state.status == RoundStatus.COMPLETED
    assert state.order == (2, 1, 3)
    assert state.stops[3].failure_reason == "Personne absente"
    assert state.stops[1].parcels["Lave-linge 1"].status == ParcelStatus.REFUSED
    assert state.stops[2].parcels["Frigo"].analysis == ParcelAnalysis(recycling_score=9, condition_score=7)
    assert state.unloading.status == UnloadingStatus.COMPLETED
    assert state.unloading.scanned_parcels["2-Frigo"].destination == "recycling"
    assert state.unloading.scanned_parcels["1-Micro-ondes"].destination == "bin"


def test_reset_uses_store_definitions(dispatcher: RoundDispatcher) -> None:
    dispatcher.start_round()
    dispatcher.start_stop(1)

    state = dispatcher.reset()

    assert state.status == RoundStatus.PENDING
    assert state.stops[1].status == StopStatus.PENDING


def test_missing_ids_are_not_argument_errors(dispatcher: RoundDispatcher) -> None:
    before = dispatcher.state

    assert dispatcher.start_stop(404) is before
    assert dispatcher.collect_parcel(1, "Inconnu", "p") is before


@pytest.mark.parametrize(
    ("call", "action_type"),
    [
        (lambda d: d.start_stop("1"), "start_stop"),
        (lambda d: d.start_stop(True), "start_stop"),
        (lambda d: d.complete_stop(1, "done"), "complete_stop"),
        (lambda d: d.collect_parcel(1, "", "p"), "collect_parcel"),
        (lambda d: d.collect_parcel(1, "Micro-ondes", ""), "collect_parcel"),
        (lambda d: d.refuse_parcel(1, "Micro-ondes", ""), "refuse_parcel"),
        (lambda d: d.swap_stops(1, None), "swap_stops"),
        (lambda d: d.set_parcel_analysis(1, "Micro-ondes", None), "set_parcel_analysis"),
        (lambda d: d.scan_parcel_at_unloading(1.5, "Micro-ondes"), "scan_parcel_at_unloading"),
    ],
)
def test_invalid_argument_shapes(dispatcher: RoundDispatcher, call, action_type: str) -> None:
    before = dispatcher.state

    with pytest.raises(TourneeActionError) as excinfo:
        call(dispatcher)

    assert excinfo.value.action_type == action_type
    assert isinstance(excinfo.value, ValueError)
    assert dispatcher.state is before


def test_build_action() -> None:
    assert build_action(StartStop, stop_id=4) == StartStop(stop_id=4)
