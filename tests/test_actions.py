from __future__ import annotations

import pytest
from pydantic import ValidationError

from pytournee.models.actions import (
    CollectParcel,
    CompleteStop,
    Reset,
    StartRound,
    SwapStops,
    parse_action,
)
from pytournee.models.analysis import ParcelAnalysis


def test_parse_action_by_type_tag() -> None:
    assert parse_action({"type": "start_round"}) == StartRound()
    assert parse_action({"type": "swap_stops", "stopA": 1, "stopB": 4}) == SwapStops(stop_a=1, stop_b=4)
    assert parse_action({"type": "complete_stop", "stop_id": 2, "result": "failed", "reason": "Accès impossible"}) == (
        CompleteStop(stop_id=2, result="failed", reason="Accès impossible")
    )


def test_parse_action_with_nested_models() -> None:
    action = parse_action(
        {
            "type": "collect_parcel",
            "stopId": 3,
            "parcelName": "Washing Machine 1",
            "photo": "file:///wm.jpg",
            "analysis": {"recyclingScore": 8, "conditionScore": 4},
        }
    )

    assert isinstance(action, CollectParcel)
    assert action.analysis == ParcelAnalysis(recycling_score=8, condition_score=4)

    reset = parse_action(
        {"type": "reset", "definitions": [{"id": 1, "address": "a", "latitude": 0, "longitude": 0}]}
    )
    assert isinstance(reset, Reset)
    assert reset.definitions[0].id == 1


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "teleport"},
        {"type": "start_stop"},
        {"type": "start_stop", "stopId": 1, "extra": True},
        {"stopId": 1},
    ],
)
def test_parse_action_rejects_bad_payloads(payload) -> None:
    with pytest.raises(ValidationError):
        parse_action(payload)


def test_actions_are_frozen() -> None:
    action = SwapStops(stop_a=1, stop_b=2)

    with pytest.raises(ValidationError):
        action.stop_a = 3  # type: ignore[misc]
