"""Actions: the closed set of transitions a round accepts.

Each action is a small frozen model tagged by its ``type`` field. The
:data:`Action` union is discriminated on that tag, so plain dicts (e.g.
coming from a UI bridge) can be parsed with :func:`parse_action`.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Field, StrictInt, TypeAdapter

from pytournee.models._base import TourneeBaseModel
from pytournee.models.analysis import ParcelAnalysis
from pytournee.models.definitions import StopDefinition

NonEmptyStr = Annotated[str, Field(min_length=1)]


class StartRound(TourneeBaseModel):
    type: Literal["start_round"] = "start_round"


class StartStop(TourneeBaseModel):
    type: Literal["start_stop"] = "start_stop"
    stop_id: StrictInt


class CompleteStop(TourneeBaseModel):
    type: Literal["complete_stop"] = "complete_stop"
    stop_id: StrictInt
    result: Literal["success", "failed"]
    reason: str | None = None


class SetStopPhoto(TourneeBaseModel):
    type: Literal["set_stop_photo"] = "set_stop_photo"
    stop_id: StrictInt
    uri: NonEmptyStr


class CollectParcel(TourneeBaseModel):
    type: Literal["collect_parcel"] = "collect_parcel"
    stop_id: StrictInt
    parcel_name: NonEmptyStr
    photo: NonEmptyStr
    analysis: ParcelAnalysis | None = None


class RefuseParcel(TourneeBaseModel):
    type: Literal["refuse_parcel"] = "refuse_parcel"
    stop_id: StrictInt
    parcel_name: NonEmptyStr
    reason: NonEmptyStr


class SetParcelAnalysis(TourneeBaseModel):
    type: Literal["set_parcel_analysis"] = "set_parcel_analysis"
    stop_id: StrictInt
    parcel_name: NonEmptyStr
    analysis: ParcelAnalysis


class ResetStop(TourneeBaseModel):
    type: Literal["reset_stop"] = "reset_stop"
    stop_id: StrictInt


class SwapStops(TourneeBaseModel):
    type: Literal["swap_stops"] = "swap_stops"
    stop_a: StrictInt
    stop_b: StrictInt


class CompleteRound(TourneeBaseModel):
    type: Literal["complete_round"] = "complete_round"


class Reset(TourneeBaseModel):
    type: Literal["reset"] = "reset"
    definitions: tuple[StopDefinition, ...]


class UnlockUnloading(TourneeBaseModel):
    type: Literal["unlock_unloading"] = "unlock_unloading"


class StartUnloading(TourneeBaseModel):
    type: Literal["start_unloading"] = "start_unloading"


class ScanParcelAtUnloading(TourneeBaseModel):
    type: Literal["scan_parcel_at_unloading"] = "scan_parcel_at_unloading"
    stop_id: StrictInt
    parcel_name: NonEmptyStr


class CompleteUnloading(TourneeBaseModel):
    type: Literal["complete_unloading"] = "complete_unloading"


Action = Annotated[
    StartRound
    | StartStop
    | CompleteStop
    | SetStopPhoto
    | CollectParcel
    | RefuseParcel
    | SetParcelAnalysis
    | ResetStop
    | SwapStops
    | CompleteRound
    | Reset
    | UnlockUnloading
    | StartUnloading
    | ScanParcelAtUnloading
    | CompleteUnloading,
    Field(discriminator="type"),
]

ACTION_TYPES: tuple[type[TourneeBaseModel], ...] = (
    StartRound,
    StartStop,
    CompleteStop,
    SetStopPhoto,
    CollectParcel,
    RefuseParcel,
    SetParcelAnalysis,
    ResetStop,
    SwapStops,
    CompleteRound,
    Reset,
    UnlockUnloading,
    StartUnloading,
    ScanParcelAtUnloading,
    CompleteUnloading,
)

_ACTION_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)


def parse_action(data: dict[str, Any]) -> Action:
    """Validate a dict (``{"type": "start_stop", "stopId": 3}``) into an action."""
    return _ACTION_ADAPTER.validate_python(data)
