"""Data models for rounds, stops, parcels, the unloading stage and actions."""

from pytournee.models._base import TourneeBaseModel, utcnow
from pytournee.models.actions import (
    ACTION_TYPES,
    Action,
    CollectParcel,
    CompleteRound,
    CompleteStop,
    CompleteUnloading,
    RefuseParcel,
    Reset,
    ResetStop,
    ScanParcelAtUnloading,
    SetParcelAnalysis,
    SetStopPhoto,
    StartRound,
    StartStop,
    StartUnloading,
    SwapStops,
    UnlockUnloading,
    parse_action,
)
from pytournee.models.analysis import ParcelAnalysis, clamp_score, parse_analysis_response
from pytournee.models.definitions import ParcelDefinition, StopDefinition
from pytournee.models.state import (
    TERMINAL_PARCEL_STATUSES,
    TERMINAL_STOP_STATUSES,
    Destination,
    Parcel,
    ParcelStatus,
    Round,
    RoundStatus,
    ScannedParcel,
    Stop,
    StopStatus,
    Unloading,
    UnloadingStatus,
    route_parcel,
)

__all__ = [
    "ACTION_TYPES",
    "Action",
    "CollectParcel",
    "CompleteRound",
    "CompleteStop",
    "CompleteUnloading",
    "Destination",
    "Parcel",
    "ParcelAnalysis",
    "ParcelDefinition",
    "ParcelStatus",
    "RefuseParcel",
    "Reset",
    "ResetStop",
    "Round",
    "RoundStatus",
    "ScanParcelAtUnloading",
    "ScannedParcel",
    "SetParcelAnalysis",
    "SetStopPhoto",
    "StartRound",
    "StartStop",
    "StartUnloading",
    "Stop",
    "StopDefinition",
    "StopStatus",
    "SwapStops",
    "TERMINAL_PARCEL_STATUSES",
    "TERMINAL_STOP_STATUSES",
    "TourneeBaseModel",
    "Unloading",
    "UnloadingStatus",
    "UnlockUnloading",
    "clamp_score",
    "parse_action",
    "parse_analysis_response",
    "route_parcel",
    "utcnow",
]
