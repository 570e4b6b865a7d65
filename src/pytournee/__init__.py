"""pytournee - State machine for a collection round and its depot unloading stage."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytournee")
except PackageNotFoundError:
    __version__ = "0+local"

from pytournee._constants import FAILURE_REASONS, REFUSAL_REASONS, qr_payload, scan_key
from pytournee.config import TourneeConfig
from pytournee.data import DEFAULT_ROUND, load_round_definitions, validate_round_definitions
from pytournee.dispatch import RoundDispatcher
from pytournee.exceptions import RoundDataError, TourneeActionError, TourneeConfigError, TourneeError
from pytournee.models import (
    Action,
    Destination,
    Parcel,
    ParcelAnalysis,
    ParcelDefinition,
    ParcelStatus,
    Round,
    RoundStatus,
    ScannedParcel,
    Stop,
    StopDefinition,
    StopStatus,
    Unloading,
    UnloadingStatus,
    parse_analysis_response,
)
from pytournee.state import RoundStore, build_round, reduce

__all__ = [
    "__version__",
    "Action",
    "DEFAULT_ROUND",
    "Destination",
    "FAILURE_REASONS",
    "Parcel",
    "ParcelAnalysis",
    "ParcelDefinition",
    "ParcelStatus",
    "REFUSAL_REASONS",
    "Round",
    "RoundDataError",
    "RoundDispatcher",
    "RoundStatus",
    "RoundStore",
    "ScannedParcel",
    "Stop",
    "StopDefinition",
    "StopStatus",
    "TourneeActionError",
    "TourneeConfig",
    "TourneeConfigError",
    "TourneeError",
    "Unloading",
    "UnloadingStatus",
    "build_round",
    "load_round_definitions",
    "parse_analysis_response",
    "qr_payload",
    "reduce",
    "scan_key",
    "validate_round_definitions",
]
