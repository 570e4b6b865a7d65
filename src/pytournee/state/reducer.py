"""Transition engine: ``reduce(state, action) -> state``.

Every transition is a pure copy-on-write update. Only the records on the path
from the round to the touched stop/parcel are rebuilt; every other record
keeps its identity, so consumers can detect changes with ``is``.

The reducer is total: an action about a stop or parcel that does not exist,
or one that does not apply to the current status, returns ``state`` itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from pytournee._constants import scan_key
from pytournee.config import TourneeConfig
from pytournee.models._base import utcnow
from pytournee.models.actions import (
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
)
from pytournee.models.state import (
    Parcel,
    ParcelStatus,
    Round,
    RoundStatus,
    ScannedParcel,
    Stop,
    StopStatus,
    UnloadingStatus,
    route_parcel,
)
from pytournee.state.builder import build_round

_logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


# ---------------------------------------------------------------------------
# Copy-on-write helpers
# ---------------------------------------------------------------------------


def _with_stop(state: Round, stop: Stop) -> Round:
    return state.model_copy(update={"stops": {**state.stops, stop.id: stop}})


def _with_parcel(state: Round, stop: Stop, parcel: Parcel) -> Round:
    new_stop = stop.model_copy(update={"parcels": {**stop.parcels, parcel.name: parcel}})
    return _with_stop(state, new_stop)


def _find_stop(state: Round, stop_id: int, action_type: str) -> Stop | None:
    stop = state.stops.get(stop_id)
    if stop is None:
        _logger.debug("%s ignored: unknown stop_id=%s", action_type, stop_id)
    return stop


def _find_parcel(state: Round, stop_id: int, parcel_name: str, action_type: str) -> tuple[Stop, Parcel] | None:
    stop = _find_stop(state, stop_id, action_type)
    if stop is None:
        return None
    parcel = stop.parcels.get(parcel_name)
    if parcel is None:
        _logger.debug("%s ignored: unknown parcel %r at stop_id=%s", action_type, parcel_name, stop_id)
        return None
    return stop, parcel


# ---------------------------------------------------------------------------
# Round
# ---------------------------------------------------------------------------


def _start_round(state: Round, action: StartRound, clock: Clock, config: TourneeConfig) -> Round:
    return state.model_copy(update={"status": RoundStatus.IN_PROGRESS, "started_at": clock()})


def _complete_round(state: Round, action: CompleteRound, clock: Clock, config: TourneeConfig) -> Round:
    return state.model_copy(update={"status": RoundStatus.COMPLETED, "completed_at": clock()})


def _reset(state: Round, action: Reset, clock: Clock, config: TourneeConfig) -> Round:
    return build_round(action.definitions, config)


def _swap_stops(state: Round, action: SwapStops, clock: Clock, config: TourneeConfig) -> Round:
    try:
        idx_a = state.order.index(action.stop_a)
        idx_b = state.order.index(action.stop_b)
    except ValueError:
        _logger.debug("swap_stops ignored: %s or %s not in order", action.stop_a, action.stop_b)
        return state
    if idx_a == idx_b:
        return state
    order = list(state.order)
    order[idx_a], order[idx_b] = order[idx_b], order[idx_a]
    return state.model_copy(update={"order": tuple(order)})


# ---------------------------------------------------------------------------
# Stops
# ---------------------------------------------------------------------------


def _start_stop(state: Round, action: StartStop, clock: Clock, config: TourneeConfig) -> Round:
    stop = _find_stop(state, action.stop_id, action.type)
    if stop is None:
        return state
    if stop.status != StopStatus.PENDING:
        # Keeps the first started_at and never reopens a finished stop.
        _logger.debug("start_stop ignored: stop_id=%s is %s", stop.id, stop.status)
        return state
    return _with_stop(state, stop.model_copy(update={"status": StopStatus.STARTED, "started_at": clock()}))


def _complete_stop(state: Round, action: CompleteStop, clock: Clock, config: TourneeConfig) -> Round:
    stop = _find_stop(state, action.stop_id, action.type)
    if stop is None:
        return state
    if stop.is_terminal:
        _logger.debug("complete_stop ignored: stop_id=%s already %s", stop.id, stop.status)
        return state
    status = StopStatus(action.result)
    update: dict[str, Any] = {
        "status": status,
        "completed_at": clock(),
        "failure_reason": action.reason,
    }
    return _with_stop(state, stop.model_copy(update=update))


def _set_stop_photo(state: Round, action: SetStopPhoto, clock: Clock, config: TourneeConfig) -> Round:
    stop = _find_stop(state, action.stop_id, action.type)
    if stop is None:
        return state
    return _with_stop(state, stop.model_copy(update={"photo": action.uri}))


def _reset_stop(state: Round, action: ResetStop, clock: Clock, config: TourneeConfig) -> Round:
    stop = _find_stop(state, action.stop_id, action.type)
    if stop is None:
        return state
    # started_at and failure_reason of the earlier attempt are kept.
    return _with_stop(state, stop.model_copy(update={"status": StopStatus.STARTED, "completed_at": None}))


# ---------------------------------------------------------------------------
# Parcels
# ---------------------------------------------------------------------------


def _collect_parcel(state: Round, action: CollectParcel, clock: Clock, config: TourneeConfig) -> Round:
    found = _find_parcel(state, action.stop_id, action.parcel_name, action.type)
    if found is None:
        return state
    stop, parcel = found
    # refusal_reason of an earlier refusal is kept.
    new_parcel = parcel.model_copy(
        update={
            "status": ParcelStatus.COLLECTED,
            "photo": action.photo,
            "analysis": action.analysis if action.analysis is not None else parcel.analysis,
        }
    )
    return _with_parcel(state, stop, new_parcel)


def _refuse_parcel(state: Round, action: RefuseParcel, clock: Clock, config: TourneeConfig) -> Round:
    found = _find_parcel(state, action.stop_id, action.parcel_name, action.type)
    if found is None:
        return state
    stop, parcel = found
    # photo and analysis of an earlier collection are kept.
    new_parcel = parcel.model_copy(update={"status": ParcelStatus.REFUSED, "refusal_reason": action.reason})
    return _with_parcel(state, stop, new_parcel)


def _set_parcel_analysis(state: Round, action: SetParcelAnalysis, clock: Clock, config: TourneeConfig) -> Round:
    found = _find_parcel(state, action.stop_id, action.parcel_name, action.type)
    if found is None:
        return state
    stop, parcel = found
    return _with_parcel(state, stop, parcel.model_copy(update={"analysis": action.analysis}))


# ---------------------------------------------------------------------------
# Unloading
# ---------------------------------------------------------------------------


def _unlock_unloading(state: Round, action: UnlockUnloading, clock: Clock, config: TourneeConfig) -> Round:
    # The "all stops terminal" gate is the caller's contract, see selectors.all_stops_terminal.
    if state.unloading.status != UnloadingStatus.LOCKED:
        return state
    unloading = state.unloading.model_copy(update={"status": UnloadingStatus.PENDING})
    return state.model_copy(update={"unloading": unloading})


def _start_unloading(state: Round, action: StartUnloading, clock: Clock, config: TourneeConfig) -> Round:
    unloading = state.unloading.model_copy(update={"status": UnloadingStatus.STARTED, "started_at": clock()})
    return state.model_copy(update={"unloading": unloading})


def _complete_unloading(state: Round, action: CompleteUnloading, clock: Clock, config: TourneeConfig) -> Round:
    unloading = state.unloading.model_copy(update={"status": UnloadingStatus.COMPLETED, "completed_at": clock()})
    return state.model_copy(update={"unloading": unloading})


def _scan_parcel_at_unloading(
    state: Round, action: ScanParcelAtUnloading, clock: Clock, config: TourneeConfig
) -> Round:
    found = _find_parcel(state, action.stop_id, action.parcel_name, action.type)
    if found is None:
        return state
    _, parcel = found
    if parcel.status != ParcelStatus.COLLECTED:
        _logger.debug("scan ignored: %r at stop_id=%s is %s", parcel.name, action.stop_id, parcel.status)
        return state
    key = scan_key(action.stop_id, action.parcel_name)
    if key in state.unloading.scanned_parcels:
        _logger.debug("scan ignored: %s already scanned", key)
        return state

    destination, average = route_parcel(parcel.analysis)
    scanned = ScannedParcel(
        parcel_name=parcel.name,
        stop_id=action.stop_id,
        destination=destination,
        average_score=average,
        scanned_at=clock(),
    )
    unloading = state.unloading.model_copy(
        update={"scanned_parcels": {**state.unloading.scanned_parcels, key: scanned}}
    )
    return state.model_copy(update={"unloading": unloading})


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

_HANDLERS: dict[type[Any], Callable[[Round, Any, Clock, TourneeConfig], Round]] = {
    StartRound: _start_round,
    StartStop: _start_stop,
    CompleteStop: _complete_stop,
    SetStopPhoto: _set_stop_photo,
    CollectParcel: _collect_parcel,
    RefuseParcel: _refuse_parcel,
    SetParcelAnalysis: _set_parcel_analysis,
    ResetStop: _reset_stop,
    SwapStops: _swap_stops,
    CompleteRound: _complete_round,
    Reset: _reset,
    UnlockUnloading: _unlock_unloading,
    StartUnloading: _start_unloading,
    ScanParcelAtUnloading: _scan_parcel_at_unloading,
    CompleteUnloading: _complete_unloading,
}


def reduce(
    state: Round,
    action: Action,
    *,
    clock: Clock = utcnow,
    config: TourneeConfig | None = None,
) -> Round:
    """Apply one action to *state* and return the resulting round.

    Parameters
    ----------
    state : Round
        Current round. Never modified.
    action : Action
        The transition to apply.
    clock : callable
        Source of the timestamps stamped by the transition.
    config : TourneeConfig or None
        Used by :class:`Reset` to rebuild the round. Defaults to ``TourneeConfig()``.

    Returns
    -------
    Round
        The new round, or *state* itself when the action does not apply.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        _logger.debug("Unknown action %r ignored", type(action).__name__)
        return state
    return handler(state, action, clock, config or TourneeConfig())
