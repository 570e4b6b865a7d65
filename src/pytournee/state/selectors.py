"""Read-only projections over a round.

Plain functions recomputed on demand; none of them modifies the round.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal

from pytournee._constants import QR_SEPARATOR, scan_key
from pytournee.models.state import Parcel, ParcelStatus, Round, Stop, StopStatus


@dataclass(frozen=True, slots=True)
class CollectedParcel:
    """A collected parcel together with the stop it was collected at."""

    stop_id: int
    parcel_name: str
    parcel: Parcel


def _percent(done: int, total: int) -> int:
    if total == 0:
        return 0
    # Half-up rounding: 2.5 -> 3.
    return math.floor(100 * done / total + 0.5)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_stop(state: Round, stop_id: int) -> Stop | None:
    return state.stops.get(stop_id)


def get_parcel(state: Round, stop_id: int, parcel_name: str) -> Parcel | None:
    stop = state.stops.get(stop_id)
    if stop is None:
        return None
    return stop.parcels.get(parcel_name)


def ordered_stops(state: Round) -> list[Stop]:
    """Stops in traversal order (swaps included); ids without a stop are dropped."""
    return [state.stops[stop_id] for stop_id in state.order if stop_id in state.stops]


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------


def round_progress_percent(state: Round) -> int:
    """Share of stops in a terminal status, as a rounded percentage."""
    stops = ordered_stops(state)
    done = sum(1 for stop in stops if stop.is_terminal)
    return _percent(done, len(state.order))


def stop_progress_percent(state: Round, stop_id: int) -> int:
    """Share of a stop's parcels that were collected or refused; 0 for an unknown stop."""
    stop = state.stops.get(stop_id)
    if stop is None:
        return 0
    done = sum(1 for name in stop.parcel_order if name in stop.parcels and stop.parcels[name].is_terminal)
    return _percent(done, len(stop.parcel_order))


def legacy_results_map(state: Round) -> dict[int, Literal["success", "fail"]]:
    """Map stop id to ``"success"``/``"fail"`` for finished stops only (map markers)."""
    results: dict[int, Literal["success", "fail"]] = {}
    for stop_id, stop in state.stops.items():
        if stop.status == StopStatus.SUCCESS:
            results[stop_id] = "success"
        elif stop.status == StopStatus.FAILED:
            results[stop_id] = "fail"
    return results


def all_stops_terminal(state: Round) -> bool:
    """Whether every stop is ``success`` or ``failed``.

    This is the gate callers check before dispatching ``UnlockUnloading``;
    the reducer does not check it itself. Vacuously true for an empty round.
    """
    return all(stop.is_terminal for stop in state.stops.values())


# ---------------------------------------------------------------------------
# Unloading
# ---------------------------------------------------------------------------


def all_collected_parcels(state: Round) -> list[CollectedParcel]:
    """Every collected parcel, in stop order then parcel order."""
    collected: list[CollectedParcel] = []
    for stop in ordered_stops(state):
        for name in stop.parcel_order:
            parcel = stop.parcels.get(name)
            if parcel is not None and parcel.status == ParcelStatus.COLLECTED:
                collected.append(CollectedParcel(stop_id=stop.id, parcel_name=name, parcel=parcel))
    return collected


def unloading_scanned_count(state: Round) -> int:
    return len(state.unloading.scanned_parcels)


def is_parcel_scanned(state: Round, stop_id: int, parcel_name: str) -> bool:
    return scan_key(stop_id, parcel_name) in state.unloading.scanned_parcels


def unloading_progress_percent(state: Round) -> int:
    """Scanned parcels over collected parcels; 0 when nothing was collected."""
    return _percent(unloading_scanned_count(state), len(all_collected_parcels(state)))


def all_parcels_scanned(state: Round) -> bool:
    collected = all_collected_parcels(state)
    if not collected:
        return False
    return all(is_parcel_scanned(state, item.stop_id, item.parcel_name) for item in collected)


def resolve_parcel_from_qr(state: Round, code: str) -> CollectedParcel | None:
    """Resolve a QR payload ``"{stop_id}:{parcel_name}"`` to a collected parcel.

    Only the first colon separates the two parts, so parcel names may contain
    colons. The stop part must be an integer literal, so ``""`` and ``"3.0"``
    do not match. Returns ``None`` (not found) when the payload has no colon,
    the stop id is not an integer, the stop or parcel does not exist, or the
    parcel has not been collected.
    """
    stop_part, separator, parcel_name = code.partition(QR_SEPARATOR)
    if not separator:
        return None
    try:
        stop_id = int(stop_part.strip())
    except ValueError:
        return None

    parcel = get_parcel(state, stop_id, parcel_name)
    if parcel is None or parcel.status != ParcelStatus.COLLECTED:
        return None
    return CollectedParcel(stop_id=stop_id, parcel_name=parcel_name, parcel=parcel)


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def round_summary(state: Round) -> dict[str, Any]:
    """JSON-ready dump of the whole round (camelCase keys), e.g. for an end-of-round upload."""
    return state.model_dump(mode="json", by_alias=True)
