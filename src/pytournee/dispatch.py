"""Named operations over a :class:`~pytournee.state.store.RoundStore`.

:class:`RoundDispatcher` gives callers a typed API instead of raw action
construction. It only checks the *shape* of its arguments (raising
:class:`~pytournee.exceptions.TourneeActionError`); business rules are the
reducer's concern.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import ValidationError

from pytournee.exceptions import TourneeActionError
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
from pytournee.models._base import TourneeBaseModel
from pytournee.models.analysis import ParcelAnalysis
from pytournee.models.definitions import StopDefinition
from pytournee.models.state import Round, StopStatus
from pytournee.state.store import RoundStore

A = TypeVar("A", bound=TourneeBaseModel)


def build_action(action_cls: type[A], **kwargs: Any) -> A:
    """Instantiate *action_cls*, turning validation errors into :class:`TourneeActionError`."""
    try:
        return action_cls(**kwargs)
    except ValidationError as exc:
        action_type = str(action_cls.model_fields["type"].default)
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors(include_url=False)
        )
        raise TourneeActionError(f"Invalid {action_type} arguments: {details}", action_type=action_type) from exc


class RoundDispatcher:
    """Typed entry points, one per action kind.

    Usage::

        store = RoundStore(DEFAULT_ROUND)
        rounds = RoundDispatcher(store)
        rounds.start_round()
        rounds.start_stop(1)
        rounds.collect_parcel(1, "Colis A-001", photo="file:///tmp/a.jpg")

    Every method returns the round after the action was applied.
    """

    def __init__(self, store: RoundStore) -> None:
        self._store = store

    @property
    def store(self) -> RoundStore:
        return self._store

    @property
    def state(self) -> Round:
        return self._store.state

    def dispatch(self, action: Action) -> Round:
        return self._store.apply(action)

    # ------------------------------------------------------------------
    # Round
    # ------------------------------------------------------------------

    def start_round(self) -> Round:
        return self.dispatch(StartRound())

    def complete_round(self) -> Round:
        return self.dispatch(CompleteRound())

    def reset(self, definitions: Sequence[StopDefinition] | None = None) -> Round:
        """Rebuild the round from *definitions*, or from the store's current static data."""
        if definitions is None:
            definitions = self._store.definitions
        return self.dispatch(build_action(Reset, definitions=tuple(definitions)))

    def swap_stops(self, stop_a: int, stop_b: int) -> Round:
        return self.dispatch(build_action(SwapStops, stop_a=stop_a, stop_b=stop_b))

    # ------------------------------------------------------------------
    # Stops
    # ------------------------------------------------------------------

    def start_stop(self, stop_id: int) -> Round:
        return self.dispatch(build_action(StartStop, stop_id=stop_id))

    def complete_stop(self, stop_id: int, result: str | StopStatus, reason: str | None = None) -> Round:
        """Finish a stop with ``"success"`` or ``"failed"``; ``reason`` is stored whatever the result."""
        if isinstance(result, StopStatus):
            result = result.value
        return self.dispatch(build_action(CompleteStop, stop_id=stop_id, result=result, reason=reason))

    def set_stop_photo(self, stop_id: int, uri: str) -> Round:
        return self.dispatch(build_action(SetStopPhoto, stop_id=stop_id, uri=uri))

    def reset_stop(self, stop_id: int) -> Round:
        return self.dispatch(build_action(ResetStop, stop_id=stop_id))

    # ------------------------------------------------------------------
    # Parcels
    # ------------------------------------------------------------------

    def collect_parcel(
        self,
        stop_id: int,
        parcel_name: str,
        photo: str,
        analysis: ParcelAnalysis | Mapping[str, Any] | None = None,
    ) -> Round:
        return self.dispatch(
            build_action(CollectParcel, stop_id=stop_id, parcel_name=parcel_name, photo=photo, analysis=analysis)
        )

    def refuse_parcel(self, stop_id: int, parcel_name: str, reason: str) -> Round:
        return self.dispatch(build_action(RefuseParcel, stop_id=stop_id, parcel_name=parcel_name, reason=reason))

    def set_parcel_analysis(
        self,
        stop_id: int,
        parcel_name: str,
        analysis: ParcelAnalysis | Mapping[str, Any],
    ) -> Round:
        return self.dispatch(
            build_action(SetParcelAnalysis, stop_id=stop_id, parcel_name=parcel_name, analysis=analysis)
        )

    # ------------------------------------------------------------------
    # Unloading
    # ------------------------------------------------------------------

    def unlock_unloading(self) -> Round:
        return self.dispatch(UnlockUnloading())

    def start_unloading(self) -> Round:
        return self.dispatch(StartUnloading())

    def scan_parcel_at_unloading(self, stop_id: int, parcel_name: str) -> Round:
        return self.dispatch(build_action(ScanParcelAtUnloading, stop_id=stop_id, parcel_name=parcel_name))

    def complete_unloading(self) -> Round:
        return self.dispatch(CompleteUnloading())
