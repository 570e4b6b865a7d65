"""Round state tree: Round → Stops → Parcels, plus the Unloading stage.

Records are frozen; the reducer in :mod:`pytournee.state.reducer` is the only
place that builds modified copies of them.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from pytournee._constants import DEFAULT_SCORE, RECYCLING_THRESHOLD
from pytournee.models._base import TourneeBaseModel
from pytournee.models.analysis import ParcelAnalysis


class RoundStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class StopStatus(StrEnum):
    PENDING = "pending"
    STARTED = "started"
    SUCCESS = "success"
    FAILED = "failed"


class ParcelStatus(StrEnum):
    PENDING = "pending"
    COLLECTED = "collected"
    REFUSED = "refused"


class UnloadingStatus(StrEnum):
    LOCKED = "locked"
    PENDING = "pending"
    STARTED = "started"
    COMPLETED = "completed"


class Destination(StrEnum):
    BIN = "bin"
    RECYCLING = "recycling"


TERMINAL_STOP_STATUSES: frozenset[StopStatus] = frozenset({StopStatus.SUCCESS, StopStatus.FAILED})
TERMINAL_PARCEL_STATUSES: frozenset[ParcelStatus] = frozenset({ParcelStatus.COLLECTED, ParcelStatus.REFUSED})


def route_parcel(analysis: ParcelAnalysis | None) -> tuple[Destination, float]:
    """Return the unloading destination of a parcel and the average that produced it.

    ``average = (recycling_score + condition_score) / 2`` with each missing
    score counted as 5. Averages of 5 or more go to recycling.
    """
    recycling = DEFAULT_SCORE
    condition = DEFAULT_SCORE
    if analysis is not None:
        if analysis.recycling_score is not None:
            recycling = analysis.recycling_score
        if analysis.condition_score is not None:
            condition = analysis.condition_score
    average = (recycling + condition) / 2
    destination = Destination.RECYCLING if average >= RECYCLING_THRESHOLD else Destination.BIN
    return destination, average


class Parcel(TourneeBaseModel):
    """A parcel to collect at a stop.

    ``photo`` and ``analysis`` are set when the parcel is collected;
    ``refusal_reason`` when it is refused. Switching a parcel from one
    outcome to the other does not clear the fields of the previous one.
    """

    name: str
    type: str | None = None
    brand: str | None = None
    model: str | None = None
    weight: str | None = None
    category: str | None = None

    status: ParcelStatus = ParcelStatus.PENDING
    photo: str | None = None
    analysis: ParcelAnalysis | None = None
    refusal_reason: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_PARCEL_STATUSES


class Stop(TourneeBaseModel):
    """A stop of the round, with its parcels keyed by name.

    ``parcel_order`` is always a permutation of ``parcels``' keys. ``parcels`` is
    shared between successive states; treat it as read-only.
    """

    id: int
    address: str
    latitude: float
    longitude: float
    client_name: str | None = None
    phone: str | None = None
    notes: str | None = None
    time_window: str | None = None
    city: str | None = None
    mission_type: str | None = None
    mission_ref: str | None = None
    mission_partner: str | None = None
    is_unloading: bool = False
    confirmation_code: str | None = None

    status: StopStatus = StopStatus.PENDING
    started_at: datetime | None = None
    completed_at: datetime | None = None
    failure_reason: str | None = None
    photo: str | None = None

    parcels: dict[str, Parcel] = Field(default_factory=dict)
    parcel_order: tuple[str, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STOP_STATUSES


class ScannedParcel(TourneeBaseModel):
    """A collected parcel scanned at the depot and routed to its destination."""

    parcel_name: str
    stop_id: int
    destination: Destination
    average_score: float
    scanned_at: datetime


class Unloading(TourneeBaseModel):
    """Depot-side sorting stage that follows the round.

    ``scanned_parcels`` is keyed by ``"{stop_id}-{parcel_name}"`` and is read-only
    for consumers.
    """

    status: UnloadingStatus = UnloadingStatus.LOCKED
    address: str
    city: str | None = None
    time_window: str | None = None
    notes: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    scanned_parcels: dict[str, ScannedParcel] = Field(default_factory=dict)


class Round(TourneeBaseModel):
    """The round (tournée): its stops keyed by id and their traversal order.

    ``order`` is always a permutation of ``stops``' keys. Only the reducer
    changes a round, by building new dicts; consumers must not mutate
    ``stops`` (or any nested map) in place, since unchanged maps are shared
    with earlier states.
    """

    id: str
    status: RoundStatus = RoundStatus.PENDING
    started_at: datetime | None = None
    completed_at: datetime | None = None
    stops: dict[int, Stop] = Field(default_factory=dict)
    order: tuple[int, ...] = ()
    unloading: Unloading
