"""Build the initial round state from static stop definitions.

Precondition: stop ids are unique within the definitions and parcel names
are unique within each stop. The builder trusts this; duplicates give an
undefined (but non-raising) result. Use
:func:`pytournee.data.validate_round_definitions` to check it up front.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pytournee.config import TourneeConfig
from pytournee.models.definitions import ParcelDefinition, StopDefinition
from pytournee.models.state import Parcel, Round, RoundStatus, Stop, StopStatus, Unloading

_STOP_STATIC_EXCLUDE = {"parcels", "initial_status"}


def build_parcel(definition: ParcelDefinition) -> Parcel:
    return Parcel(**definition.model_dump())


def build_stop(definition: StopDefinition) -> Stop:
    parcels: dict[str, Parcel] = {}
    parcel_order: list[str] = []
    for parcel_definition in definition.parcels:
        parcels[parcel_definition.name] = build_parcel(parcel_definition)
        parcel_order.append(parcel_definition.name)

    return Stop(
        **definition.model_dump(exclude=_STOP_STATIC_EXCLUDE),
        status=definition.initial_status or StopStatus.PENDING,
        parcels=parcels,
        parcel_order=tuple(parcel_order),
    )


def build_unloading(definitions: Iterable[StopDefinition], config: TourneeConfig) -> Unloading:
    """Locked unloading stage, described by the first flagged stop or the config fallback."""
    depot = next((d for d in definitions if d.is_unloading), None)
    if depot is None:
        return Unloading(
            address=config.depot_address,
            city=config.depot_city,
            time_window=config.depot_time_window,
            notes=config.depot_notes,
        )
    return Unloading(
        address=depot.address,
        city=depot.city,
        time_window=depot.time_window or config.depot_time_window,
        notes=depot.notes,
    )


def build_round(definitions: Sequence[StopDefinition], config: TourneeConfig | None = None) -> Round:
    """Build a pending round whose ``order`` follows the definitions' order."""
    config = config or TourneeConfig()
    stops: dict[int, Stop] = {}
    order: list[int] = []
    for definition in definitions:
        stops[definition.id] = build_stop(definition)
        order.append(definition.id)

    return Round(
        id=config.round_id,
        status=RoundStatus.PENDING,
        stops=stops,
        order=tuple(order),
        unloading=build_unloading(definitions, config),
    )
