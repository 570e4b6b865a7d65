"""Static round data: bundled demo round, JSON loading and precondition checks."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from pytournee.exceptions import RoundDataError
from pytournee.models.definitions import ParcelDefinition, StopDefinition

_DEFINITIONS_ADAPTER: TypeAdapter[list[StopDefinition]] = TypeAdapter(list[StopDefinition])


def _stop(stop_id: int, address: str, latitude: float, longitude: float, *parcels: str) -> StopDefinition:
    return StopDefinition(
        id=stop_id,
        address=address,
        latitude=latitude,
        longitude=longitude,
        parcels=tuple(ParcelDefinition(name=name) for name in parcels),
    )


DEFAULT_ROUND: tuple[StopDefinition, ...] = (
    _stop(1, "6 Place de la République", 48.9122, 2.3333, "Colis A-001", "Colis A-002"),
    _stop(2, "45 Rue Anselme", 48.9108, 2.3308, "Colis I-001", "Colis I-002"),
    _stop(3, "12 Rue Louis Blanc", 48.9088, 2.3318, "Colis J-001"),
    _stop(4, "124 Rue du Docteur Bauer", 48.9135, 2.3378, "Colis D-001", "Colis D-002"),
    _stop(5, "15 Boulevard Victor Hugo", 48.9145, 2.3298, "Colis E-001"),
    _stop(6, "2 Rue Simone Veil", 48.9125, 2.3316, "Colis H-001"),
    _stop(7, "30 Avenue Gabriel Péri", 48.9098, 2.3362, "Colis C-001", "Colis C-002", "Colis C-003"),
    _stop(8, "8 Rue Paul Lafargue", 48.9078, 2.3348, "Colis G-001", "Colis G-002", "Colis G-003"),
    _stop(9, "22 Rue des Entrepôts", 48.9048, 2.3405, "Colis F-001", "Colis F-002"),
    _stop(10, "85 Rue des Rosiers", 48.9015, 2.3385, "Colis B-001"),
)
"""Demo round used when no external data source is configured."""


def validate_round_definitions(definitions: Iterable[StopDefinition]) -> tuple[StopDefinition, ...]:
    """Check the builder precondition: unique stop ids, unique parcel names per stop.

    Raises :class:`RoundDataError` listing the duplicates.
    """
    checked = tuple(definitions)
    problems: list[str] = []

    duplicate_ids = sorted(stop_id for stop_id, count in Counter(d.id for d in checked).items() if count > 1)
    if duplicate_ids:
        problems.append(f"duplicate stop ids {duplicate_ids}")

    for definition in checked:
        names = Counter(p.name for p in definition.parcels)
        duplicate_names = sorted(name for name, count in names.items() if count > 1)
        if duplicate_names:
            problems.append(f"stop {definition.id}: duplicate parcel names {duplicate_names}")

    if problems:
        raise RoundDataError("Invalid round data: " + "; ".join(problems))
    return checked


def load_round_definitions(path: str | Path) -> tuple[StopDefinition, ...]:
    """Read a JSON array of stop definitions (camelCase or snake_case keys) and validate it."""
    source = Path(path)
    try:
        payload = source.read_bytes()
    except OSError as exc:
        raise RoundDataError(f"Cannot read round data from {source}: {exc}") from exc

    try:
        definitions = _DEFINITIONS_ADAPTER.validate_json(payload)
    except ValidationError as exc:
        raise RoundDataError(f"Invalid round data in {source}: {exc.error_count()} error(s)") from exc

    return validate_round_definitions(definitions)
