from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from pytournee.config import TourneeConfig
from pytournee.dispatch import RoundDispatcher
from pytournee.models.definitions import ParcelDefinition, StopDefinition
from pytournee.state.store import RoundStore

START = datetime(2026, 1, 1, 8, 0, tzinfo=UTC)


class TickingClock:
    """Deterministic clock: each call returns a time one second after the previous one."""

    def __init__(self, start: datetime = START) -> None:
        self._next = start

    def __call__(self) -> datetime:
        value = self._next
        self._next += timedelta(seconds=1)
        return value


def make_definitions() -> tuple[StopDefinition, ...]:
    return (
        StopDefinition(
            id=1,
            address="6 Place de la République",
            latitude=48.9122,
            longitude=2.3333,
            client_name="Marie Curie",
            phone="06 12 34 56 78",
            parcels=(ParcelDefinition(name="Lave-linge 1", brand="Whirlpool"), ParcelDefinition(name="Micro-ondes")),
        ),
        StopDefinition(
            id=2,
            address="45 Rue Anselme",
            latitude=48.9108,
            longitude=2.3308,
            parcels=(ParcelDefinition(name="Frigo"),),
        ),
        StopDefinition(
            id=3,
            address="12 Rue Louis Blanc",
            latitude=48.9088,
            longitude=2.3318,
            parcels=(ParcelDefinition(name="Washing Machine 1"),),
        ),
    )


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def definitions() -> tuple[StopDefinition, ...]:
    return make_definitions()


@pytest.fixture
def store(definitions: tuple[StopDefinition, ...], clock: TickingClock) -> RoundStore:
    return RoundStore(definitions, config=TourneeConfig(), clock=clock)


@pytest.fixture
def dispatcher(store: RoundStore) -> RoundDispatcher:
    return RoundDispatcher(store)
