from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from car_registry.domain.car import CarPayload
from car_registry.ports.clock import Clock
from car_registry.ports.id_generator import IdGenerator

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class StepClock(Clock):
    """Deterministic clock: T0, T0+1s, T0+2s, ..."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(seconds=1)) -> None:
        self._next = start
        self._step = step

    def now(self) -> datetime:
        current = self._next
        self._next = current + self._step
        return current


class SequentialIdGenerator(IdGenerator):
    """Deterministic ids: car-0001, car-0002, ..."""

    def __init__(self, prefix: str = "car-") -> None:
        self._prefix = prefix
        self._counter = 0

    def new_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}{self._counter:04d}"


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture()
def model_x_payload() -> CarPayload:
    return CarPayload(
        name="Model X",
        model="X",
        company_name="Tesla",
        image="x.png",
        cubic_capacity_of_engine=0,
        price=Decimal("80000"),
        top_speed=250,
    )
