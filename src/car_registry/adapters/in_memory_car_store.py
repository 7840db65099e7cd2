from __future__ import annotations

import threading
from bisect import bisect_left, insort

from car_registry.domain.car import Car
from car_registry.ports.car_store import CarStore


class InMemoryCarStore(CarStore):
    """
    Canonical contract implementation for tests and single-process runs.

    - Keeps records in a dict plus a sorted key list
    - values() returns cars in key order, not insertion order
    - insert() is an upsert; remove() of a missing key is a no-op
    - A lock guards the map so snapshots are never torn
    """

    def __init__(self, cars: list[Car] | None = None) -> None:
        self._cars: dict[str, Car] = {}
        self._keys: list[str] = []
        self._lock = threading.Lock()
        for car in cars or []:
            self.insert(car.id, car)

    def get(self, car_id: str) -> Car | None:
        with self._lock:
            return self._cars.get(car_id)

    def insert(self, car_id: str, car: Car) -> None:
        with self._lock:
            if car_id not in self._cars:
                insort(self._keys, car_id)
            self._cars[car_id] = car

    def remove(self, car_id: str) -> Car | None:
        with self._lock:
            car = self._cars.pop(car_id, None)
            if car is not None:
                del self._keys[bisect_left(self._keys, car_id)]
            return car

    def values(self) -> list[Car]:
        with self._lock:
            return [self._cars[key] for key in self._keys]

    def __len__(self) -> int:
        with self._lock:
            return len(self._cars)
