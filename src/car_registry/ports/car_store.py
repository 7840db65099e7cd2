from __future__ import annotations

from abc import ABC, abstractmethod

from car_registry.domain.car import Car


class CarStore(ABC):
    """
    Port for the authoritative id -> Car mapping.

    Implementations keep records ordered by key and never raise domain
    errors: absence is reported as None, not as an exception. There are no
    secondary indexes; every non-id lookup is a scan over values().

    Contract (Preconditions):
        - car_id is non-empty (validated by the caller, CarService)
        - insert() receives a car whose id equals car_id
    """

    @abstractmethod
    def get(self, car_id: str) -> Car | None:
        """Return the car stored under car_id, or None."""
        ...

    def get_for_update(self, car_id: str) -> Car | None:
        """
        Like get(), for a read that is about to be written back.

        Stores shared between processes lock the record until the caller
        finishes its unit of work; the default is a plain get().
        """
        return self.get(car_id)

    @abstractmethod
    def insert(self, car_id: str, car: Car) -> None:
        """Insert car under car_id, replacing any existing record (upsert)."""
        ...

    @abstractmethod
    def remove(self, car_id: str) -> Car | None:
        """Remove and return the car stored under car_id, or None if absent."""
        ...

    @abstractmethod
    def values(self) -> list[Car]:
        """
        Snapshot of all present cars in key order.

        The returned list is detached from the store: later mutations do
        not change it, and it may be iterated any number of times.
        """
        ...
