"""
Contract tests for InMemoryCarStore.

- get/insert/remove/values semantics
- values() is ordered by key, not by insertion
- values() returns a detached snapshot
- concurrent writers never leave a torn or unsorted snapshot
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from car_registry.adapters.in_memory_car_store import InMemoryCarStore
from car_registry.domain.car import Car

CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _car(car_id: str, name: str = "Civic") -> Car:
    return Car(
        id=car_id,
        name=name,
        model="Civic",
        company_name="Honda",
        image="civic.png",
        cubic_capacity_of_engine=1500,
        price=Decimal("24000"),
        top_speed=200,
        owner="owner-a",
        created_at=CREATED,
    )


@pytest.fixture()
def store() -> InMemoryCarStore:
    return InMemoryCarStore()


def test_get_missing_returns_none(store: InMemoryCarStore) -> None:
    assert store.get("nope") is None


def test_insert_then_get(store: InMemoryCarStore) -> None:
    car = _car("b")
    store.insert(car.id, car)

    assert store.get("b") == car


def test_insert_replaces_existing(store: InMemoryCarStore) -> None:
    store.insert("a", _car("a"))
    replacement = replace(_car("a"), name="Civic Type R")

    store.insert("a", replacement)

    assert store.get("a") == replacement
    assert len(store) == 1
    assert store.values() == [replacement]


def test_remove_returns_prior_value(store: InMemoryCarStore) -> None:
    car = _car("a")
    store.insert("a", car)

    assert store.remove("a") == car
    assert store.get("a") is None
    assert store.values() == []


def test_remove_missing_is_noop(store: InMemoryCarStore) -> None:
    store.insert("a", _car("a"))

    assert store.remove("zzz") is None
    assert len(store) == 1


def test_values_in_key_order_not_insertion_order(store: InMemoryCarStore) -> None:
    for car_id in ["m", "c", "x", "a"]:
        store.insert(car_id, _car(car_id))

    assert [car.id for car in store.values()] == ["a", "c", "m", "x"]


def test_values_order_survives_removal(store: InMemoryCarStore) -> None:
    for car_id in ["d", "b", "a", "c"]:
        store.insert(car_id, _car(car_id))

    store.remove("b")

    assert [car.id for car in store.values()] == ["a", "c", "d"]


def test_values_is_a_detached_snapshot(store: InMemoryCarStore) -> None:
    store.insert("a", _car("a"))
    snapshot = store.values()

    store.insert("b", _car("b"))
    store.remove("a")

    assert [car.id for car in snapshot] == ["a"]
    # Restartable: iterating twice yields the same sequence
    assert list(snapshot) == list(snapshot)


def test_empty_store_values(store: InMemoryCarStore) -> None:
    assert store.values() == []


def test_constructor_seeds_cars() -> None:
    store = InMemoryCarStore([_car("b"), _car("a")])

    assert [car.id for car in store.values()] == ["a", "b"]


def test_get_for_update_defaults_to_get(store: InMemoryCarStore) -> None:
    store.insert("a", _car("a"))

    assert store.get_for_update("a") == _car("a")
    assert store.get_for_update("missing") is None


# ==============================================================================
# Concurrency
# ==============================================================================


def test_concurrent_inserts_keep_every_key_in_order(store: InMemoryCarStore) -> None:
    ids = [f"car-{n:03d}" for n in range(200)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda car_id: store.insert(car_id, _car(car_id)), reversed(ids)))

    assert len(store) == 200
    assert [car.id for car in store.values()] == ids


def test_snapshots_taken_during_writes_are_consistent(store: InMemoryCarStore) -> None:
    finished = threading.Event()
    snapshots: list[list[Car]] = []

    def write() -> None:
        for n in range(300):
            car_id = f"car-{n:03d}"
            store.insert(car_id, _car(car_id))
            if n % 3 == 0:
                store.remove(car_id)
        finished.set()

    writer = threading.Thread(target=write)
    writer.start()
    while not finished.is_set():
        snapshots.append(store.values())
    writer.join()

    for snapshot in snapshots:
        ids = [car.id for car in snapshot]
        assert ids == sorted(set(ids))
    assert len(store) == 200
