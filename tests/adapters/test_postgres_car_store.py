"""
Test suite for PostgresCarStore.

Runs the CarStore contract against an in-memory SQLite engine built from
the same ORM metadata, so queries, upserts and row mapping are exercised
without a PostgreSQL server.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator
from unittest.mock import Mock

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker

from car_registry.adapters.postgres_car_store import PostgresCarStore
from car_registry.domain.car import Car
from car_registry.infra.db.models.base import Base
from car_registry.infra.db.models.car import CarRow

CREATED = datetime(2026, 1, 1, 9, 30, tzinfo=timezone.utc)


def _car(car_id: str, **overrides: object) -> Car:
    car = Car(
        id=car_id,
        name="Model X",
        model="X",
        company_name="Tesla",
        image="x.png",
        cubic_capacity_of_engine=0,
        price=Decimal("80000.00"),
        top_speed=250,
        owner="owner-a",
        created_at=CREATED,
    )
    return replace(car, **overrides)


@pytest.fixture()
def session() -> Iterator[Session]:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, expire_on_commit=False)

    with factory() as session:
        yield session

    engine.dispose()


@pytest.fixture()
def store(session: Session) -> PostgresCarStore:
    return PostgresCarStore(session=session)


def test_get_missing_returns_none(store: PostgresCarStore) -> None:
    assert store.get("missing") is None


def test_insert_then_get_round_trips_fields(store: PostgresCarStore) -> None:
    car = _car("a", updated_at=datetime(2026, 2, 1, tzinfo=timezone.utc))

    store.insert(car.id, car)

    assert store.get("a") == car


def test_timestamps_come_back_utc_aware(store: PostgresCarStore, session: Session) -> None:
    store.insert("a", _car("a"))
    session.expire_all()  # force a reload from the database

    fetched = store.get("a")

    assert fetched is not None
    assert fetched.created_at.tzinfo is not None
    assert fetched.created_at == CREATED
    assert fetched.updated_at is None
    assert fetched == _car("a")


def test_insert_is_an_upsert(store: PostgresCarStore, session: Session) -> None:
    store.insert("a", _car("a"))

    store.insert("a", _car("a", name="Model X Plaid", price=Decimal("95000.00")))

    rows = session.execute(select(CarRow)).scalars().all()
    assert len(rows) == 1
    fetched = store.get("a")
    assert fetched is not None
    assert fetched.name == "Model X Plaid"
    assert fetched.price == Decimal("95000.00")


def test_remove_returns_prior_value(store: PostgresCarStore) -> None:
    car = _car("a")
    store.insert("a", car)

    assert store.remove("a") == car
    assert store.get("a") is None


def test_remove_missing_returns_none(store: PostgresCarStore) -> None:
    assert store.remove("missing") is None


def test_values_ordered_by_key(store: PostgresCarStore) -> None:
    for car_id in ["c", "a", "b"]:
        store.insert(car_id, _car(car_id))

    assert [car.id for car in store.values()] == ["a", "b", "c"]


def test_values_on_empty_table(store: PostgresCarStore) -> None:
    assert store.values() == []


def test_get_for_update_returns_stored_car(store: PostgresCarStore) -> None:
    car = _car("car-0001")
    store.insert(car.id, car)

    assert store.get_for_update(car.id) == car
    assert store.get_for_update("car-9999") is None


def test_get_for_update_locks_the_row() -> None:
    session = Mock(spec=Session)
    session.get.return_value = None

    PostgresCarStore(session=session).get_for_update("car-0001")

    session.get.assert_called_once_with(
        CarRow, "car-0001", with_for_update=True, populate_existing=True
    )
