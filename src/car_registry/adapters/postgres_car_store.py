"""PostgreSQL implementation of CarStore."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from car_registry.domain.car import Car
from car_registry.infra.db.models.car import CarRow
from car_registry.ports.car_store import CarStore


class PostgresCarStore(CarStore):
    """
    Durable CarStore backed by the `cars` table.

    - Uses SQLAlchemy ORM for database access
    - insert() is an upsert via Session.merge()
    - values() orders by primary key, matching the in-memory key order
    - Converts CarRow (infrastructure) to Car (domain)

    Commit/rollback is owned by whoever opened the session (one session
    per HTTP request); the store only flushes.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize store with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def get(self, car_id: str) -> Car | None:
        row = self._session.get(CarRow, car_id)
        return self._to_domain(row) if row else None

    def get_for_update(self, car_id: str) -> Car | None:
        # SELECT ... FOR UPDATE: the row stays locked until the request commits
        row = self._session.get(CarRow, car_id, with_for_update=True, populate_existing=True)
        return self._to_domain(row) if row else None

    def insert(self, car_id: str, car: Car) -> None:
        self._session.merge(self._to_row(car_id, car))
        self._session.flush()

    def remove(self, car_id: str) -> Car | None:
        row = self._session.get(CarRow, car_id)
        if row is None:
            return None

        car = self._to_domain(row)
        self._session.delete(row)
        self._session.flush()
        return car

    def values(self) -> list[Car]:
        rows = self._session.execute(select(CarRow).order_by(CarRow.id)).scalars().all()
        return [self._to_domain(row) for row in rows]

    def _to_row(self, car_id: str, car: Car) -> CarRow:
        return CarRow(
            id=car_id,
            name=car.name,
            model=car.model,
            company_name=car.company_name,
            image=car.image,
            cubic_capacity_of_engine=car.cubic_capacity_of_engine,
            price=car.price,
            top_speed=car.top_speed,
            owner=car.owner,
            created_at=car.created_at,
            updated_at=car.updated_at,
        )

    def _to_domain(self, row: CarRow) -> Car:
        """
        Convert database model (CarRow) to domain entity (Car).

        Args:
            row: SQLAlchemy CarRow model

        Returns:
            Car domain entity with UTC-aware timestamps
        """
        return Car(
            id=row.id,
            name=row.name,
            model=row.model,
            company_name=row.company_name,
            image=row.image,
            cubic_capacity_of_engine=row.cubic_capacity_of_engine,
            price=row.price,  # Already Decimal from NUMERIC column
            top_speed=row.top_speed,
            owner=row.owner,
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at) if row.updated_at else None,
        )


def _as_utc(value: datetime) -> datetime:
    # Drivers without timezone support hand back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
