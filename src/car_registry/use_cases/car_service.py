"""Car registry operations."""

from __future__ import annotations

import logging
import threading
from decimal import Decimal

from car_registry.domain.car import (
    Car,
    CarHistoryEntry,
    CarPayload,
    CarPreferences,
    check_owner_length,
    parse_price,
)
from car_registry.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from car_registry.infra.config import DEFAULT_RECOMMENDATION_LIMIT
from car_registry.ports.car_store import CarStore
from car_registry.ports.clock import Clock
from car_registry.ports.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class CarService:
    """
    Operation layer over a CarStore.

    Responsibilities:
    - Validate ids and payloads before touching the store
    - Derive id, owner and timestamps; callers never supply them
    - Enforce the ownership check on delete
    - Answer every non-id query with a full scan over store.values()

    Mutations run their read-modify-write sequence under `lock`. Share one
    lock between every service that wraps the same store; reads take a
    snapshot and do not lock. The lock only covers one process, so
    mutating reads also go through store.get_for_update(), which a shared
    database store turns into a row lock.
    """

    def __init__(
        self,
        store: CarStore,
        clock: Clock,
        id_generator: IdGenerator,
        lock: threading.Lock | None = None,
        recommendation_limit: int = DEFAULT_RECOMMENDATION_LIMIT,
    ) -> None:
        """
        Initialize service with its collaborators.

        Args:
            store: Ordered id -> Car mapping
            clock: Source of created_at/updated_at
            id_generator: Source of fresh car ids
            lock: Mutation lock shared across services on the same store
            recommendation_limit: How many cars recommend() returns
        """
        self._store = store
        self._clock = clock
        self._id_generator = id_generator
        self._lock = lock if lock is not None else threading.Lock()
        self._recommendation_limit = recommendation_limit

    # ==========================================================================
    # CRUD
    # ==========================================================================

    def create_car(self, payload: CarPayload, caller: str) -> Car:
        """
        Create a car owned by caller.

        Raises:
            ValidationError: If any payload field is missing or invalid, or caller is too long
            UnauthorizedError: If caller is empty
            ConflictError: If the generated id is already taken
        """
        payload.validate()
        _require_caller(caller)
        check_owner_length(caller)

        with self._lock:
            car_id = self._id_generator.new_id()
            if self._store.get(car_id) is not None:
                raise ConflictError(
                    f"Generated car id '{car_id}' is already in use", car_id=car_id
                )

            car = Car(
                id=car_id,
                name=payload.name,
                model=payload.model,
                company_name=payload.company_name,
                image=payload.image,
                cubic_capacity_of_engine=payload.cubic_capacity_of_engine,
                price=payload.price,
                top_speed=payload.top_speed,
                owner=caller,
                created_at=self._clock.now(),
                updated_at=None,
            )
            self._store.insert(car.id, car)

        logger.info("Car created", extra={"car_id": car.id, "owner": car.owner})
        return car

    def get_car_by_id(self, car_id: str) -> Car:
        """
        Raises:
            ValidationError: If car_id is empty
            NotFoundError: If no car has this id
        """
        _require_id(car_id)
        return self._get_existing(car_id)

    def get_car_by_name(self, name: str) -> Car:
        """
        First car whose name matches case-insensitively, in key order.

        Names are not unique; the first match wins.

        Raises:
            NotFoundError: If no car has this name
        """
        wanted = name.lower()
        for car in self._store.values():
            if car.name.lower() == wanted:
                return car
        raise NotFoundError(resource="Car", identifier=name)

    def list_cars(self) -> list[Car]:
        return self._store.values()

    def update_car(self, car_id: str, payload: CarPayload) -> Car:
        """
        Overwrite every payload field of an existing car.

        id, owner and created_at are carried over; updated_at is set to now.

        Raises:
            ValidationError: If car_id is empty or the payload is invalid
            NotFoundError: If no car has this id
        """
        _require_id(car_id)
        payload.validate()

        with self._lock:
            existing = self._get_existing(car_id, for_update=True)
            updated = Car(
                id=existing.id,
                name=payload.name,
                model=payload.model,
                company_name=payload.company_name,
                image=payload.image,
                cubic_capacity_of_engine=payload.cubic_capacity_of_engine,
                price=payload.price,
                top_speed=payload.top_speed,
                owner=existing.owner,
                created_at=existing.created_at,
                updated_at=self._clock.now(),
            )
            self._store.insert(updated.id, updated)

        logger.info("Car updated", extra={"car_id": car_id})
        return updated

    def delete_car(self, car_id: str, caller: str) -> Car:
        """
        Remove a car. Only its owner may do this.

        Returns:
            The car as it was immediately before removal

        Raises:
            ValidationError: If car_id is empty
            UnauthorizedError: If caller is empty
            NotFoundError: If no car has this id
            AuthorizationError: If caller is not the owner
        """
        _require_id(car_id)
        _require_caller(caller)

        with self._lock:
            existing = self._get_existing(car_id, for_update=True)
            if existing.owner != caller:
                logger.warning(
                    "Delete rejected for non-owner",
                    extra={"car_id": car_id, "caller": caller},
                )
                raise AuthorizationError(
                    f"Caller '{caller}' does not have the right to delete car '{car_id}'",
                    car_id=car_id,
                )
            self._store.remove(car_id)

        logger.info("Car deleted", extra={"car_id": car_id, "owner": caller})
        return existing

    def update_owner(self, car_id: str, new_owner: str) -> Car:
        """
        Hand a car over to new_owner.

        Raises:
            ValidationError: If car_id or new_owner is empty or new_owner is too long
            NotFoundError: If no car has this id
        """
        _require_id(car_id)
        _require_value("owner", new_owner)
        check_owner_length(new_owner)

        with self._lock:
            existing = self._get_existing(car_id, for_update=True)
            updated = Car(
                id=existing.id,
                name=existing.name,
                model=existing.model,
                company_name=existing.company_name,
                image=existing.image,
                cubic_capacity_of_engine=existing.cubic_capacity_of_engine,
                price=existing.price,
                top_speed=existing.top_speed,
                owner=new_owner,
                created_at=existing.created_at,
                updated_at=self._clock.now(),
            )
            self._store.insert(updated.id, updated)

        logger.info(
            "Car owner changed",
            extra={"car_id": car_id, "previous_owner": existing.owner, "owner": new_owner},
        )
        return updated

    def update_image(self, car_id: str, new_image: str) -> Car:
        """
        Raises:
            ValidationError: If car_id or new_image is empty
            NotFoundError: If no car has this id
        """
        _require_id(car_id)
        _require_value("image", new_image)

        with self._lock:
            existing = self._get_existing(car_id, for_update=True)
            updated = Car(
                id=existing.id,
                name=existing.name,
                model=existing.model,
                company_name=existing.company_name,
                image=new_image,
                cubic_capacity_of_engine=existing.cubic_capacity_of_engine,
                price=existing.price,
                top_speed=existing.top_speed,
                owner=existing.owner,
                created_at=existing.created_at,
                updated_at=self._clock.now(),
            )
            self._store.insert(updated.id, updated)

        logger.info("Car image changed", extra={"car_id": car_id})
        return updated

    # ==========================================================================
    # Derived queries (full scans, empty results are not errors)
    # ==========================================================================

    def search_by_company_name(self, company_name: str) -> list[Car]:
        wanted = company_name.lower()
        return [car for car in self._store.values() if car.company_name.lower() == wanted]

    def search_by_model(self, model: str) -> list[Car]:
        wanted = model.lower()
        return [car for car in self._store.values() if car.model.lower() == wanted]

    def get_cars_by_owner(self, owner: str) -> list[Car]:
        return [car for car in self._store.values() if car.owner == owner]

    def filter_by_price_range(
        self, min_price: str | int | Decimal, max_price: str | int | Decimal
    ) -> list[Car]:
        """
        Cars priced within [min_price, max_price], inclusive.

        An inverted range matches nothing and is not an error.

        Raises:
            ValidationError: If either bound is not a number
        """
        low = parse_price(min_price, field="min_price")
        high = parse_price(max_price, field="max_price")
        return [car for car in self._store.values() if low <= car.price <= high]

    def get_car_by_price(self, price: str | int | Decimal) -> Car:
        """
        First car priced exactly at price, in key order.

        Raises:
            ValidationError: If price is not a number
            NotFoundError: If no car has this price
        """
        wanted = parse_price(price)
        for car in self._store.values():
            if car.price == wanted:
                return car
        raise NotFoundError(resource="Car", identifier=str(price))

    def get_newest_car(self) -> Car:
        cars = self._store.values()
        if not cars:
            raise NotFoundError(resource="Car")
        # max() keeps the first of equal keys, so ties go to key order
        return max(cars, key=lambda car: car.created_at)

    def get_oldest_car(self) -> Car:
        cars = self._store.values()
        if not cars:
            raise NotFoundError(resource="Car")
        return min(cars, key=lambda car: car.created_at)

    def recommend(self, preferences: CarPreferences) -> list[Car]:
        """
        Suggest cars for a buyer.

        Placeholder policy: the first N cars in key order, whatever the
        preferences say. A scoring function against the preference fields
        can replace this without touching the rest of the service.
        """
        return self._store.values()[: self._recommendation_limit]

    def get_history(self, car_id: str) -> list[CarHistoryEntry]:
        """
        Minimal audit view of a car. Prior versions are not retained.

        Raises:
            ValidationError: If car_id is empty
            NotFoundError: If no car has this id
        """
        _require_id(car_id)
        car = self._get_existing(car_id)
        return [
            CarHistoryEntry(owner=car.owner, created_at=car.created_at, updated_at=car.updated_at)
        ]

    def _get_existing(self, car_id: str, for_update: bool = False) -> Car:
        car = self._store.get_for_update(car_id) if for_update else self._store.get(car_id)
        if car is None:
            raise NotFoundError(resource="Car", identifier=car_id)
        return car


def _require_id(car_id: str) -> None:
    _require_value("car_id", car_id)


def _require_value(field: str, value: str) -> None:
    if not value or not value.strip():
        raise ValidationError.for_field(field, "Must not be empty", "REQUIRED")


def _require_caller(caller: str) -> None:
    if not caller or not caller.strip():
        raise UnauthorizedError("Caller identity is required")
