"""
Dependency injection for FastAPI routes.

Key principle: database sessions are per-request, never cached.
Only stateless or process-wide singletons (clock, id generator, the
in-memory store and the mutation lock guarding it) use lru_cache.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from typing import Generator

from fastapi import Depends, Header

from car_registry.adapters.in_memory_car_store import InMemoryCarStore
from car_registry.adapters.postgres_car_store import PostgresCarStore
from car_registry.adapters.system_clock import SystemClock
from car_registry.adapters.uuid_id_generator import UuidIdGenerator
from car_registry.domain.car import check_owner_length
from car_registry.domain.errors import UnauthorizedError
from car_registry.infra.config import STORAGE_POSTGRES, recommendation_limit, storage_backend
from car_registry.infra.db.session import get_session
from car_registry.ports.car_store import CarStore
from car_registry.ports.clock import Clock
from car_registry.ports.id_generator import IdGenerator
from car_registry.use_cases.car_service import CarService

CALLER_HEADER = "X-Caller-Id"


@lru_cache
def get_in_memory_store() -> InMemoryCarStore:
    """Process-wide store used when CAR_REGISTRY_STORAGE=memory."""
    return InMemoryCarStore()


@lru_cache
def get_clock() -> Clock:
    return SystemClock()


@lru_cache
def get_id_generator() -> IdGenerator:
    return UuidIdGenerator()


@lru_cache
def get_mutation_lock() -> threading.Lock:
    """One lock per process so concurrent requests serialize their writes."""
    return threading.Lock()


def get_car_store() -> Generator[CarStore, None, None]:
    """
    Provides the configured CarStore for a single request.

    For postgres storage the store wraps a per-request session; the
    underlying get_session() commits on success, rolls back on exception
    and always closes the session.

    Yields:
        CarStore: In-memory singleton or a session-bound PostgresCarStore
    """
    if storage_backend() == STORAGE_POSTGRES:
        with get_session() as session:
            yield PostgresCarStore(session=session)
    else:
        yield get_in_memory_store()


def get_car_service(store: CarStore = Depends(get_car_store)) -> CarService:
    """
    Factory function that returns a configured CarService.

    Args:
        store: Car store (injected by FastAPI via Depends(get_car_store))

    Returns:
        CarService: Service wired with the shared clock, id generator and lock
    """
    return CarService(
        store=store,
        clock=get_clock(),
        id_generator=get_id_generator(),
        lock=get_mutation_lock(),
        recommendation_limit=recommendation_limit(),
    )


def get_caller(x_caller_id: str | None = Header(default=None, alias=CALLER_HEADER)) -> str:
    """
    Resolve the caller identity from the X-Caller-Id header.

    Raises:
        UnauthorizedError: If the header is missing or blank
        ValidationError: If the header is longer than an owner may be
    """
    if x_caller_id is None or not x_caller_id.strip():
        raise UnauthorizedError(f"{CALLER_HEADER} header is required")
    caller = x_caller_id.strip()
    check_owner_length(caller, field=CALLER_HEADER)
    return caller
