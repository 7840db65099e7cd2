from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from car_registry.infra.config import database_url

# Lazy initialization - only create engine/session when postgres storage is used
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Get or create the process-wide database engine.

    The pool is sized for the FastAPI thread pool: every sync request
    holds at most one connection for its lifetime.
    """
    global _engine
    if _engine is None:
        _engine = create_engine(
            database_url(),
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,     # Drop connections the server closed while idle
            pool_recycle=3600,
        )
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the session factory bound to get_engine()."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            class_=Session,
            expire_on_commit=False,
        )
    return _session_factory


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session that commits on success and rolls back on error."""
    session = get_session_factory()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dispose_engine() -> None:
    """Close pooled connections and forget the engine (used on app shutdown)."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
