from __future__ import annotations

import os

STORAGE_MEMORY = "memory"
STORAGE_POSTGRES = "postgres"

DEFAULT_RECOMMENDATION_LIMIT = 5


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def storage_backend() -> str:
    backend = os.getenv("CAR_REGISTRY_STORAGE", STORAGE_MEMORY).strip().lower()

    if backend not in (STORAGE_MEMORY, STORAGE_POSTGRES):
        raise RuntimeError(
            f"CAR_REGISTRY_STORAGE must be '{STORAGE_MEMORY}' or '{STORAGE_POSTGRES}', got '{backend}'"
        )

    return backend


def recommendation_limit() -> int:
    raw = os.getenv("CAR_REGISTRY_RECOMMENDATION_LIMIT")

    if not raw:
        return DEFAULT_RECOMMENDATION_LIMIT

    try:
        limit = int(raw)
    except ValueError:
        raise RuntimeError(f"CAR_REGISTRY_RECOMMENDATION_LIMIT must be an integer, got '{raw}'")

    if limit <= 0:
        raise RuntimeError("CAR_REGISTRY_RECOMMENDATION_LIMIT must be > 0")

    return limit


def log_level() -> str:
    return os.getenv("CAR_REGISTRY_LOG_LEVEL", "INFO").upper()
