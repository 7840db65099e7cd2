import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from car_registry.entrypoints.http.exception_handlers import register_exception_handlers
from car_registry.entrypoints.http.routes.cars import router as cars_router
from car_registry.entrypoints.http.routes.health import router as health_router
from car_registry.infra.config import log_level
from car_registry.infra.db.session import dispose_engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    dispose_engine()


def configure_logging() -> None:
    """Root logging setup, run once for the module-level app below."""
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_app() -> FastAPI:
    app = FastAPI(
        title="Car Registry API",
        description="""
        Registry of cars with owner-scoped mutations and derived lookups.

        ## Features
        - Create, read, update and delete cars
        - Lookups by name, model, company, owner and price
        - Newest/oldest car, placeholder recommendations, history view

        ## Authentication
        Callers identify themselves with the `X-Caller-Id` header.
        It is required to create and to delete cars; only the owner may delete.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(cars_router, prefix="/v1")

    return app


configure_logging()
app = build_app()
