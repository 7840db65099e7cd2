"""Translate exceptions into the ErrorResponse JSON envelope.

Shape: {"detail": ..., "code": ..., "errors": [...]}; "errors" only for validation.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from car_registry.domain.errors import DomainError, FieldError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
}


def _error_response(
    status_code: int, detail: str, code: str, errors: list[FieldError] | None = None
) -> JSONResponse:
    content: dict[str, Any] = {"detail": detail, "code": code}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def _request_fields(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Map a DomainError to its status code; unknown codes become 400."""
    status_code = STATUS_BY_ERROR_CODE.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    logger.info(
        "Client error",
        extra={"error_code": exc.error_code, "error_message": exc.message, **_request_fields(request)},
    )

    errors = exc.errors if isinstance(exc, ValidationError) else None
    return _error_response(status_code, exc.message, exc.error_code, errors)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Shape errors caught by pydantic (missing body field, price="abc", top_speed=-1).

    Reported in the same envelope as domain validation errors, with the
    'body'/'query' location prefix dropped from field names.
    """
    errors: list[FieldError] = [
        FieldError(
            field=".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query")),
            message=error["msg"],
            code=error["type"],
        )
        for error in exc.errors()
    ]

    logger.info("Request validation error", extra={"errors": errors, **_request_fields(request)})

    return _error_response(422, "Invalid request parameters", "VALIDATION_ERROR", errors)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log with traceback, never leak internals to the client."""
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, **_request_fields(request)},
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred", "INTERNAL_ERROR"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on app. Call once while building the app."""
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.debug("Exception handlers registered")
