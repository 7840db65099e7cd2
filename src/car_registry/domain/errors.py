"""Domain error classes.

Every failed registry operation raises exactly one of these. They know
nothing about HTTP; the entrypoint maps `error_code` to a status code.
"""

from __future__ import annotations

from typing import Any, TypedDict


class FieldError(TypedDict):
    field: str
    message: str
    code: str


class DomainError(Exception):
    """Base class for all domain errors.

    Attributes:
        message: Human-readable text naming the offending id or field
        context: Extra identifiers (car_id, resource, ...) for structured output
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a protocol-neutral mapping."""
        payload: dict[str, Any] = {"message": self.message, "code": self.error_code}
        payload.update(self.context)
        return payload


class ValidationError(DomainError):
    """Missing, empty or malformed input. The caller must fix it; never retried.

    Carries zero or more field errors, e.g.
    [{"field": "price", "message": "Must be greater than 0", "code": "INVALID_VALUE"}]
    """

    error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[FieldError] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[FieldError] | None = list(errors) if errors else None
        default = "Validation failed" if self.errors else "Validation error"
        super().__init__(message or default, **context)

    @classmethod
    def for_field(cls, field: str, message: str, code: str) -> ValidationError:
        """Shortcut for the common single-field failure."""
        return cls(errors=[FieldError(field=field, message=message, code=code)])

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class NotFoundError(DomainError):
    """No live record matches the id, name or price that was looked up."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """A freshly generated car id is already held by a live record."""

    error_code = "CONFLICT"


class UnauthorizedError(DomainError):
    """The operation needs a caller identity and none was given."""

    error_code = "UNAUTHORIZED"


class AuthorizationError(DomainError):
    """The caller is known but does not own the record it tried to change."""

    error_code = "FORBIDDEN"
