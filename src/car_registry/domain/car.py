from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation

from car_registry.domain.errors import FieldError, ValidationError

# Column limits of the cars table
MAX_LABEL_LENGTH = 100
MAX_OWNER_LENGTH = 255
MAX_PRICE = Decimal("9999999999.99")
MAX_INTEGER = 2_147_483_647


@dataclass(frozen=True, slots=True)
class Car:
    id: str
    name: str
    model: str
    company_name: str
    image: str
    cubic_capacity_of_engine: int
    price: Decimal
    top_speed: int
    owner: str
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class CarPayload:
    """Caller-supplied fields for create and update. Never persisted as-is."""

    name: str
    model: str
    company_name: str
    image: str
    cubic_capacity_of_engine: int
    price: Decimal
    top_speed: int

    def validate(self) -> None:
        """
        Validate every descriptive and specification field.

        All problems are collected into a single error so callers can fix
        the payload in one round trip.

        Raises:
            ValidationError: If any field is missing, blank or out of range
        """
        errors: list[FieldError] = []

        for field in ("name", "model", "company_name", "image"):
            value = getattr(self, field)
            if not isinstance(value, str) or not value.strip():
                errors.append({"field": field, "message": "Must not be empty", "code": "REQUIRED"})
            elif field != "image" and len(value) > MAX_LABEL_LENGTH:
                errors.append(
                    {
                        "field": field,
                        "message": f"Must be at most {MAX_LABEL_LENGTH} characters",
                        "code": "TOO_LONG",
                    }
                )

        # Guardrail: prevent float leakage past boundary
        if not isinstance(self.price, Decimal):
            errors.append(
                {"field": "price", "message": "Must be a Decimal", "code": "INVALID_NUMBER"}
            )
        elif not self.price.is_finite() or self.price <= 0:
            errors.append(
                {"field": "price", "message": "Must be greater than 0", "code": "INVALID_VALUE"}
            )
        elif self.price > MAX_PRICE:
            errors.append(
                {"field": "price", "message": f"Must be at most {MAX_PRICE}", "code": "INVALID_VALUE"}
            )

        if not _is_int(self.top_speed):
            errors.append(
                {"field": "top_speed", "message": "Must be an integer", "code": "INVALID_NUMBER"}
            )
        elif self.top_speed <= 0:
            errors.append(
                {"field": "top_speed", "message": "Must be greater than 0", "code": "INVALID_VALUE"}
            )
        elif self.top_speed > MAX_INTEGER:
            errors.append(
                {"field": "top_speed", "message": f"Must be at most {MAX_INTEGER}", "code": "INVALID_VALUE"}
            )

        # Zero is valid: electric cars have no engine displacement
        if not _is_int(self.cubic_capacity_of_engine):
            errors.append(
                {
                    "field": "cubic_capacity_of_engine",
                    "message": "Must be an integer",
                    "code": "INVALID_NUMBER",
                }
            )
        elif self.cubic_capacity_of_engine < 0:
            errors.append(
                {
                    "field": "cubic_capacity_of_engine",
                    "message": "Must be greater than or equal to 0",
                    "code": "INVALID_VALUE",
                }
            )
        elif self.cubic_capacity_of_engine > MAX_INTEGER:
            errors.append(
                {
                    "field": "cubic_capacity_of_engine",
                    "message": f"Must be at most {MAX_INTEGER}",
                    "code": "INVALID_VALUE",
                }
            )

        if errors:
            raise ValidationError("Missing or invalid fields in payload", errors=errors)


@dataclass(frozen=True, slots=True)
class CarPreferences:
    """Buyer preferences for recommendations. Currently advisory only."""

    company_name: str | None = None
    model: str | None = None
    price_min: Decimal | None = None
    price_max: Decimal | None = None


@dataclass(frozen=True, slots=True)
class CarHistoryEntry:
    owner: str
    created_at: datetime
    updated_at: datetime | None


def parse_price(value: str | int | Decimal, field: str = "price") -> Decimal:
    """
    Parse a price bound supplied by a caller.

    Args:
        value: Decimal, integer or decimal string
        field: Field name reported on failure

    Returns:
        The value as a finite Decimal

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, (bool, float)):
        raise _invalid_number(field)
    try:
        parsed = Decimal(value.strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise _invalid_number(field)
    if not parsed.is_finite():
        raise _invalid_number(field)
    return parsed


def _invalid_number(field: str) -> ValidationError:
    return ValidationError.for_field(field, "Must be a valid number", "INVALID_NUMBER")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_owner_length(owner: str, field: str = "owner") -> None:
    """
    Raises:
        ValidationError: If owner does not fit the owner column
    """
    if len(owner) > MAX_OWNER_LENGTH:
        raise ValidationError.for_field(
            field, f"Must be at most {MAX_OWNER_LENGTH} characters", "TOO_LONG"
        )
