"""Tests for domain error classes."""

from car_registry.domain.errors import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


class TestDomainError:
    """Tests for base DomainError class."""

    def test_creates_error_with_message(self) -> None:
        """DomainError stores message and has correct error code."""
        error = DomainError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.error_code == "DOMAIN_ERROR"
        assert error.context == {}

    def test_to_dict_returns_structured_format(self) -> None:
        """DomainError.to_dict() merges context into the structured format."""
        error = DomainError("Test error", car_id="abc", field="price")

        assert error.to_dict() == {
            "message": "Test error",
            "code": "DOMAIN_ERROR",
            "car_id": "abc",
            "field": "price",
        }

    def test_str_representation(self) -> None:
        """DomainError string representation is the message."""
        assert str(DomainError("Test message")) == "Test message"


class TestValidationError:
    """Tests for ValidationError class."""

    def test_creates_validation_error_with_default_message(self) -> None:
        error = ValidationError()

        assert error.message == "Validation error"
        assert error.errors is None
        assert error.error_code == "VALIDATION_ERROR"

    def test_field_errors_switch_default_message(self) -> None:
        errors = [{"field": "name", "message": "Must not be empty", "code": "REQUIRED"}]

        error = ValidationError(errors=errors)

        assert error.message == "Validation failed"
        assert error.errors == errors

    def test_to_dict_includes_field_errors(self) -> None:
        errors = [{"field": "car_id", "message": "Must not be empty", "code": "REQUIRED"}]

        error = ValidationError("Missing or invalid fields in payload", errors=errors)

        assert error.to_dict() == {
            "message": "Missing or invalid fields in payload",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }

    def test_to_dict_without_field_errors(self) -> None:
        assert ValidationError("Simple error").to_dict() == {
            "message": "Simple error",
            "code": "VALIDATION_ERROR",
        }


class TestNotFoundError:
    """Tests for NotFoundError class."""

    def test_creates_not_found_error_with_identifier(self) -> None:
        error = NotFoundError("Car", "123")

        assert error.message == "Car with identifier '123' not found"
        assert error.error_code == "NOT_FOUND"
        assert error.context == {"resource": "Car", "identifier": "123"}

    def test_creates_not_found_error_without_identifier(self) -> None:
        error = NotFoundError("Car")

        assert error.message == "Car not found"
        assert error.context["identifier"] is None


class TestOtherErrors:
    """Error codes used for protocol translation."""

    def test_conflict_error_code(self) -> None:
        assert ConflictError("Generated car id 'x' is already in use").error_code == "CONFLICT"

    def test_unauthorized_error_code(self) -> None:
        assert UnauthorizedError("Caller identity is required").error_code == "UNAUTHORIZED"

    def test_authorization_error_code(self) -> None:
        error = AuthorizationError("Not the owner", car_id="abc")

        assert error.error_code == "FORBIDDEN"
        assert error.context == {"car_id": "abc"}

    def test_all_errors_are_domain_errors(self) -> None:
        for error_class in (ValidationError, ConflictError, UnauthorizedError, AuthorizationError):
            assert issubclass(error_class, DomainError)
        assert issubclass(NotFoundError, DomainError)
