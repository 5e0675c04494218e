"""Tests for domain error classes."""

from autotrader.domain.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from autotrader.domain.failure import FailureKind


class TestDomainError:
    """Tests for base DomainError class."""

    def test_creates_error_with_message(self) -> None:
        """DomainError stores message and has the business defaults."""
        error = DomainError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.error_code == "BUSINESS_ERROR"
        assert error.status_code == 400
        assert error.failure_kind is FailureKind.BUSINESS
        assert error.context == {}

    def test_creates_error_with_context(self) -> None:
        """DomainError stores additional context."""
        error = DomainError("Error occurred", resource="Car", action="reserve")

        assert error.context == {"resource": "Car", "action": "reserve"}
        assert error.details == {"resource": "Car", "action": "reserve"}

    def test_details_is_none_without_context(self) -> None:
        """DomainError without context carries no details."""
        assert DomainError("Plain").details is None

    def test_code_overrides_class_level_code(self) -> None:
        """The code keyword replaces the error code for one instance only."""
        error = DomainError("Range inverted", code="INVALID_PRICE_RANGE")

        assert error.error_code == "INVALID_PRICE_RANGE"
        assert DomainError.error_code == "BUSINESS_ERROR"

    def test_to_dict_returns_structured_format(self) -> None:
        """DomainError.to_dict() returns structured error format."""
        error = DomainError("Test error", field="test", value=123)

        assert error.to_dict() == {
            "message": "Test error",
            "code": "BUSINESS_ERROR",
            "field": "test",
            "value": 123,
        }

    def test_str_representation(self) -> None:
        """DomainError string representation is the message."""
        assert str(DomainError("Test message")) == "Test message"


class TestValidationError:
    """Tests for ValidationError class."""

    def test_creates_simple_validation_error(self) -> None:
        """ValidationError can be created with just a message."""
        error = ValidationError("Invalid input")

        assert error.message == "Invalid input"
        assert error.error_code == "VALIDATION_ERROR"
        assert error.status_code == 400
        assert error.failure_kind is FailureKind.VALIDATION
        assert error.errors is None

    def test_creates_validation_error_with_default_message(self) -> None:
        """ValidationError uses default message if none provided."""
        error = ValidationError()

        assert error.message == "Validation error"
        assert error.errors is None

    def test_creates_validation_error_with_field_errors(self) -> None:
        """ValidationError stores field-level errors and exposes them as details."""
        errors = [
            {"field": "car_id", "message": "Must be a valid UUID format", "code": "INVALID_UUID"},
        ]

        error = ValidationError(errors=errors)

        assert error.message == "Validation failed"
        assert error.errors == errors
        assert error.details == errors

    def test_accepts_code_override(self) -> None:
        """ValidationError forwards the code keyword to DomainError."""
        error = ValidationError("Bad range", code="INVALID_PRICE_RANGE")

        assert error.error_code == "INVALID_PRICE_RANGE"

    def test_to_dict_includes_field_errors(self) -> None:
        """ValidationError.to_dict() includes field errors if present."""
        errors = [{"field": "min_price", "message": "Must be a valid decimal"}]

        error = ValidationError(errors=errors)

        assert error.to_dict() == {
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }

    def test_to_dict_without_field_errors(self) -> None:
        """ValidationError.to_dict() works without field errors."""
        assert ValidationError("Simple error").to_dict() == {
            "message": "Simple error",
            "code": "VALIDATION_ERROR",
        }


class TestNotFoundError:
    """Tests for NotFoundError class."""

    def test_creates_not_found_error_with_identifier(self) -> None:
        """NotFoundError creates message with resource and identifier."""
        error = NotFoundError("Car", "123")

        assert error.message == "Car with identifier '123' not found"
        assert error.error_code == "NOT_FOUND"
        assert error.status_code == 404
        assert error.failure_kind is FailureKind.NOT_FOUND
        assert error.context == {"resource": "Car", "identifier": "123"}

    def test_creates_not_found_error_without_identifier(self) -> None:
        """NotFoundError creates message with just resource."""
        error = NotFoundError("Dealer")

        assert error.message == "Dealer not found"
        assert error.context["identifier"] is None


class TestOtherErrors:
    """Status codes and kinds of the remaining error classes."""

    def test_conflict_error(self) -> None:
        error = ConflictError("Car already sold")

        assert (error.error_code, error.status_code) == ("CONFLICT", 409)
        assert error.failure_kind is FailureKind.BUSINESS

    def test_unauthorized_error(self) -> None:
        error = UnauthorizedError("Authentication required")

        assert (error.error_code, error.status_code) == ("UNAUTHORIZED", 401)
        assert error.failure_kind is FailureKind.UNAUTHORIZED

    def test_forbidden_error(self) -> None:
        error = ForbiddenError("Insufficient permissions")

        assert (error.error_code, error.status_code) == ("FORBIDDEN", 403)
        assert error.failure_kind is FailureKind.FORBIDDEN

    def test_internal_error(self) -> None:
        error = InternalError("Unexpected condition")

        assert (error.error_code, error.status_code) == ("INTERNAL_ERROR", 500)
        assert error.failure_kind is FailureKind.SERVER

    def test_all_errors_are_domain_errors(self) -> None:
        """Every error class can be caught as DomainError."""
        for error in (
            ValidationError(),
            NotFoundError("Car"),
            ConflictError("x"),
            UnauthorizedError("x"),
            ForbiddenError("x"),
            InternalError("x"),
        ):
            assert isinstance(error, DomainError)
