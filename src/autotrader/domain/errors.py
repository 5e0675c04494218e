"""Domain error classes.

Protocol-agnostic errors that represent business failures.
Each error declares the code, suggested status and failure kind it is
classified into, so the executor and the HTTP layer never have to guess.
"""

from typing import Any

from autotrader.domain.failure import FailureKind


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains business error information that
    can be translated to HTTP, GraphQL, or gRPC formats.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "BUSINESS_ERROR"
    status_code: int = 400
    failure_kind: FailureKind = FailureKind.BUSINESS

    def __init__(self, message: str, *, code: str | None = None, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            code: Overrides the class-level error code for this instance
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        if code is not None:
            self.error_code = code
        super().__init__(message)

    @property
    def details(self) -> Any:
        """Structured payload carried into the classified Failure."""
        return self.context or None

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Business rule validation error.

    Used for domain invariant violations and cross-field validation.

    Examples:
        - min_price > max_price
        - page < 1
        - Malformed identifiers
    """

    error_code: str = "VALIDATION_ERROR"
    status_code: int = 400
    failure_kind: FailureKind = FailureKind.VALIDATION

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "min_price", "message": "Must be positive"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    @property
    def details(self) -> Any:
        if self.errors:
            return self.errors
        return super().details

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Resource not found.

    Examples:
        - Listing with ID not found
    """

    error_code: str = "NOT_FOUND"
    status_code: int = 404
    failure_kind: FailureKind = FailureKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Car")
            identifier: Resource identifier (e.g., UUID)
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Business constraint conflict (e.g. listing already sold)."""

    error_code: str = "CONFLICT"
    status_code: int = 409
    failure_kind: FailureKind = FailureKind.BUSINESS


class UnauthorizedError(DomainError):
    """Authentication required or failed."""

    error_code: str = "UNAUTHORIZED"
    status_code: int = 401
    failure_kind: FailureKind = FailureKind.UNAUTHORIZED


class ForbiddenError(DomainError):
    """Authenticated but insufficient permissions."""

    error_code: str = "FORBIDDEN"
    status_code: int = 403
    failure_kind: FailureKind = FailureKind.FORBIDDEN


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Should be logged for investigation.
    """

    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500
    failure_kind: FailureKind = FailureKind.SERVER
