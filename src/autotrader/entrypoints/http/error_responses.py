"""REST API response envelopes.

Every successful response is wrapped in ``ApiResponse``; every error uses
``ErrorResponse``, whether it comes from a Failed outcome or from an
exception handler.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope.

    Example:
        {
            "success": true,
            "message": "Car listings retrieved successfully",
            "data": {...},
            "timestamp": "2026-01-05T10:00:00Z"
        }
    """

    success: bool = True
    message: str
    data: T
    timestamp: datetime = Field(description="UTC time the response was produced")


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors.

    Used in validation errors to indicate which field failed and why.
    """

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "min_price",
                "message": "Must be a valid decimal",
                "code": "INVALID_DECIMAL",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Supports:
    - Simple errors (just detail and code)
    - Multi-field validation errors (detail + errors array)
    - Error codes for i18n (code field can be used for translation keys)

    Examples:
        Simple error:
            {
                "detail": "Car with identifier '...' not found",
                "code": "NOT_FOUND"
            }

        Validation error with multiple fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "car_id",
                        "message": "Must be a valid UUID format",
                        "code": "INVALID_UUID"
                    }
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Max price must be greater than min price", "code": "INVALID_PRICE_RANGE"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "car_id",
                            "message": "Must be a valid UUID format",
                            "code": "INVALID_UUID",
                        },
                    ],
                },
            ]
        }
    )
