"""Outcome → HTTP response translation.

This is the only place an Outcome is unwrapped on the way out. A Failure is
rendered with its own status code; its cause never leaves the process.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from autotrader.domain.failure import Failure
from autotrader.domain.outcome import Outcome
from autotrader.entrypoints.http.error_responses import ApiResponse

T = TypeVar("T")


def failure_content(failure: Failure) -> dict[str, Any]:
    """Build the ErrorResponse body for a failure."""
    content: dict[str, Any] = {"detail": failure.message, "code": failure.code}

    # Field-level errors only for client-side failures
    if failure.status_code < 500 and isinstance(failure.details, list) and failure.details:
        content["errors"] = failure.details

    return content


def failure_response(failure: Failure) -> JSONResponse:
    return JSONResponse(status_code=failure.status_code, content=failure_content(failure))


def success_response(data: BaseModel, message: str) -> JSONResponse:
    envelope = ApiResponse[Any](
        message=message,
        data=data,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=envelope.model_dump(mode="json"),
    )


def to_response(
    outcome: Outcome[Failure, T],
    success_message: str,
    serialize: Callable[[T], BaseModel],
) -> JSONResponse:
    """
    Fold an Outcome into a JSON response.

    Args:
        outcome: Result of a use case
        success_message: Message for the success envelope
        serialize: Converts the success value into its response DTO

    Returns:
        200 with ApiResponse envelope, or the failure's status with ErrorResponse
    """
    return outcome.fold(
        failure_response,
        lambda value: success_response(serialize(value), success_message),
    )
