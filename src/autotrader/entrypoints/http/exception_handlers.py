"""FastAPI exception handlers.

Use cases return Outcomes, so these only see faults raised before or after
the executor runs: request parsing, mapper conversions, and bugs. Every
handler answers with the same ``{detail, code, errors?}`` body as a Failed
outcome does.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from autotrader.domain.errors import DomainError

logger = logging.getLogger(__name__)


def _request_extra(request: Request, **fields: Any) -> dict[str, Any]:
    return {"path": request.url.path, "method": request.method, **fields}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a DomainError with the status its class declares."""
    error_dict = exc.to_dict()
    status_code = exc.status_code

    log_level = logging.ERROR if status_code >= 500 else logging.INFO
    logger.log(
        log_level,
        "Domain error outside executor",
        extra=_request_extra(
            request,
            error_code=exc.error_code,
            error_message=exc.message,
            context=exc.context,
        ),
    )

    content: dict[str, Any] = {
        "detail": error_dict.get("message", str(exc)),
        "code": error_dict.get("code", exc.error_code),
    }
    # Field errors are for callers to fix; 5xx bodies stay generic
    if "errors" in error_dict and status_code < 500:
        content["errors"] = error_dict["errors"]

    return JSONResponse(status_code=status_code, content=content)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Turn FastAPI's query/path validation errors into field errors.

    ``size=0``, ``page=0`` and ``min_price=abc`` all end up here.
    """
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]

    logger.info("Request validation error", extra=_request_extra(request, errors=errors))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.info("Value error", extra=_request_extra(request, error_message=str(exc)))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "INVALID_VALUE"},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, answer with a generic 500."""
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra=_request_extra(request, error_type=type(exc).__name__, error_message=str(exc)),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.debug("Exception handlers registered")
