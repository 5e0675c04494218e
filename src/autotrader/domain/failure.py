"""Failure taxonomy.

A Failure is the data form of an error once it has been classified. It is
returned inside an Outcome and rendered at the transport boundary; it is
never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FailureKind(Enum):
    """Closed set of failure kinds.

    Each member carries (default code, default status, default message).
    CUSTOM has no defaults: code, message and status are always explicit.
    """

    VALIDATION = ("VALIDATION_ERROR", 400, "Validation error. Please check your input.")
    NOT_FOUND = ("NOT_FOUND", 404, "Resource not found.")
    UNAUTHORIZED = ("UNAUTHORIZED", 401, "Unauthorized access.")
    FORBIDDEN = ("FORBIDDEN", 403, "Access forbidden.")
    BUSINESS = ("BUSINESS_ERROR", 400, "Business logic error.")
    NETWORK = ("NETWORK_ERROR", 503, "Network connection error. Please try again later.")
    TIMEOUT = ("TIMEOUT", 408, "Request timeout. Please try again.")
    SERVER = ("SERVER_ERROR", 500, "Server error. Please try again later.")
    UNKNOWN = ("UNKNOWN_ERROR", 500, "An unexpected error occurred.")
    CUSTOM = (None, None, None)

    def __init__(
        self,
        default_code: str | None,
        default_status: int | None,
        default_message: str | None,
    ) -> None:
        self.default_code = default_code
        self.default_status = default_status
        self.default_message = default_message


# Kinds that always indicate a problem on our side or upstream
_ERROR_KINDS = frozenset({FailureKind.NETWORK, FailureKind.SERVER, FailureKind.UNKNOWN})


@dataclass(frozen=True, slots=True)
class Failure:
    """A classified failure.

    Attributes:
        kind: Entry in the closed taxonomy
        code: Machine-readable code (e.g. "NOT_FOUND", "INVALID_PRICE_RANGE")
        message: Human-readable message, safe to show to callers
        status_code: Suggested transport status
        details: Optional structured payload (e.g. field-level errors)
        cause: Original exception, for server-side diagnostics only
    """

    kind: FailureKind
    code: str
    message: str
    status_code: int
    details: Any = None
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    @property
    def log_level(self) -> int:
        """Severity the failure should be logged at."""
        if self.kind in _ERROR_KINDS or self.status_code >= 500:
            return logging.ERROR
        return logging.WARNING

    @classmethod
    def _of(
        cls,
        kind: FailureKind,
        message: str | None = None,
        *,
        code: str | None = None,
        details: Any = None,
        cause: BaseException | None = None,
    ) -> Failure:
        if kind.default_code is None or kind.default_status is None:
            raise ValueError(f"{kind.name} has no defaults; use Failure.custom()")
        return cls(
            kind=kind,
            code=code or kind.default_code,
            message=message or kind.default_message or "",
            status_code=kind.default_status,
            details=details,
            cause=cause,
        )

    # --------------------------------------------------------------------------
    # Factories
    # --------------------------------------------------------------------------

    @classmethod
    def validation(
        cls,
        message: str | None = None,
        *,
        code: str | None = None,
        details: Any = None,
        cause: BaseException | None = None,
    ) -> Failure:
        return cls._of(FailureKind.VALIDATION, message, code=code, details=details, cause=cause)

    @classmethod
    def business(
        cls,
        message: str | None = None,
        *,
        code: str | None = None,
        details: Any = None,
        cause: BaseException | None = None,
    ) -> Failure:
        return cls._of(FailureKind.BUSINESS, message, code=code, details=details, cause=cause)

    @classmethod
    def not_found(
        cls, message: str | None = None, *, details: Any = None, cause: BaseException | None = None
    ) -> Failure:
        return cls._of(FailureKind.NOT_FOUND, message, details=details, cause=cause)

    @classmethod
    def unauthorized(
        cls, message: str | None = None, *, details: Any = None, cause: BaseException | None = None
    ) -> Failure:
        return cls._of(FailureKind.UNAUTHORIZED, message, details=details, cause=cause)

    @classmethod
    def forbidden(
        cls, message: str | None = None, *, details: Any = None, cause: BaseException | None = None
    ) -> Failure:
        return cls._of(FailureKind.FORBIDDEN, message, details=details, cause=cause)

    @classmethod
    def network(
        cls, message: str | None = None, *, details: Any = None, cause: BaseException | None = None
    ) -> Failure:
        return cls._of(FailureKind.NETWORK, message, details=details, cause=cause)

    @classmethod
    def timeout(
        cls, message: str | None = None, *, details: Any = None, cause: BaseException | None = None
    ) -> Failure:
        return cls._of(FailureKind.TIMEOUT, message, details=details, cause=cause)

    @classmethod
    def server(
        cls, message: str | None = None, *, details: Any = None, cause: BaseException | None = None
    ) -> Failure:
        return cls._of(FailureKind.SERVER, message, details=details, cause=cause)

    @classmethod
    def unknown(
        cls, message: str | None = None, *, details: Any = None, cause: BaseException | None = None
    ) -> Failure:
        return cls._of(FailureKind.UNKNOWN, message, details=details, cause=cause)

    @classmethod
    def custom(
        cls,
        code: str,
        message: str,
        status_code: int,
        *,
        details: Any = None,
        cause: BaseException | None = None,
    ) -> Failure:
        """Failure for codes the taxonomy does not anticipate."""
        return cls(
            kind=FailureKind.CUSTOM,
            code=code,
            message=message,
            status_code=status_code,
            details=details,
            cause=cause,
        )
