"""Operation executor.

Runs one fallible operation and guarantees the caller gets an Outcome back,
never a raised exception. Raised faults are classified by an explicit,
ordered rule chain (first match wins). Order matters: some fault types are
subclasses of others (an httpx timeout is also a transport error), so the
most specific rules come first.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, cast

import httpx
from sqlalchemy.exc import SQLAlchemyError

from autotrader.domain.errors import DomainError
from autotrader.domain.failure import Failure
from autotrader.domain.outcome import Outcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

UPSTREAM_SERVER_MESSAGE = "The system is experiencing issues. Please try again later."
DATABASE_ERROR_MESSAGE = "Database access error. Please try again later."

CLIENT_ERROR_MESSAGES: dict[int, str] = {
    400: "Bad request. Please check your input and try again.",
    401: "You are not authenticated or session has expired.",
    403: "You are not authorized to perform this action.",
    404: "Resource not found.",
}


@dataclass(frozen=True, slots=True)
class FaultContext:
    """What a classifier needs besides the fault itself."""

    operation_name: str
    default_message: str


@dataclass(frozen=True, slots=True)
class ClassificationRule:
    name: str
    matches: Callable[[Exception], bool]
    classify: Callable[[Exception, FaultContext], Failure]


# ==============================================================================
# Upstream helpers
# ==============================================================================


def _upstream_status(exc: Exception) -> int | None:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    return None


UPSTREAM_MESSAGE_KEYS = ("message", "detail", "error")


def extract_upstream_message(exc: Exception) -> str | None:
    """Return the first non-blank ``message``, ``detail`` or ``error`` string
    of an upstream JSON error body, if any.

    Unread streamed bodies count as having no message.
    """
    if not isinstance(exc, httpx.HTTPStatusError):
        return None

    try:
        body = exc.response.json()
    except httpx.StreamError:
        logger.debug("Upstream error body was not read", exc_info=True)
        return None
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        logger.debug("Upstream error body is not JSON", exc_info=True)
        return None

    if not isinstance(body, dict):
        return None

    for key in UPSTREAM_MESSAGE_KEYS:
        message = body.get(key)
        if isinstance(message, str) and message.strip():
            return message
    return None


# ==============================================================================
# Classifiers
# ==============================================================================


def _classify_domain_error(exc: Exception, context: FaultContext) -> Failure:
    exc = cast(DomainError, exc)
    return Failure(
        kind=exc.failure_kind,
        code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        cause=exc,
    )


def _classify_timeout(exc: Exception, context: FaultContext) -> Failure:
    return Failure.timeout(cause=exc)


def _classify_network(exc: Exception, context: FaultContext) -> Failure:
    return Failure.network(cause=exc)


def _classify_upstream_server(exc: Exception, context: FaultContext) -> Failure:
    message = extract_upstream_message(exc)
    return Failure.server(message or UPSTREAM_SERVER_MESSAGE, cause=exc)


def _classify_upstream_client(exc: Exception, context: FaultContext) -> Failure:
    status = _upstream_status(exc) or 400
    message = extract_upstream_message(exc)
    if message is None:
        message = CLIENT_ERROR_MESSAGES.get(status, context.default_message)
    return Failure.custom(f"HTTP_{status}", message, status, cause=exc)


def _classify_persistence(exc: Exception, context: FaultContext) -> Failure:
    # Raw driver messages can carry SQL and parameters: keep them out of the message
    return Failure.server(DATABASE_ERROR_MESSAGE, cause=exc)


def _classify_unknown(exc: Exception, context: FaultContext) -> Failure:
    return Failure.unknown(context.default_message, cause=exc)


def _is_upstream_status(low: int, high: int) -> Callable[[Exception], bool]:
    def matches(exc: Exception) -> bool:
        status = _upstream_status(exc)
        return status is not None and low <= status < high

    return matches


DOMAIN_RULE = ClassificationRule(
    "domain", lambda exc: isinstance(exc, DomainError), _classify_domain_error
)

CLASSIFICATION_CHAIN: tuple[ClassificationRule, ...] = (
    DOMAIN_RULE,
    ClassificationRule(
        "timeout",
        lambda exc: isinstance(exc, (httpx.TimeoutException, TimeoutError)),
        _classify_timeout,
    ),
    ClassificationRule(
        "network",
        lambda exc: isinstance(exc, (httpx.TransportError, ConnectionError)),
        _classify_network,
    ),
    ClassificationRule("upstream_server", _is_upstream_status(500, 600), _classify_upstream_server),
    ClassificationRule("upstream_client", _is_upstream_status(400, 500), _classify_upstream_client),
    ClassificationRule(
        "persistence", lambda exc: isinstance(exc, SQLAlchemyError), _classify_persistence
    ),
)

FALLBACK_RULE = ClassificationRule("unknown", lambda exc: True, _classify_unknown)


def classify(exc: Exception, context: FaultContext) -> tuple[ClassificationRule, Failure]:
    """Classify a fault with the first matching rule of the chain.

    A rule that itself raises while matching or classifying hands the
    original fault to the fallback rule.
    """
    try:
        for rule in CLASSIFICATION_CHAIN:
            if rule.matches(exc):
                return rule, rule.classify(exc, context)
    except Exception:
        logger.error(
            "Classifier raised in %s",
            context.operation_name,
            exc_info=True,
            extra={"operation": context.operation_name},
        )
    return FALLBACK_RULE, FALLBACK_RULE.classify(exc, context)


# ==============================================================================
# Executor
# ==============================================================================


def _log_failure(rule: ClassificationRule, failure: Failure, context: FaultContext) -> None:
    logger.log(
        failure.log_level,
        "%s failed in %s: %s - %s",
        rule.name,
        context.operation_name,
        failure.code,
        failure.cause if failure.cause is not None else failure.message,
        exc_info=failure.cause if rule is FALLBACK_RULE else None,
        extra={
            "operation": context.operation_name,
            "classification": rule.name,
            "error_code": failure.code,
            "status_code": failure.status_code,
        },
    )


def _run_hook(
    hook: Callable[[Any], Optional[Outcome[Failure, T]]],
    exc: Exception,
    context: FaultContext,
) -> Outcome[Failure, T] | None:
    try:
        return hook(exc)
    except Exception as hook_exc:
        logger.error(
            "Error hook raised in %s",
            context.operation_name,
            exc_info=hook_exc,
            extra={"operation": context.operation_name},
        )
        return Outcome.failure(Failure.unknown(context.default_message, cause=hook_exc))


def execute(
    operation: Callable[[], Outcome[Failure, T]],
    operation_name: str,
    default_message: str,
    *,
    on_domain_error: Callable[[DomainError], Optional[Outcome[Failure, T]]] | None = None,
    on_other_error: Callable[[Exception], Optional[Outcome[Failure, T]]] | None = None,
) -> Outcome[Failure, T]:
    """
    Run ``operation`` and return its Outcome, classifying anything it raises.

    Args:
        operation: Zero-argument computation returning an Outcome (may raise)
        operation_name: Name used in diagnostics (e.g. "SearchCarListings.execute")
        default_message: Message for faults nothing more specific applies to
        on_domain_error: Called for DomainError only; a non-None result replaces
            the default classification
        on_other_error: Called for faults that no rule recognizes; a non-None
            result replaces the Unknown failure

    Returns:
        The operation's Outcome, or a Failed outcome with the classified Failure
    """
    context = FaultContext(operation_name=operation_name, default_message=default_message)

    try:
        return operation()
    except Exception as exc:
        rule, failure = classify(exc, context)
        _log_failure(rule, failure, context)

        if rule is DOMAIN_RULE and on_domain_error is not None:
            handled = _run_hook(on_domain_error, exc, context)
            if handled is not None:
                return handled

        if rule is FALLBACK_RULE and on_other_error is not None:
            handled = _run_hook(on_other_error, exc, context)
            if handled is not None:
                return handled

        return Outcome.failure(failure)
