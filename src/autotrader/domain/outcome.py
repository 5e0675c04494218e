"""Two-variant result type used wherever a fallible computation crosses an
internal boundary.

``fold`` is the only primitive. Everything else is derived from it, so a
value can never be observed as both (or neither) variant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

F = TypeVar("F")
T = TypeVar("T")
U = TypeVar("U")
B = TypeVar("B")


class Outcome(ABC, Generic[F, T]):
    """Exactly one of a failure value or a success value."""

    __slots__ = ()

    @abstractmethod
    def fold(self, on_failure: Callable[[F], B], on_success: Callable[[T], B]) -> B:
        """Apply ``on_failure`` or ``on_success``; exactly one of them runs."""
        ...

    @staticmethod
    def failure(value: F) -> Outcome[F, Any]:
        return Failed(value)

    @staticmethod
    def success(value: T) -> Outcome[Any, T]:
        return Succeeded(value)

    @property
    def is_success(self) -> bool:
        return self.fold(lambda _: False, lambda _: True)

    @property
    def is_failure(self) -> bool:
        return self.fold(lambda _: True, lambda _: False)

    def map(self, fn: Callable[[T], U]) -> Outcome[F, U]:
        """Transform the success value; failures pass through unchanged."""
        return self.fold(Outcome.failure, lambda value: Outcome.success(fn(value)))

    def failure_or_none(self) -> F | None:
        return self.fold(lambda failure: failure, lambda _: None)

    def value_or_none(self) -> T | None:
        return self.fold(lambda _: None, lambda value: value)

    def value_or(self, default: T) -> T:
        return self.fold(lambda _: default, lambda value: value)


@dataclass(frozen=True, slots=True)
class Failed(Outcome[F, T]):
    value: F

    def fold(self, on_failure: Callable[[F], B], on_success: Callable[[T], B]) -> B:
        return on_failure(self.value)


@dataclass(frozen=True, slots=True)
class Succeeded(Outcome[F, T]):
    value: T

    def fold(self, on_failure: Callable[[F], B], on_success: Callable[[T], B]) -> B:
        return on_success(self.value)
