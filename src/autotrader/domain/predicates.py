"""Filter criteria → predicate compiler.

The compiler is schema-agnostic: it only speaks to a ``PredicateBuilder``,
a small capability over logical listing fields. Each storage layout (flat
view, normalized tables, in-memory records) provides its own builder, and
the compiled predicate means the same thing against every one of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Generic, Iterable, Sequence, TypeVar

from autotrader.domain.listing import ALL_TRANSMISSIONS, FilterCriteria

P = TypeVar("P")


class ListingField(str, Enum):
    """Logical fields a predicate can constrain."""

    IS_SOLD = "is_sold"
    PRICE = "price"
    MAKE_NAME = "make_name"
    MODEL_NAME = "model_name"
    TRIM_NAME = "trim_name"
    BODY_TYPE_NAME = "body_type_name"
    TRANSMISSION_TYPE = "transmission_type"


TEXT_SEARCH_FIELDS: tuple[ListingField, ...] = (
    ListingField.MAKE_NAME,
    ListingField.MODEL_NAME,
    ListingField.TRIM_NAME,
)


class PredicateBuilder(ABC, Generic[P]):
    """
    Capability for expressing listing predicates in one storage layout.

    Contract:
        - Text comparisons are case-insensitive
        - A field with no value (e.g. a listing without trim) never matches
          a comparison on that field, but must not poison a disjunction:
          the other branches of ``contains_any_ignore_case`` still decide
    """

    @abstractmethod
    def is_false(self, field: ListingField) -> P: ...

    @abstractmethod
    def contains_any_ignore_case(self, fields: Sequence[ListingField], token: str) -> P:
        """Substring match of ``token`` in at least one of ``fields``."""
        ...

    @abstractmethod
    def at_least(self, field: ListingField, value: Decimal) -> P: ...

    @abstractmethod
    def at_most(self, field: ListingField, value: Decimal) -> P: ...

    @abstractmethod
    def equals_ignore_case(self, field: ListingField, value: str) -> P: ...

    @abstractmethod
    def in_ignore_case(self, field: ListingField, values: Sequence[str]) -> P: ...

    @abstractmethod
    def all_of(self, clauses: Sequence[P]) -> P:
        """Conjunction; an empty sequence matches everything."""
        ...


@dataclass(frozen=True, slots=True)
class CompiledPredicate(Generic[P]):
    """AND of ``clauses``; ``expression`` is the builder's rendering of it."""

    clauses: tuple[P, ...]
    expression: P

    def __len__(self) -> int:
        return len(self.clauses)


def _clean(value: str | None) -> str | None:
    """Stripped value, or None when absent or blank."""
    if value is None:
        return None
    return value.strip() or None


def _clean_all(values: Iterable[str] | None) -> list[str]:
    if not values:
        return []
    return sorted({cleaned for cleaned in map(_clean, values) if cleaned})


def compile_criteria(
    criteria: FilterCriteria, builder: PredicateBuilder[P]
) -> CompiledPredicate[P]:
    """
    Compile criteria into a conjunctive predicate.

    Clauses are added in a fixed order; absent criteria add nothing.

    Args:
        criteria: Filter criteria (price range already validated by caller)
        builder: Predicate capability for the target storage layout

    Returns:
        CompiledPredicate whose first clause always excludes sold listings
    """
    clauses: list[P] = [builder.is_false(ListingField.IS_SOLD)]

    token = _clean(criteria.value)
    if token:
        clauses.append(builder.contains_any_ignore_case(TEXT_SEARCH_FIELDS, token))

    if criteria.min_price is not None:
        clauses.append(builder.at_least(ListingField.PRICE, criteria.min_price))
    if criteria.max_price is not None:
        clauses.append(builder.at_most(ListingField.PRICE, criteria.max_price))

    for field, selected in (
        (ListingField.MAKE_NAME, _clean(criteria.selected_make)),
        (ListingField.MODEL_NAME, _clean(criteria.selected_model)),
        (ListingField.TRIM_NAME, _clean(criteria.selected_trim)),
    ):
        if selected:
            clauses.append(builder.equals_ignore_case(field, selected))

    body_types = _clean_all(criteria.selected_body_types)
    if body_types:
        clauses.append(builder.in_ignore_case(ListingField.BODY_TYPE_NAME, body_types))

    transmission = _clean(criteria.selected_transmission)
    if transmission and transmission.lower() != ALL_TRANSMISSIONS.lower():
        clauses.append(builder.equals_ignore_case(ListingField.TRANSMISSION_TYPE, transmission))

    return CompiledPredicate(clauses=tuple(clauses), expression=builder.all_of(clauses))
