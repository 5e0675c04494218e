from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Sequence

from autotrader.domain.listing import CarListing
from autotrader.domain.predicates import ListingField, PredicateBuilder

ListingPredicate = Callable[[CarListing], bool]


def _text(listing: CarListing, field: ListingField) -> str | None:
    value: Any = getattr(listing, field.value)
    return value.lower() if isinstance(value, str) else None


class InMemoryPredicateBuilder(PredicateBuilder[ListingPredicate]):
    """
    Predicates as plain callables over CarListing records.

    Missing values (None) never satisfy a comparison.
    """

    def is_false(self, field: ListingField) -> ListingPredicate:
        return lambda listing: getattr(listing, field.value) is False

    def contains_any_ignore_case(
        self, fields: Sequence[ListingField], token: str
    ) -> ListingPredicate:
        needle = token.lower()
        fields = tuple(fields)

        def matches(listing: CarListing) -> bool:
            for field in fields:
                value = _text(listing, field)
                if value is not None and needle in value:
                    return True
            return False

        return matches

    def at_least(self, field: ListingField, value: Decimal) -> ListingPredicate:
        def matches(listing: CarListing) -> bool:
            actual = getattr(listing, field.value)
            return actual is not None and actual >= value

        return matches

    def at_most(self, field: ListingField, value: Decimal) -> ListingPredicate:
        def matches(listing: CarListing) -> bool:
            actual = getattr(listing, field.value)
            return actual is not None and actual <= value

        return matches

    def equals_ignore_case(self, field: ListingField, value: str) -> ListingPredicate:
        expected = value.lower()
        return lambda listing: _text(listing, field) == expected

    def in_ignore_case(self, field: ListingField, values: Sequence[str]) -> ListingPredicate:
        expected = frozenset(value.lower() for value in values)
        return lambda listing: _text(listing, field) in expected

    def all_of(self, clauses: Sequence[ListingPredicate]) -> ListingPredicate:
        clauses = tuple(clauses)
        return lambda listing: all(clause(listing) for clause in clauses)
