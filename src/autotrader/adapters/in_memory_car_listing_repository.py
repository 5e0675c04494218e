from __future__ import annotations

from typing import Any

from autotrader.adapters.in_memory_predicate_builder import (
    InMemoryPredicateBuilder,
    ListingPredicate,
)
from autotrader.domain.listing import CarListing
from autotrader.domain.sorting import SortSpec
from autotrader.ports.car_listing_repository import (
    CarListingRepository,
    ListingSlice,
    SliceRequest,
)


class InMemoryCarListingRepository(CarListingRepository):
    """
    Canonical contract implementation for tests.

    - Stores listings in insertion order
    - Applies the compiled predicate (AND semantics)
    - Sorts by the requested field, id as tie-breaker
    - Applies paging AFTER filtering and sorting
    - Returns total_count of matching listings before paging
    """

    def __init__(self, listings: list[CarListing]) -> None:
        self._listings = listings
        self._predicate_builder = InMemoryPredicateBuilder()

    @property
    def predicate_builder(self) -> InMemoryPredicateBuilder:
        return self._predicate_builder

    def search(self, predicate: ListingPredicate, request: SliceRequest) -> ListingSlice:
        matches = [listing for listing in self._listings if predicate(listing)]
        total_count = len(matches)  # Count BEFORE paging

        ordered = self._sorted(matches, request.sort)

        start = request.offset
        end = start + request.size

        return ListingSlice(listings=ordered[start:end], total_count=total_count)

    def get_by_id(self, listing_id: str) -> CarListing | None:
        return next((listing for listing in self._listings if listing.id == listing_id), None)

    def _sorted(self, listings: list[CarListing], sort: SortSpec) -> list[CarListing]:
        # Two stable passes: id first, then the sort field
        by_id = sorted(listings, key=lambda listing: listing.id)
        return sorted(by_id, key=lambda listing: self._sort_key(listing, sort), reverse=sort.descending)

    @staticmethod
    def _sort_key(listing: CarListing, sort: SortSpec) -> tuple[bool, Any]:
        # Missing values order before any value, so they come last when descending
        value = getattr(listing, sort.field.value)
        return (value is not None, value)
