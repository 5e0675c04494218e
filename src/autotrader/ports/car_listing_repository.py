from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from autotrader.domain.listing import CarListing
from autotrader.domain.predicates import PredicateBuilder
from autotrader.domain.sorting import NEWEST_FIRST, SortSpec


@dataclass(frozen=True, slots=True)
class SliceRequest:
    """0-based slice of a result set, as data sources understand it."""

    index: int
    size: int
    sort: SortSpec = NEWEST_FIRST

    @property
    def offset(self) -> int:
        return self.index * self.size


@dataclass(frozen=True)
class ListingSlice:
    """Result from a listing search including the authoritative total."""

    listings: list[CarListing]
    total_count: int  # Total matching listings before paging


class CarListingRepository(ABC):
    """
    Port for listing data access.

    The repository decides which storage layout is queried; callers compile
    criteria with ``predicate_builder`` and hand the result back to ``search``.

    Contract (Preconditions):
        - request.index >= 0 and request.size >= 1 (checked by the use case)
        - Ordering is stable for a fixed predicate, sort and slice while the
          underlying data is unchanged
    """

    @property
    @abstractmethod
    def predicate_builder(self) -> PredicateBuilder[Any]:
        """Builder for predicates this repository can execute."""
        ...

    @abstractmethod
    def search(self, predicate: Any, request: SliceRequest) -> ListingSlice:
        """
        Run a compiled predicate and return one slice plus the total count.

        Args:
            predicate: Expression produced by ``predicate_builder``
            request: 0-based slice and sort

        Returns:
            ListingSlice containing the listings of the slice and the total count
        """
        ...

    @abstractmethod
    def get_by_id(self, listing_id: str) -> CarListing | None:
        """Return the listing, or None if it does not exist."""
        ...
