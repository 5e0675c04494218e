from __future__ import annotations

import logging

from autotrader.config import ListingSettings
from autotrader.domain.failure import Failure
from autotrader.domain.listing import CarListing, FilterCriteria
from autotrader.domain.outcome import Outcome
from autotrader.domain.page import Page, paginate
from autotrader.domain.predicates import compile_criteria
from autotrader.domain.sorting import resolve_sort
from autotrader.ports.car_listing_repository import CarListingRepository, SliceRequest
from autotrader.use_cases.execute import execute

logger = logging.getLogger(__name__)

INVALID_PRICE_RANGE_MESSAGE = "Max price must be greater than min price"
SEARCH_FAILED_MESSAGE = "Could not search car listings. Please try again later."


class SearchCarListings:
    """
    Search car listings with filters, sorting and pagination.

    Validates the criteria, compiles them into a predicate for whichever
    storage layout the repository queries, and wraps the slice it returns
    into a Page. Every fault, raised or returned, ends up as a Failed outcome.
    """

    def __init__(self, repository: CarListingRepository, settings: ListingSettings) -> None:
        self._repository = repository
        self._settings = settings

    def execute(self, criteria: FilterCriteria) -> Outcome[Failure, Page[CarListing]]:
        """
        Execute listing search.

        Args:
            criteria: Filters, sort key and 1-based paging

        Returns:
            Succeeded(Page[CarListing]) or Failed(Failure)
        """
        return execute(
            lambda: self._search(criteria),
            operation_name="SearchCarListings.execute",
            default_message=SEARCH_FAILED_MESSAGE,
        )

    def _search(self, criteria: FilterCriteria) -> Outcome[Failure, Page[CarListing]]:
        criteria.validate()
        criteria.paging.validate(self._settings.max_page_size)

        if self._settings.validate_price_range and criteria.has_inverted_price_range:
            return Outcome.failure(
                Failure.validation(INVALID_PRICE_RANGE_MESSAGE, code="INVALID_PRICE_RANGE")
            )

        predicate = compile_criteria(criteria, self._repository.predicate_builder)
        sort = resolve_sort(criteria.sort)

        logger.info(
            "Searching car listings",
            extra={
                "clauses": len(predicate),
                "sort": f"{sort.field.value} {sort.direction.value}",
                "page": criteria.paging.page,
                "size": criteria.paging.size,
            },
        )

        # Pages are 1-based here, repositories take a 0-based index
        request = SliceRequest(
            index=max(criteria.paging.page - 1, 0),
            size=criteria.paging.size,
            sort=sort,
        )
        result = self._repository.search(predicate.expression, request)

        return Outcome.success(
            paginate(
                result.listings,
                page=criteria.paging.page,
                page_size=criteria.paging.size,
                total=result.total_count,
            )
        )
