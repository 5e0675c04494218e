"""
Test suite for SearchCarListings use case.

Verifies:
- Criteria and paging are validated before the repository is touched
- Inverted price ranges are rejected (when enabled) with INVALID_PRICE_RANGE
- The repository receives a 0-based slice and the resolved sort
- The result is wrapped into a Page with correct metadata
- Repository faults come back as classified failures
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from autotrader.adapters.in_memory_car_listing_repository import InMemoryCarListingRepository
from autotrader.adapters.in_memory_predicate_builder import InMemoryPredicateBuilder
from autotrader.config import ListingSettings
from autotrader.domain.failure import FailureKind
from autotrader.domain.listing import CarListing, FilterCriteria, PageRequest
from autotrader.domain.sorting import NEWEST_FIRST, SortDirection, SortField, SortSpec
from autotrader.ports.car_listing_repository import (
    CarListingRepository,
    ListingSlice,
    SliceRequest,
)
from autotrader.use_cases.execute import DATABASE_ERROR_MESSAGE
from autotrader.use_cases.search_car_listings import (
    INVALID_PRICE_RANGE_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    SearchCarListings,
)


@pytest.fixture()
def settings() -> ListingSettings:
    return ListingSettings()


@pytest.fixture()
def mock_repository() -> Mock:
    """Mock repository for testing the use case in isolation."""
    repository = Mock(spec=CarListingRepository)
    repository.predicate_builder = InMemoryPredicateBuilder()
    repository.search.return_value = ListingSlice(listings=[], total_count=0)
    return repository


@pytest.fixture()
def listings() -> list[CarListing]:
    return [
        CarListing(
            id=f"{index:02d}",
            make_name="Toyota" if index % 2 else "Honda",
            model_name="Camry" if index % 2 else "Civic",
            year=2015 + index % 8,
            price=Decimal(15000 + index * 500),
            mileage=index * 1000,
        )
        for index in range(1, 26)
    ]


# ==============================================================================
# Happy Path
# ==============================================================================


def test_search_returns_page(mock_repository: Mock, settings: ListingSettings) -> None:
    listing = CarListing(id="1", make_name="Toyota", model_name="Camry", year=2020, price=Decimal("20000"))
    mock_repository.search.return_value = ListingSlice(listings=[listing], total_count=41)
    use_case = SearchCarListings(mock_repository, settings)

    outcome = use_case.execute(FilterCriteria(paging=PageRequest(page=2, size=20)))

    page = outcome.value_or_none()
    assert page is not None
    assert page.items == (listing,)
    assert (page.page, page.page_size, page.total, page.page_count) == (2, 20, 41, 3)


def test_repository_receives_zero_based_slice(mock_repository: Mock, settings: ListingSettings) -> None:
    use_case = SearchCarListings(mock_repository, settings)

    use_case.execute(FilterCriteria(sort="price-desc", paging=PageRequest(page=3, size=10)))

    _, request = mock_repository.search.call_args.args
    assert request == SliceRequest(
        index=2, size=10, sort=SortSpec(SortField.PRICE, SortDirection.DESC)
    )
    assert request.offset == 20


def test_unknown_sort_falls_back_to_newest_first(
    mock_repository: Mock, settings: ListingSettings
) -> None:
    use_case = SearchCarListings(mock_repository, settings)

    use_case.execute(FilterCriteria(sort="best-deals"))

    _, request = mock_repository.search.call_args.args
    assert request.sort == NEWEST_FIRST


def test_end_to_end_with_in_memory_repository(
    listings: list[CarListing], settings: ListingSettings
) -> None:
    use_case = SearchCarListings(InMemoryCarListingRepository(listings), settings)

    outcome = use_case.execute(
        FilterCriteria(
            selected_make="toyota",
            sort="price-asc",
            paging=PageRequest(page=2, size=5),
        )
    )

    page = outcome.value_or_none()
    assert page is not None
    # 13 odd-indexed Toyotas, priced by index
    assert page.total == 13
    assert page.page_count == 3
    assert [listing.id for listing in page.items] == ["11", "13", "15", "17", "19"]


def test_page_past_the_end_is_empty(listings: list[CarListing], settings: ListingSettings) -> None:
    use_case = SearchCarListings(InMemoryCarListingRepository(listings), settings)

    page = use_case.execute(FilterCriteria(paging=PageRequest(page=10, size=20))).value_or_none()

    assert page is not None
    assert page.items == ()
    assert page.total == 25
    assert page.has_next is False


# ==============================================================================
# Validation
# ==============================================================================


def test_inverted_price_range_is_rejected(mock_repository: Mock, settings: ListingSettings) -> None:
    use_case = SearchCarListings(mock_repository, settings)

    outcome = use_case.execute(
        FilterCriteria(min_price=Decimal("30000"), max_price=Decimal("20000"))
    )

    failure = outcome.failure_or_none()
    assert failure is not None
    assert failure.kind is FailureKind.VALIDATION
    assert failure.code == "INVALID_PRICE_RANGE"
    assert failure.status_code == 400
    assert failure.message == INVALID_PRICE_RANGE_MESSAGE
    mock_repository.search.assert_not_called()


def test_price_range_check_can_be_disabled(mock_repository: Mock) -> None:
    """With the check off, an inverted range simply matches nothing."""
    use_case = SearchCarListings(mock_repository, ListingSettings(validate_price_range=False))

    outcome = use_case.execute(
        FilterCriteria(min_price=Decimal("30000"), max_price=Decimal("20000"))
    )

    assert outcome.is_success
    mock_repository.search.assert_called_once()


def test_equal_prices_are_allowed(mock_repository: Mock, settings: ListingSettings) -> None:
    use_case = SearchCarListings(mock_repository, settings)

    outcome = use_case.execute(
        FilterCriteria(min_price=Decimal("20000"), max_price=Decimal("20000"))
    )

    assert outcome.is_success


@pytest.mark.parametrize("paging", [PageRequest(page=0), PageRequest(size=0), PageRequest(size=101)])
def test_invalid_paging_is_a_validation_failure(
    mock_repository: Mock, settings: ListingSettings, paging: PageRequest
) -> None:
    use_case = SearchCarListings(mock_repository, settings)

    failure = use_case.execute(FilterCriteria(paging=paging)).failure_or_none()

    assert failure is not None
    assert failure.kind is FailureKind.VALIDATION
    assert failure.status_code == 400
    mock_repository.search.assert_not_called()


def test_configured_max_page_size_applies(mock_repository: Mock) -> None:
    use_case = SearchCarListings(mock_repository, ListingSettings(max_page_size=25))

    failure = use_case.execute(FilterCriteria(paging=PageRequest(size=30))).failure_or_none()

    assert failure is not None
    assert failure.message == "size must be <= 25"


def test_float_price_is_a_validation_failure(mock_repository: Mock, settings: ListingSettings) -> None:
    use_case = SearchCarListings(mock_repository, settings)

    outcome = use_case.execute(FilterCriteria(min_price=100.0))  # type: ignore[arg-type]

    assert outcome.failure_or_none().kind is FailureKind.VALIDATION


# ==============================================================================
# Repository Faults
# ==============================================================================


def test_database_fault_is_a_server_failure(mock_repository: Mock, settings: ListingSettings) -> None:
    mock_repository.search.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
    use_case = SearchCarListings(mock_repository, settings)

    failure = use_case.execute(FilterCriteria()).failure_or_none()

    assert failure is not None
    assert failure.kind is FailureKind.SERVER
    assert failure.message == DATABASE_ERROR_MESSAGE


def test_unexpected_fault_is_unknown(mock_repository: Mock, settings: ListingSettings) -> None:
    mock_repository.search.side_effect = RuntimeError("bug")
    use_case = SearchCarListings(mock_repository, settings)

    failure = use_case.execute(FilterCriteria()).failure_or_none()

    assert failure is not None
    assert failure.kind is FailureKind.UNKNOWN
    assert failure.message == SEARCH_FAILED_MESSAGE
