"""Tests for listing criteria validation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from autotrader.domain.errors import ValidationError
from autotrader.domain.listing import (
    FilterCriteria,
    FilterValidationError,
    PageRequest,
    PagingValidationError,
)


# ==============================================================================
# PageRequest
# ==============================================================================


def test_page_request_defaults() -> None:
    paging = PageRequest()

    assert (paging.page, paging.size) == (1, 20)
    paging.validate()


@pytest.mark.parametrize(
    ("page", "size", "message"),
    [
        (0, 20, "page must be >= 1"),
        (-1, 20, "page must be >= 1"),
        (1, 0, "size must be >= 1"),
        (1, 101, "size must be <= 100"),
    ],
)
def test_page_request_rejects_invalid_values(page: int, size: int, message: str) -> None:
    with pytest.raises(PagingValidationError, match=message):
        PageRequest(page=page, size=size).validate()


def test_page_request_respects_configured_max() -> None:
    PageRequest(size=50).validate(max_size=50)

    with pytest.raises(PagingValidationError, match="size must be <= 50"):
        PageRequest(size=51).validate(max_size=50)


def test_paging_errors_are_validation_errors() -> None:
    """Paging errors classify as Validation failures."""
    assert issubclass(PagingValidationError, ValidationError)
    assert issubclass(FilterValidationError, ValidationError)


# ==============================================================================
# FilterCriteria
# ==============================================================================


def test_empty_criteria_is_valid() -> None:
    criteria = FilterCriteria()

    criteria.validate()
    assert criteria.sort == "relevance"
    assert criteria.has_inverted_price_range is False


@pytest.mark.parametrize(
    ("min_price", "max_price", "inverted"),
    [
        (Decimal("30000"), Decimal("20000"), True),
        (Decimal("20000"), Decimal("30000"), False),
        (Decimal("20000"), Decimal("20000"), False),
        (Decimal("20000"), None, False),
        (None, Decimal("20000"), False),
    ],
)
def test_inverted_price_range(
    min_price: Decimal | None, max_price: Decimal | None, inverted: bool
) -> None:
    criteria = FilterCriteria(min_price=min_price, max_price=max_price)

    assert criteria.has_inverted_price_range is inverted


def test_rejects_float_prices() -> None:
    """Floats never cross into the domain."""
    with pytest.raises(FilterValidationError, match="min_price must be Decimal"):
        FilterCriteria(min_price=20000.0).validate()  # type: ignore[arg-type]

    with pytest.raises(FilterValidationError, match="max_price must be Decimal"):
        FilterCriteria(max_price=30000.0).validate()  # type: ignore[arg-type]
