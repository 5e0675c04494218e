"""Tests for the pagination engine."""

from __future__ import annotations

import pytest

from autotrader.domain.listing import PagingValidationError
from autotrader.domain.page import Page, page_count_for, paginate


# ==============================================================================
# paginate - Boundaries
# ==============================================================================


def test_empty_result_set() -> None:
    """No matches: zero pages, no next page, and the first page is the last."""
    page = paginate([], page=1, page_size=20, total=0)

    assert page.items == ()
    assert page.page_count == 0
    assert page.has_next is False
    assert page.has_previous is False
    assert page.is_last is True


def test_last_partial_page() -> None:
    """Page 3 of 25 items in pages of 10 holds the last 5 items."""
    rows = list(range(20, 25))

    page = paginate(rows, page=3, page_size=10, total=25)

    assert page.page_count == 3
    assert len(page) == 5
    assert page.has_next is False
    assert page.has_previous is True
    assert page.is_last is True


def test_first_full_page() -> None:
    page = paginate(list(range(10)), page=1, page_size=10, total=25)

    assert page.page_count == 3
    assert page.has_next is True
    assert page.has_previous is False
    assert page.is_last is False


def test_page_past_the_end_is_empty_not_an_error() -> None:
    page = paginate([], page=9, page_size=10, total=25)

    assert page.items == ()
    assert page.page == 9
    assert page.has_next is False
    assert page.is_last is True


def test_items_keep_data_source_order() -> None:
    page = paginate(["c", "a", "b"], page=1, page_size=3, total=3)

    assert page.items == ("c", "a", "b")


@pytest.mark.parametrize(
    ("total", "page_size", "expected"),
    [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (25, 10, 3), (100, 1, 100)],
)
def test_page_count_is_ceiling_division(total: int, page_size: int, expected: int) -> None:
    assert page_count_for(total, page_size) == expected


def test_rejects_non_positive_page_size() -> None:
    with pytest.raises(PagingValidationError):
        paginate([], page=1, page_size=0, total=0)


def test_rejects_negative_total() -> None:
    with pytest.raises(PagingValidationError):
        paginate([], page=1, page_size=10, total=-1)


# ==============================================================================
# map / filter
# ==============================================================================


@pytest.fixture()
def page() -> Page[int]:
    return paginate([1, 2, 3, 4], page=2, page_size=4, total=12)


def test_map_keeps_metadata(page: Page[int]) -> None:
    mapped = page.map(str)

    assert mapped.items == ("1", "2", "3", "4")
    assert (mapped.page, mapped.page_size, mapped.total, mapped.page_count) == (2, 4, 12, 3)


def test_filter_does_not_recompute_totals(page: Page[int]) -> None:
    """Filtering is local to this page; total and page_count are carried over."""
    filtered = page.filter(lambda item: item % 2 == 0)

    assert filtered.items == (2, 4)
    assert filtered.total == 12
    assert filtered.page_count == 3


def test_repr_does_not_dump_items(page: Page[int]) -> None:
    assert "4 items" in repr(page)
