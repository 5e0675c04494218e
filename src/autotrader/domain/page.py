"""Pagination engine.

Pages are 1-based at this layer. Data sources are queried with a 0-based
index; that translation happens once, at the call into the repository.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Generic, Iterable, TypeVar

from autotrader.domain.listing import PagingValidationError

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of results plus metadata.

    ``page`` is never checked against ``page_count``: asking for a page past
    the end legally yields an empty page.
    """

    items: tuple[T, ...]
    page: int
    page_size: int
    total: int
    page_count: int

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def is_last(self) -> bool:
        return self.page >= self.page_count

    def map(self, fn: Callable[[T], R]) -> Page[R]:
        """Transform every item 1:1, keeping all metadata."""
        return Page(
            items=tuple(fn(item) for item in self.items),
            page=self.page,
            page_size=self.page_size,
            total=self.total,
            page_count=self.page_count,
        )

    def filter(self, predicate: Callable[[T], bool]) -> Page[T]:
        """Keep the matching items.

        Note: total and page_count are carried over from this page, not
        recomputed from the filtered items.
        """
        return replace(self, items=tuple(item for item in self.items if predicate(item)))

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return (
            f"Page(items={len(self.items)} items, page={self.page}, "
            f"page_size={self.page_size}, page_count={self.page_count}, total={self.total})"
        )


def page_count_for(total: int, page_size: int) -> int:
    """ceil(total / page_size); 0 when there is nothing to page."""
    if page_size < 1:
        raise PagingValidationError("page_size must be >= 1")
    if total < 0:
        raise PagingValidationError("total must be >= 0")
    return -(-total // page_size)


def paginate(rows: Iterable[T], page: int, page_size: int, total: int) -> Page[T]:
    """
    Wrap one page of rows fetched from a data source.

    Args:
        rows: Items in data-source order (kept as-is)
        page: 1-based page number that was requested
        page_size: Requested page size
        total: Authoritative number of matching items across all pages

    Returns:
        Page with derived page_count

    Raises:
        PagingValidationError: If page_size < 1 or total < 0
    """
    return Page(
        items=tuple(rows),
        page=page,
        page_size=page_size,
        total=total,
        page_count=page_count_for(total, page_size),
    )
