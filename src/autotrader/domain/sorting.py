"""Sort side table.

Maps the public sort keys to a (field, direction) pair. There is no
relevance scoring: "relevance" is an alias for newest-first, which is also
what any absent or unrecognized key resolves to.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortField(str, Enum):
    CREATED_AT = "created_at"
    PRICE = "price"
    YEAR = "year"
    MILEAGE = "mileage"


class SortOption(str, Enum):
    RELEVANCE = "relevance"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    YEAR_ASC = "year-asc"
    YEAR_DESC = "year-desc"
    MILEAGE_ASC = "mileage-asc"
    MILEAGE_DESC = "mileage-desc"

    @classmethod
    def from_value(cls, value: str | None) -> SortOption:
        for option in cls:
            if option.value == value:
                return option
        return cls.RELEVANCE


DEFAULT_SORT_KEY = SortOption.RELEVANCE.value


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: SortField
    direction: SortDirection

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


NEWEST_FIRST = SortSpec(SortField.CREATED_AT, SortDirection.DESC)

_SORT_TABLE: dict[SortOption, SortSpec] = {
    SortOption.RELEVANCE: NEWEST_FIRST,
    SortOption.PRICE_ASC: SortSpec(SortField.PRICE, SortDirection.ASC),
    SortOption.PRICE_DESC: SortSpec(SortField.PRICE, SortDirection.DESC),
    SortOption.YEAR_ASC: SortSpec(SortField.YEAR, SortDirection.ASC),
    SortOption.YEAR_DESC: SortSpec(SortField.YEAR, SortDirection.DESC),
    SortOption.MILEAGE_ASC: SortSpec(SortField.MILEAGE, SortDirection.ASC),
    SortOption.MILEAGE_DESC: SortSpec(SortField.MILEAGE, SortDirection.DESC),
}


def resolve_sort(key: str | None) -> SortSpec:
    """Resolve a public sort key; absent or unknown keys fall back to newest first."""
    return _SORT_TABLE[SortOption.from_value(key)]
