from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from autotrader.domain.errors import ValidationError
from autotrader.domain.sorting import DEFAULT_SORT_KEY

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Transmission value meaning "no preference"
ALL_TRANSMISSIONS = "All"


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


class FilterValidationError(ValidationError):
    """Raised when filter parameters are invalid."""

    pass


# ==============================================================================
# Records
# ==============================================================================


@dataclass(frozen=True, slots=True)
class Badge:
    id: str
    name: str
    color: str | None = None


@dataclass(frozen=True, slots=True)
class CarListing:
    """Flat, read-optimized listing record.

    Related entities (make, model, trim, ...) are already resolved to their
    display names, so a listing can be rendered without further lookups.
    """

    id: str
    make_name: str
    model_name: str
    year: int
    price: Decimal
    mileage: int = 0
    trim_name: str | None = None
    body_type_name: str | None = None
    body_type_icon: str | None = None
    transmission_type: str | None = None
    condition_name: str | None = None
    dealer_name: str | None = None
    dealer_location: str | None = None
    image_url: str | None = None
    badges: tuple[Badge, ...] = ()
    is_featured: bool = False
    is_sold: bool = False
    views_count: int = 0
    created_at: datetime | None = None


# ==============================================================================
# Criteria
# ==============================================================================


@dataclass(frozen=True, slots=True)
class PageRequest:
    """1-based page request."""

    page: int = 1
    size: int = DEFAULT_PAGE_SIZE

    def validate(self, max_size: int = MAX_PAGE_SIZE) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.page < 1:
            raise PagingValidationError("page must be >= 1")
        if self.size < 1:
            raise PagingValidationError("size must be >= 1")
        if self.size > max_size:
            raise PagingValidationError(f"size must be <= {max_size}")


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Search criteria. Every filter is optional; absent means unconstrained."""

    value: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    selected_make: str | None = None
    selected_model: str | None = None
    selected_trim: str | None = None
    selected_body_types: frozenset[str] | None = None
    selected_transmission: str | None = None
    sort: str = DEFAULT_SORT_KEY
    paging: PageRequest = field(default_factory=PageRequest)

    @property
    def has_inverted_price_range(self) -> bool:
        return (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        )

    def validate(self) -> None:
        """
        Validate filter parameters that do not depend on configuration.

        The price range check is toggleable and is done by the search use case.

        Raises:
            FilterValidationError: If filter parameters are invalid
        """
        # Guardrails: prevent float leakage past boundary
        if self.min_price is not None and not isinstance(self.min_price, Decimal):
            raise FilterValidationError(
                "min_price must be Decimal or None (no floats past the boundary)"
            )
        if self.max_price is not None and not isinstance(self.max_price, Decimal):
            raise FilterValidationError(
                "max_price must be Decimal or None (no floats past the boundary)"
            )
