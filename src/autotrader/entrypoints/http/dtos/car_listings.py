from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from autotrader.domain.listing import DEFAULT_PAGE_SIZE
from autotrader.domain.sorting import DEFAULT_SORT_KEY

_DECIMAL_PATTERN = r"^\s*\d+(\.\d{1,2})?\s*$"


class BadgeDTO(BaseModel):
    id: str
    name: str
    color: str | None = None


class CarListingDTO(BaseModel):
    id: str
    make: str
    model: str
    year: int
    price: str
    mileage: int
    trim: str | None = None
    body_type: str | None = None
    body_type_icon: str | None = None
    transmission: str | None = None
    condition: str | None = None
    dealer_name: str | None = None
    dealer_location: str | None = None
    image_url: str | None = None
    badges: list[BadgeDTO] = Field(default_factory=list)
    is_featured: bool = False
    views_count: int = 0
    created_at: datetime | None = None


class CarListingsSearchQueryDTO(BaseModel):
    """Query parameters for searching car listings."""

    value: str | None = Field(
        default=None,
        description="Free text matched against make, model and trim (case-insensitive substring)",
        examples=["civic"],
    )
    min_price: str | None = Field(
        default=None,
        description="Minimum price (inclusive, decimal as string)",
        examples=["20000.00"],
        pattern=_DECIMAL_PATTERN,
    )
    max_price: str | None = Field(
        default=None,
        description="Maximum price (inclusive, decimal as string)",
        examples=["35000.00"],
        pattern=_DECIMAL_PATTERN,
    )
    make: str | None = Field(
        default=None,
        description="Filter by make (case-insensitive exact match)",
        examples=["Toyota"],
    )
    model: str | None = Field(
        default=None,
        description="Filter by model (case-insensitive exact match)",
        examples=["Camry"],
    )
    trim: str | None = Field(
        default=None,
        description="Filter by trim (case-insensitive exact match)",
        examples=["SE"],
    )
    body_types: str | None = Field(
        default=None,
        description="Comma-separated body types, any of which may match",
        examples=["Sedan,SUV"],
    )
    transmission: str | None = Field(
        default=None,
        description='Filter by transmission type; "All" means no preference',
        examples=["Automatic"],
    )
    sort: str = Field(
        default=DEFAULT_SORT_KEY,
        description=(
            "Sort key: relevance, price-asc, price-desc, year-asc, year-desc, "
            "mileage-asc, mileage-desc. Unknown keys sort newest first."
        ),
        examples=["price-asc"],
    )
    page: int = Field(
        default=1,
        description="1-based page number",
        examples=[1],
        ge=1,
    )
    size: int | None = Field(
        default=None,
        description=(
            "Number of listings per page. Defaults to LISTINGS_DEFAULT_PAGE_SIZE; "
            "capped at LISTINGS_MAX_PAGE_SIZE."
        ),
        examples=[DEFAULT_PAGE_SIZE],
        ge=1,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "value": "camry",
                "min_price": "20000.00",
                "max_price": "35000.00",
                "body_types": "Sedan,SUV",
                "transmission": "Automatic",
                "sort": "price-asc",
                "page": 1,
                "size": 20,
            }
        }
    )


class CarListingsPageDTO(BaseModel):
    items: list[CarListingDTO]
    page: int
    page_size: int
    page_count: int
    total: int
    has_next: bool
    has_previous: bool
    is_last: bool
