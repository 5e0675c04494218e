from __future__ import annotations

from decimal import Decimal, InvalidOperation

from autotrader.domain.errors import ValidationError
from autotrader.domain.listing import DEFAULT_PAGE_SIZE, CarListing, FilterCriteria, PageRequest
from autotrader.domain.page import Page
from autotrader.entrypoints.http.dtos.car_listings import (
    BadgeDTO,
    CarListingDTO,
    CarListingsPageDTO,
    CarListingsSearchQueryDTO,
)


class CarListingMapper:
    """Maps between REST DTOs and domain models for car listings."""

    @staticmethod
    def to_decimal(field: str, raw: str | None) -> Decimal | None:
        """
        Parse a decimal query value.

        Raises:
            ValidationError: If the value is not a finite decimal
        """
        if raw is None or not raw.strip():
            return None

        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            value = None

        if value is None or not value.is_finite():
            raise ValidationError(
                errors=[
                    {
                        "field": field,
                        "message": "Must be a valid decimal",
                        "code": "INVALID_DECIMAL",
                    }
                ]
            )
        return value

    @staticmethod
    def to_body_types(raw: str | None) -> frozenset[str] | None:
        """Split a comma-separated list, dropping blank entries."""
        if raw is None:
            return None

        body_types = frozenset(part.strip() for part in raw.split(",") if part.strip())
        return body_types or None

    @staticmethod
    def to_criteria(
        dto: CarListingsSearchQueryDTO, default_page_size: int = DEFAULT_PAGE_SIZE
    ) -> FilterCriteria:
        """
        Converts query params to domain criteria, handling Decimal conversion.

        Args:
            dto: The data transfer object containing search query parameters
            default_page_size: Page size used when the request gives none

        Returns:
            FilterCriteria: Domain criteria with Decimal prices and 1-based paging
        """
        return FilterCriteria(
            value=dto.value,
            min_price=CarListingMapper.to_decimal("min_price", dto.min_price),
            max_price=CarListingMapper.to_decimal("max_price", dto.max_price),
            selected_make=dto.make,
            selected_model=dto.model,
            selected_trim=dto.trim,
            selected_body_types=CarListingMapper.to_body_types(dto.body_types),
            selected_transmission=dto.transmission,
            sort=dto.sort,
            paging=PageRequest(
                page=dto.page,
                size=dto.size if dto.size is not None else default_page_size,
            ),
        )

    @staticmethod
    def to_listing_response(listing: CarListing) -> CarListingDTO:
        """
        Converts a domain CarListing to its REST response DTO.

        Handles Decimal → str conversion at the boundary.
        """
        return CarListingDTO(
            id=listing.id,
            make=listing.make_name,
            model=listing.model_name,
            year=listing.year,
            price=str(listing.price),  # Decimal → str at boundary
            mileage=listing.mileage,
            trim=listing.trim_name,
            body_type=listing.body_type_name,
            body_type_icon=listing.body_type_icon,
            transmission=listing.transmission_type,
            condition=listing.condition_name,
            dealer_name=listing.dealer_name,
            dealer_location=listing.dealer_location,
            image_url=listing.image_url,
            badges=[
                BadgeDTO(id=badge.id, name=badge.name, color=badge.color)
                for badge in listing.badges
            ],
            is_featured=listing.is_featured,
            views_count=listing.views_count,
            created_at=listing.created_at,
        )

    @staticmethod
    def to_page_response(page: Page[CarListing]) -> CarListingsPageDTO:
        """Converts a domain Page to the REST page envelope."""
        return CarListingsPageDTO(
            items=list(page.map(CarListingMapper.to_listing_response).items),
            page=page.page,
            page_size=page.page_size,
            page_count=page.page_count,
            total=page.total,
            has_next=page.has_next,
            has_previous=page.has_previous,
            is_last=page.is_last,
        )
