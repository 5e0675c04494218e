"""PostgreSQL implementation of CarListingRepository over the ``car_listings`` view."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from autotrader.adapters.sql_predicate_builders import DenormalizedSqlPredicateBuilder
from autotrader.domain.listing import Badge, CarListing
from autotrader.domain.sorting import SortField, SortSpec
from autotrader.infra.db.models.car_listing import CarListingRow
from autotrader.ports.car_listing_repository import (
    CarListingRepository,
    ListingSlice,
    SliceRequest,
)

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    SortField.CREATED_AT: CarListingRow.created_at,
    SortField.PRICE: CarListingRow.price,
    SortField.YEAR: CarListingRow.year,
    SortField.MILEAGE: CarListingRow.mileage,
}


class PostgresCarListingRepository(CarListingRepository):
    """
    Read repository backed by the denormalized ``car_listings`` view.

    - All dimensions are pre-joined in the view: one query per page, no lazy loading
    - Applies the compiled predicate as a SQL WHERE clause
    - Returns total_count via COUNT(*) query
    - Converts CarListingRow (infrastructure) to CarListing (domain)
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session
        self._predicate_builder = DenormalizedSqlPredicateBuilder()

    @property
    def predicate_builder(self) -> DenormalizedSqlPredicateBuilder:
        return self._predicate_builder

    def search(self, predicate: ColumnElement[bool], request: SliceRequest) -> ListingSlice:
        """
        Search listings with a compiled predicate and a 0-based slice.

        Executes two queries:
        1. COUNT(*) to get total matching listings (before paging)
        2. SELECT with ORDER BY/OFFSET/LIMIT to get the slice

        Args:
            predicate: Expression built by ``predicate_builder``
            request: Slice and sort (pre-validated by the use case)

        Returns:
            ListingSlice with listings and total_count
        """
        query = select(CarListingRow).where(predicate)

        count_query = select(func.count()).select_from(query.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        query = (
            query.order_by(*self._order_by(request.sort))
            .offset(request.offset)
            .limit(request.size)
        )

        rows = self._session.execute(query).scalars().all()
        listings = [self._to_domain(row) for row in rows]

        return ListingSlice(listings=listings, total_count=total_count)

    def get_by_id(self, listing_id: str) -> CarListing | None:
        """
        Get listing by ID.

        Args:
            listing_id: Listing ID (expected to be a valid UUID string)

        Returns:
            CarListing if found, None otherwise
        """
        try:
            query = select(CarListingRow).where(CarListingRow.id == UUID(listing_id))
            row = self._session.execute(query).scalar_one_or_none()
            return self._to_domain(row) if row else None
        except ValueError:  # Invalid UUID format
            return None

    @staticmethod
    def _order_by(sort: SortSpec) -> list[Any]:
        column = _SORT_COLUMNS[sort.field]
        primary = column.desc() if sort.descending else column.asc()
        # id as tie-breaker keeps page boundaries stable
        return [primary, CarListingRow.id.asc()]

    def _to_domain(self, row: CarListingRow) -> CarListing:
        """
        Convert view row (CarListingRow) to domain record (CarListing).

        Args:
            row: SQLAlchemy CarListingRow model

        Returns:
            CarListing domain record
        """
        return CarListing(
            id=str(row.id),  # Convert UUID to string
            make_name=row.make_name,
            model_name=row.model_name,
            year=row.year,
            price=row.price,  # Already Decimal from NUMERIC column
            mileage=row.mileage,
            trim_name=row.trim_name,
            body_type_name=row.body_type_name,
            body_type_icon=row.body_type_icon,
            transmission_type=row.transmission_type,
            condition_name=row.condition_name,
            dealer_name=row.dealer_name,
            dealer_location=row.dealer_location,
            image_url=row.image_url,
            badges=self._parse_badges(row.badges),
            is_featured=bool(row.is_featured),
            is_sold=bool(row.is_sold),
            views_count=row.views_count or 0,
            created_at=row.created_at,
        )

    @staticmethod
    def _parse_badges(raw: list[dict[str, Any]] | None) -> tuple[Badge, ...]:
        """
        Parse the badges JSON aggregate from the view.

        View returns: [{"id": "uuid", "name": "Great Price", "color": "#10B981"}]
        Malformed entries are skipped rather than failing the whole page.
        """
        if not raw:
            return ()

        badges = []
        for entry in raw:
            if not isinstance(entry, dict) or not entry.get("id") or not entry.get("name"):
                logger.warning("Skipping malformed badge entry", extra={"badge": entry})
                continue
            badges.append(Badge(id=str(entry["id"]), name=entry["name"], color=entry.get("color")))
        return tuple(badges)
