"""PostgreSQL implementation of CarListingRepository over the normalized tables."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy.sql.elements import ColumnElement

from autotrader.adapters.sql_predicate_builders import NormalizedSqlPredicateBuilder
from autotrader.domain.listing import Badge, CarListing
from autotrader.domain.sorting import SortField, SortSpec
from autotrader.infra.db.models.car import CarRow
from autotrader.ports.car_listing_repository import (
    CarListingRepository,
    ListingSlice,
    SliceRequest,
)

_SORT_COLUMNS = {
    SortField.CREATED_AT: CarRow.created_at,
    SortField.PRICE: CarRow.price,
    SortField.YEAR: CarRow.year,
    SortField.MILEAGE: CarRow.mileage,
}

_LOAD_OPTIONS = (
    joinedload(CarRow.make),
    joinedload(CarRow.model),
    joinedload(CarRow.trim),
    joinedload(CarRow.body_type),
    joinedload(CarRow.transmission),
    joinedload(CarRow.condition),
    joinedload(CarRow.dealer),
    selectinload(CarRow.badges),
)


class PostgresCarRepository(CarListingRepository):
    """
    Repository backed by the normalized ``cars`` table and its lookup tables.

    - Dimension filters are matched by name through EXISTS joins
    - Related rows are eager-loaded, so converting to CarListing never lazy-loads
    - Serves the single-listing lookup, which must also see sold cars
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._predicate_builder = NormalizedSqlPredicateBuilder()

    @property
    def predicate_builder(self) -> NormalizedSqlPredicateBuilder:
        return self._predicate_builder

    def search(self, predicate: ColumnElement[bool], request: SliceRequest) -> ListingSlice:
        count_query = select(func.count()).select_from(
            select(CarRow.id).where(predicate).subquery()
        )
        total_count = self._session.execute(count_query).scalar() or 0

        query = (
            select(CarRow)
            .where(predicate)
            .options(*_LOAD_OPTIONS)
            .order_by(*self._order_by(request.sort))
            .offset(request.offset)
            .limit(request.size)
        )

        rows = self._session.execute(query).unique().scalars().all()
        listings = [self._to_domain(row) for row in rows]

        return ListingSlice(listings=listings, total_count=total_count)

    def get_by_id(self, listing_id: str) -> CarListing | None:
        try:
            query = select(CarRow).where(CarRow.id == UUID(listing_id)).options(*_LOAD_OPTIONS)
            row = self._session.execute(query).unique().scalar_one_or_none()
            return self._to_domain(row) if row else None
        except ValueError:  # Invalid UUID format
            return None

    @staticmethod
    def _order_by(sort: SortSpec) -> list[Any]:
        column = _SORT_COLUMNS[sort.field]
        primary = column.desc() if sort.descending else column.asc()
        return [primary, CarRow.id.asc()]

    def _to_domain(self, row: CarRow) -> CarListing:
        """Flatten a CarRow and its related rows into a CarListing."""
        return CarListing(
            id=str(row.id),
            make_name=row.make.name,
            model_name=row.model.name,
            year=row.year,
            price=row.price,
            mileage=row.mileage,
            trim_name=row.trim.name if row.trim else None,
            body_type_name=row.body_type.name if row.body_type else None,
            body_type_icon=row.body_type.icon if row.body_type else None,
            transmission_type=row.transmission.type if row.transmission else None,
            condition_name=row.condition.name if row.condition else None,
            dealer_name=row.dealer.name if row.dealer else None,
            dealer_location=row.dealer.location if row.dealer else None,
            image_url=row.image_url,
            badges=tuple(
                Badge(id=str(badge.id), name=badge.name, color=badge.color)
                for badge in sorted(row.badges, key=lambda badge: badge.name)
            ),
            is_featured=bool(row.is_featured),
            is_sold=bool(row.is_sold),
            views_count=row.views_count or 0,
            created_at=row.created_at,
        )
