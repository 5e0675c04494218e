"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons should use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from autotrader.adapters.postgres_car_listing_repository import PostgresCarListingRepository
from autotrader.adapters.postgres_car_repository import PostgresCarRepository
from autotrader.config import ListingSettings, listing_settings
from autotrader.infra.db.session import get_session
from autotrader.use_cases.get_car_detail import GetCarDetail
from autotrader.use_cases.search_car_listings import SearchCarListings


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    FastAPI will:
    1. Call this function when a request starts
    2. Inject the session into the route
    3. Commit/rollback and close the session when the request ends

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


@lru_cache
def get_listing_settings() -> ListingSettings:
    """Listing settings, read from the environment once per process."""
    return listing_settings()


def get_search_car_listings_use_case(
    db: Session = Depends(get_db),
    settings: ListingSettings = Depends(get_listing_settings),
) -> SearchCarListings:
    """
    Factory function that returns a configured SearchCarListings use case.

    Searches run against the denormalized ``car_listings`` view.

    Args:
        db: Database session (injected by FastAPI via Depends(get_db))
        settings: Listing settings

    Returns:
        SearchCarListings: Configured use case instance
    """
    repository = PostgresCarListingRepository(session=db)
    return SearchCarListings(repository=repository, settings=settings)


def get_get_car_detail_use_case(db: Session = Depends(get_db)) -> GetCarDetail:
    """
    Factory function that returns a configured GetCarDetail use case.

    Detail lookups read the normalized tables, so sold cars are still found.

    Args:
        db: Database session (injected by FastAPI via Depends(get_db))

    Returns:
        GetCarDetail: Configured use case instance
    """
    repository = PostgresCarRepository(session=db)
    return GetCarDetail(repository=repository)
