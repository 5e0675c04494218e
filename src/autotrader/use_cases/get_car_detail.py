"""Get car detail use case."""

from __future__ import annotations

from uuid import UUID

from autotrader.domain.errors import NotFoundError, ValidationError
from autotrader.domain.failure import Failure
from autotrader.domain.listing import CarListing
from autotrader.domain.outcome import Outcome
from autotrader.ports.car_listing_repository import CarListingRepository
from autotrader.use_cases.execute import execute

DETAIL_FAILED_MESSAGE = "Could not load the car listing. Please try again later."


class GetCarDetail:
    """
    Use case for retrieving a single listing by ID.

    Responsibilities:
    - Validate car_id format (must be valid UUID)
    - Delegate to repository for data access
    - Report a missing listing as a NotFound failure
    """

    def __init__(self, repository: CarListingRepository) -> None:
        """
        Initialize use case with dependencies.

        Args:
            repository: Repository for listing data access
        """
        self._repository = repository

    def execute(self, car_id: str) -> Outcome[Failure, CarListing]:
        """
        Execute the get car detail use case.

        Args:
            car_id: Listing ID (UUID string)

        Returns:
            Succeeded(CarListing), or Failed with a VALIDATION_ERROR failure
            for a malformed id and a NOT_FOUND failure for a missing listing
        """
        return execute(
            lambda: self._get(car_id),
            operation_name="GetCarDetail.execute",
            default_message=DETAIL_FAILED_MESSAGE,
        )

    def _get(self, car_id: str) -> Outcome[Failure, CarListing]:
        try:
            UUID(car_id)
        except ValueError:
            raise ValidationError(
                errors=[
                    {
                        "field": "car_id",
                        "message": "Must be a valid UUID format",
                        "code": "INVALID_UUID",
                    }
                ]
            ) from None

        listing = self._repository.get_by_id(car_id)

        if listing is None:
            raise NotFoundError(resource="Car", identifier=car_id)

        return Outcome.success(listing)
