from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from autotrader.config import ListingSettings
from autotrader.entrypoints.http.dependencies import (
    get_get_car_detail_use_case,
    get_listing_settings,
    get_search_car_listings_use_case,
)
from autotrader.entrypoints.http.dtos.car_listings import (
    CarListingDTO,
    CarListingsPageDTO,
    CarListingsSearchQueryDTO,
)
from autotrader.entrypoints.http.error_responses import ApiResponse, ErrorResponse
from autotrader.entrypoints.http.mappers.car_listing_mapper import CarListingMapper
from autotrader.entrypoints.http.outcome_responses import to_response
from autotrader.use_cases.get_car_detail import GetCarDetail
from autotrader.use_cases.search_car_listings import SearchCarListings

router = APIRouter(tags=["Cars"])


@router.get(
    "/cars/search",
    response_model=ApiResponse[CarListingsPageDTO],
    summary="Search car listings",
    description="""
    Search for listings with optional filters, sorting and pagination.

    ## Filters
    - All filters use AND semantics; sold listings are never returned
    - value: case-insensitive substring of make, model or trim
    - make/model/trim/transmission: case-insensitive exact match
    - body_types: comma-separated, any may match
    - min_price/max_price: inclusive range

    ## Sorting
    - relevance (default, newest first), price-asc, price-desc,
      year-asc, year-desc, mileage-asc, mileage-desc

    ## Pagination
    - page is 1-based
    - Default size: LISTINGS_DEFAULT_PAGE_SIZE (20)
    - Max size: LISTINGS_MAX_PAGE_SIZE (100)

    ## Example
    ```
    GET /v1/cars/search?value=camry&max_price=30000.00&sort=price-asc&page=2
    ```
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid filters or paging"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
)
def search_cars(
    query: Annotated[CarListingsSearchQueryDTO, Query()],
    use_case: SearchCarListings = Depends(get_search_car_listings_use_case),
    settings: ListingSettings = Depends(get_listing_settings),
) -> JSONResponse:
    """Search listings endpoint following parse → execute → map → return pattern."""
    criteria = CarListingMapper.to_criteria(query, default_page_size=settings.default_page_size)

    outcome = use_case.execute(criteria)

    return to_response(
        outcome,
        success_message="Car listings retrieved successfully",
        serialize=CarListingMapper.to_page_response,
    )


@router.get(
    "/cars/{car_id}",
    response_model=ApiResponse[CarListingDTO],
    summary="Get car listing",
    description="Get a single listing by its UUID.",
    responses={
        400: {"model": ErrorResponse, "description": "Malformed car id"},
        404: {"model": ErrorResponse, "description": "Car not found"},
    },
)
def get_car(
    car_id: str,
    use_case: GetCarDetail = Depends(get_get_car_detail_use_case),
) -> JSONResponse:
    outcome = use_case.execute(car_id)

    return to_response(
        outcome,
        success_message="Car listing retrieved successfully",
        serialize=CarListingMapper.to_listing_response,
    )
