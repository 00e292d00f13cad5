"""
Property endpoints: filtered search and listing creation.
"""

from fastapi import APIRouter, Depends, status, Query
from typing import Optional

from lightbnb.config import settings
from lightbnb.services.property import PropertyService
from lightbnb.schemas.property import (
    PropertyCreate,
    PropertyResponse,
    PropertySearchFilters,
    PropertySearchResponse
)
from lightbnb.utils.dependencies import get_current_user_id, get_property_service
from lightbnb.schemas.error import get_crud_error_responses, get_search_error_responses


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=PropertySearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Search properties",
    description=(
        "Search reviewed properties, cheapest first. A price range applies only "
        "when both bounds are given; price and rating bounds are exclusive."
    ),
    responses=get_search_error_responses()
)
async def search_properties(
    city: Optional[str] = Query(None, max_length=255, description="Case-insensitive partial city match"),
    owner_id: Optional[int] = Query(None, ge=1, description="Exact owner ID"),
    minimum_price_per_night: Optional[int] = Query(None, ge=0, description="Exclusive lower price bound"),
    maximum_price_per_night: Optional[int] = Query(None, ge=0, description="Exclusive upper price bound"),
    minimum_rating: Optional[float] = Query(None, ge=0, le=5, description="Exclusive lower bound on the average rating"),
    limit: int = Query(
        settings.default_search_limit,
        ge=1,
        le=settings.max_search_limit,
        description="Maximum number of properties"
    ),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertySearchResponse:
    """
    Search properties by city, owner, price range and minimum rating.
    """
    filters = PropertySearchFilters(
        city=city,
        owner_id=owner_id,
        minimum_price_per_night=minimum_price_per_night,
        maximum_price_per_night=maximum_price_per_night,
        minimum_rating=minimum_rating
    )

    results = await property_service.search_properties(filters.to_criteria(), limit)
    return PropertySearchResponse(properties=results)


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a new property listing owned by the authenticated user.",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    owner_id: int = Depends(get_current_user_id),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new property listing.

    Raises:
        UnauthorizedError: If the caller is not logged in
    """
    property_obj = await property_service.create_property(property_data, owner_id)
    return PropertyResponse.model_validate(property_obj)
