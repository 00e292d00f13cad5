"""
Reservation endpoints for the authenticated guest.
"""

from fastapi import APIRouter, Depends, status

from lightbnb.services.reservation import ReservationService
from lightbnb.schemas.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationListResponse
)
from lightbnb.utils.dependencies import get_current_user_id, get_reservation_service
from lightbnb.schemas.error import get_crud_error_responses


router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.get(
    "",
    response_model=ReservationListResponse,
    status_code=status.HTTP_200_OK,
    summary="List my reservations",
    description="The caller's reservations with property title and nightly cost, earliest first",
    responses=get_crud_error_responses()
)
async def list_reservations(
    guest_id: int = Depends(get_current_user_id),
    reservation_service: ReservationService = Depends(get_reservation_service)
) -> ReservationListResponse:
    reservations = await reservation_service.list_reservations(guest_id)
    return ReservationListResponse(reservations=reservations)


@router.post(
    "",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reserve a property",
    description="Record a reservation for the caller on an existing property",
    responses=get_crud_error_responses()
)
async def create_reservation(
    reservation_data: ReservationCreate,
    guest_id: int = Depends(get_current_user_id),
    reservation_service: ReservationService = Depends(get_reservation_service)
) -> ReservationResponse:
    """
    Reserve a property for the caller.

    Raises:
        PropertyNotFoundError: If the property does not exist
    """
    reservation = await reservation_service.create_reservation(reservation_data, guest_id)
    return ReservationResponse.model_validate(reservation)
