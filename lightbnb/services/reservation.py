"""
Reservation service for booking properties and listing a guest's reservations.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.config import settings
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.models.reservation import Reservation
from lightbnb.schemas.reservation import ReservationCreate, ReservationSummary
from lightbnb.utils.exceptions import PropertyNotFoundError
import logging

logger = logging.getLogger(__name__)


class ReservationService:
    """Reservation service scoped to the authenticated guest."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.reservation_repo = ReservationRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def list_reservations(self, guest_id: int) -> List[ReservationSummary]:
        """Return the guest's reservations, earliest start date first."""
        rows = await self.reservation_repo.get_reservations_for_guest(
            guest_id, limit=settings.reservation_list_limit
        )
        return [ReservationSummary.model_validate(row) for row in rows]

    async def create_reservation(self, reservation_data: ReservationCreate, guest_id: int) -> Reservation:
        """
        Reserve a property for the guest.

        Raises:
            PropertyNotFoundError: If the property does not exist
        """
        property_obj = await self.property_repo.get_by_id(reservation_data.property_id)
        if not property_obj:
            raise PropertyNotFoundError(reservation_data.property_id)

        create_data = reservation_data.model_dump()
        create_data["guest_id"] = guest_id

        return await self.reservation_repo.create_reservation(create_data)
