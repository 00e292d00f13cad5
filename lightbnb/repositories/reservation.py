"""
Reservation repository for recording bookings and listing a guest's trips.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.reservation import Reservation
from lightbnb.models.property import Property
from typing import List, Dict, Any
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for reservations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)

    async def create_reservation(self, reservation_data: Dict[str, Any]) -> Reservation:
        """Record a reservation."""
        reservation = await self.create(reservation_data)
        logger.info(
            f"Created reservation {reservation.id} for guest {reservation.guest_id} "
            f"on property {reservation.property_id}"
        )
        return reservation

    async def get_reservations_for_guest(self, guest_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Get a guest's reservations with the reserved property's title and cost.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return

        Returns:
            Rows with id, property_id, title, cost_per_night, start_date and end_date
        """
        try:
            query = (
                select(
                    Reservation.id,
                    Reservation.property_id,
                    Property.title,
                    Property.cost_per_night,
                    Reservation.start_date,
                    Reservation.end_date,
                )
                .join(Property, Property.id == Reservation.property_id)
                .where(Reservation.guest_id == guest_id)
                .order_by(Reservation.start_date, Reservation.id)
                .limit(limit)
            )

            result = await self.db.execute(query)
            rows = [dict(row) for row in result.mappings().all()]

            logger.debug(f"Retrieved {len(rows)} reservations for guest {guest_id}")
            return rows
        except Exception as e:
            logger.error(f"Failed to get reservations for guest {guest_id}: {e}")
            raise
