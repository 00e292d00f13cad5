"""
Reservation model linking a guest to a property for a date range.
"""

from datetime import date
from sqlalchemy import Date, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from lightbnb.database import Base


class Reservation(Base):
    """A guest's booking of a property."""

    __tablename__ = "reservations"

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Reservation(id={self.id}, property_id={self.property_id}, guest_id={self.guest_id})>"


guest_start_index = Index(
    "idx_reservations_guest_start",
    Reservation.guest_id,
    Reservation.start_date
)
