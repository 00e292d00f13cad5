"""
Property review model.
Only the rating is read by the application, as an average per property.
"""

from typing import Optional
from sqlalchemy import Integer, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from lightbnb.database import Base


class PropertyReview(Base):
    """A guest's rating of a property, optionally tied to a reservation."""

    __tablename__ = "property_reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_property_reviews_rating"),
    )

    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    reservation_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("reservations.id", ondelete="CASCADE"),
        nullable=True
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<PropertyReview(id={self.id}, property_id={self.property_id}, rating={self.rating})>"
