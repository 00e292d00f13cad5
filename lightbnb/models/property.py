"""
Property model for rental listings.
Properties are created by their owner and never mutated by the search path.
"""

from sqlalchemy import String, Text, Integer, Boolean, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from lightbnb.database import Base


class Property(Base):
    """
    Rental property listing with address, media and nightly cost.
    """

    __tablename__ = "properties"

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this property"
    )

    # Listing information
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Detailed property description"
    )

    thumbnail_photo_url: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Thumbnail image URL"
    )

    cover_photo_url: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Cover image URL"
    )

    cost_per_night: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        index=True,
        comment="Nightly cost"
    )

    # Property specifications
    parking_spaces: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )

    number_of_bathrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )

    number_of_bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )

    # Address
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    province: Mapped[str] = mapped_column(String(255), nullable=False)
    post_code: Mapped[str] = mapped_column(String(255), nullable=False)

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the listing is active"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, cost_per_night={self.cost_per_night})>"


# Owner listings ordered by price, used by owner-filtered searches
owner_cost_index = Index(
    "idx_properties_owner_cost",
    Property.owner_id,
    Property.cost_per_night
)
