"""
Pydantic schemas for property requests and responses.
Handles property creation, search filters and search results.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from lightbnb.utils.query_builder import FilterCriteria


class PropertyBase(BaseModel):
    """Base property schema with common fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Property listing title",
        examples=["Speed lamp"]
    )

    description: str = Field(
        "",
        max_length=5000,
        description="Detailed property description"
    )

    thumbnail_photo_url: str = Field(
        ...,
        max_length=255,
        description="Thumbnail image URL",
        examples=["https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg?auto=compress&cs=tinysrgb&h=350"]
    )

    cover_photo_url: str = Field(
        ...,
        max_length=255,
        description="Cover image URL",
        examples=["https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg"]
    )

    cost_per_night: int = Field(
        ...,
        ge=0,
        description="Nightly cost",
        examples=[93061]
    )

    parking_spaces: int = Field(0, ge=0, description="Number of parking spaces")
    number_of_bathrooms: int = Field(0, ge=0, description="Number of bathrooms")
    number_of_bedrooms: int = Field(0, ge=0, description="Number of bedrooms")

    country: str = Field(..., min_length=1, max_length=255, examples=["Canada"])
    street: str = Field(..., min_length=1, max_length=255, examples=["536 Namsub Highway"])
    city: str = Field(..., min_length=1, max_length=255, examples=["Sotboske"])
    province: str = Field(..., min_length=1, max_length=255, examples=["Quebec"])
    post_code: str = Field(..., min_length=1, max_length=255, examples=["28142"])

    @field_validator("title", "country", "street", "city", "province", "post_code")
    @classmethod
    def validate_not_blank(cls, v):
        """Strip surrounding whitespace and reject blank values."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class PropertyCreate(PropertyBase):
    """Schema for creating a property. The owner is always the caller."""

    model_config = {"extra": "ignore"}


class PropertyResponse(PropertyBase):
    """Schema for a stored property."""

    id: int = Field(..., description="Property unique identifier")
    owner_id: int = Field(..., description="ID of the owning user")
    active: bool = Field(True, description="Whether the listing is active")

    model_config = {"from_attributes": True}


class PropertySearchResult(PropertyResponse):
    """A property search row with the average of its review ratings."""

    average_rating: float = Field(..., description="Mean review rating", examples=[4.25])

    @field_validator("average_rating", mode="before")
    @classmethod
    def coerce_average_rating(cls, v):
        """Databases return averages as Decimal or float."""
        return float(v)


class PropertySearchResponse(BaseModel):
    """Property search response."""

    properties: List[PropertySearchResult] = Field(..., description="Matching properties, cheapest first")


class PropertySearchFilters(BaseModel):
    """Schema for property search filters. Every filter is optional."""

    city: Optional[str] = Field(
        None,
        max_length=255,
        description="Case-insensitive partial city match",
        examples=["Vancouver"]
    )

    owner_id: Optional[int] = Field(
        None,
        ge=1,
        description="Exact owner ID"
    )

    minimum_price_per_night: Optional[int] = Field(
        None,
        ge=0,
        description="Exclusive lower price bound; applied only with the upper bound"
    )

    maximum_price_per_night: Optional[int] = Field(
        None,
        ge=0,
        description="Exclusive upper price bound; applied only with the lower bound"
    )

    minimum_rating: Optional[float] = Field(
        None,
        ge=0,
        le=5,
        description="Exclusive lower bound on the average rating"
    )

    @field_validator("city")
    @classmethod
    def blank_city_is_absent(cls, v):
        """Treat an empty city as no city filter."""
        if v is not None and not v.strip():
            return None
        return v.strip() if v is not None else v

    def to_criteria(self) -> FilterCriteria:
        """Convert to the query builder's filter criteria."""
        return FilterCriteria(
            city=self.city,
            owner_id=self.owner_id,
            minimum_price_per_night=self.minimum_price_per_night,
            maximum_price_per_night=self.maximum_price_per_night,
            minimum_rating=self.minimum_rating,
        )
