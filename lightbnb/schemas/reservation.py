"""
Pydantic schemas for reservation requests and responses.
"""

from pydantic import BaseModel, Field, model_validator
from typing import List
from datetime import date


class ReservationCreate(BaseModel):
    """Schema for booking a property. The guest is always the caller."""

    property_id: int = Field(..., ge=1, description="ID of the property to reserve", examples=[1])
    start_date: date = Field(..., description="First night of the stay", examples=["2026-09-11"])
    end_date: date = Field(..., description="Checkout date", examples=["2026-09-26"])

    @model_validator(mode="after")
    def validate_date_range(self):
        """Ensure the stay covers at least one night."""
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class ReservationResponse(BaseModel):
    """Schema for a stored reservation."""

    id: int
    property_id: int
    guest_id: int
    start_date: date
    end_date: date

    model_config = {"from_attributes": True}


class ReservationSummary(BaseModel):
    """A reservation with the reserved property's title and nightly cost."""

    id: int = Field(..., description="Reservation ID")
    property_id: int = Field(..., description="Reserved property ID")
    title: str = Field(..., description="Property title")
    cost_per_night: int = Field(..., description="Property nightly cost")
    start_date: date
    end_date: date


class ReservationListResponse(BaseModel):
    """The caller's reservations, earliest first."""

    reservations: List[ReservationSummary]
