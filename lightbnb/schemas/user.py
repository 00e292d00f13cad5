"""
Pydantic schemas for user requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    """Base user schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Devin Sanders"]
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["devin@example.com"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        if not v or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class UserCreate(UserBase):
    """Schema for signing up a new user."""

    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="User's password (8 to 72 characters)",
        examples=["securepassword123"]
    )


class UserResponse(BaseModel):
    """User response schema (excluding sensitive data)."""

    id: int = Field(..., description="User's unique identifier", examples=[1])
    name: str = Field(..., description="User's display name")
    email: EmailStr = Field(..., description="User's email address")
    created_at: Optional[datetime] = Field(None, description="Account creation timestamp")

    model_config = {"from_attributes": True}
