"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    LoginRequest,
    RefreshTokenRequest,
    AccessTokenResponse,
    LoginResponse
)

# User schemas
from .user import (
    UserBase,
    UserCreate,
    UserResponse
)

# Property schemas
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyResponse,
    PropertySearchFilters,
    PropertySearchResult,
    PropertySearchResponse
)

# Reservation schemas
from .reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationSummary,
    ReservationListResponse
)

__all__ = [
    # Authentication
    "LoginRequest",
    "RefreshTokenRequest",
    "AccessTokenResponse",
    "LoginResponse",

    # User
    "UserBase",
    "UserCreate",
    "UserResponse",

    # Property
    "PropertyBase",
    "PropertyCreate",
    "PropertyResponse",
    "PropertySearchFilters",
    "PropertySearchResult",
    "PropertySearchResponse",

    # Reservation
    "ReservationCreate",
    "ReservationResponse",
    "ReservationSummary",
    "ReservationListResponse"
]
