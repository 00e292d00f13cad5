"""
Service layer for business logic.
"""

from .auth import AuthService
from .property import PropertyService
from .reservation import ReservationService

__all__ = ["AuthService", "PropertyService", "ReservationService"]
