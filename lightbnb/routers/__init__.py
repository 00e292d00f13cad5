"""
API route handlers for the LightBnB API.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .reservations import router as reservations_router

__all__ = ["auth_router", "properties_router", "reservations_router"]
