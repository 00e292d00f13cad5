"""
Database models for the LightBnB API.
Includes User, Property, Reservation and PropertyReview models.
"""

from lightbnb.models.user import User
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview

# Export all models for easy importing
__all__ = [
    "User",
    "Property",
    "Reservation",
    "PropertyReview",
]
