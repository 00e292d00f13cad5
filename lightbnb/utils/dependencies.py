"""
FastAPI dependency injection utilities for authentication, services and the data store.
"""

from typing import Optional, AsyncIterator
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.config import settings
from lightbnb.database import get_db
from lightbnb.data_store import DataStore, InstrumentedDataStore
from lightbnb.models.user import User
from lightbnb.services.auth import AuthService
from lightbnb.services.property import PropertyService
from lightbnb.services.reservation import ReservationService
from lightbnb.utils.exceptions import (
    UnauthorizedError,
    InvalidTokenError,
    TokenExpiredError
)


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_data_store(db: AsyncSession = Depends(get_db)) -> AsyncIterator[InstrumentedDataStore]:
    """
    Yield an instrumented data store bound to the request's session,
    checked out for the lifetime of the request.
    """
    store = InstrumentedDataStore(DataStore(db), slow_checkout_seconds=settings.slow_checkout_seconds)
    async with store.checkout():
        yield store


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Get authentication service instance."""
    return AuthService(db)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    data_store: InstrumentedDataStore = Depends(get_data_store)
) -> PropertyService:
    """Get property service instance."""
    return PropertyService(db, data_store)


async def get_reservation_service(db: AsyncSession = Depends(get_db)) -> ReservationService:
    """Get reservation service instance."""
    return ReservationService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from JWT token.

    Raises:
        UnauthorizedError: If no token provided or token is invalid
        TokenExpiredError: If token is expired
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    try:
        return await auth_service.get_current_user(credentials.credentials)
    except (InvalidTokenError, TokenExpiredError):
        raise
    except Exception as e:
        raise UnauthorizedError(f"Authentication failed: {str(e)}")


async def get_current_user_id(current_user: User = Depends(get_current_user)) -> int:
    """ID of the authenticated caller, passed explicitly to services."""
    return current_user.id
