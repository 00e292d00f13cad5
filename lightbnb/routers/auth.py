"""
User account and session endpoints: signup, login, token refresh and logout.
Sessions are stateless JWT access/refresh token pairs.
"""

from fastapi import APIRouter, Depends, status
from lightbnb.models.user import User
from lightbnb.services.auth import AuthService
from lightbnb.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    AccessTokenResponse
)
from lightbnb.schemas.user import UserCreate, UserResponse
from lightbnb.schemas.error import get_auth_error_responses, get_crud_error_responses
from lightbnb.utils.dependencies import get_auth_service, get_current_user
from lightbnb.config import settings
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _session_response(user: User, access_token: str, refresh_token: str) -> LoginResponse:
    return LoginResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.post(
    "",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create a user account and log it in",
    responses=get_crud_error_responses()
)
async def signup(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Create a new account and return session tokens for it.

    Raises:
        DuplicateResourceError: If the email is already registered
    """
    user, access_token, refresh_token = await auth_service.signup(user_data)
    return _session_response(user, access_token, refresh_token)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate user with email and password, returns JWT tokens",
    responses=get_auth_error_responses()
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate user and return JWT tokens.

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user, access_token, refresh_token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )
    return _session_response(user, access_token, refresh_token)


@router.post(
    "/refresh",
    response_model=AccessTokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
    description="Generate new access token using refresh token",
    responses=get_auth_error_responses()
)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AccessTokenResponse:
    """
    Create new access token from refresh token.

    Raises:
        InvalidTokenError: If refresh token is invalid
        TokenExpiredError: If refresh token is expired
    """
    access_token = await auth_service.refresh_access_token(
        refresh_token=refresh_data.refresh_token
    )

    return AccessTokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    description="Get current authenticated user information",
    responses=get_auth_error_responses()
)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
) -> UserResponse:
    """Get current authenticated user information."""
    return UserResponse.model_validate(current_user)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="User logout",
    description="Logout user (client-side token removal)",
    responses=get_auth_error_responses()
)
async def logout(
    current_user: User = Depends(get_current_user)
) -> None:
    """
    Logout user.

    Tokens are stateless, so the client discards them; this endpoint confirms
    the caller was authenticated.
    """
    logger.info(f"User logged out: {current_user.email}")
