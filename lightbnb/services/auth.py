"""
Authentication service for signup, login and token management.
Sessions are stateless JWT access/refresh token pairs.
"""

from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.repositories.user import UserRepository
from lightbnb.models.user import User
from lightbnb.schemas.user import UserCreate
from lightbnb.utils.auth import (
    create_access_token,
    create_refresh_token,
    verify_token
)
from lightbnb.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    NotFoundError,
    ValidationError,
    DuplicateResourceError
)
from jose import JWTError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing user accounts and sessions.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Authenticated User object

        Raises:
            InvalidCredentialsError: If credentials are invalid
            ValidationError: If input validation fails
        """
        if not email or not email.strip():
            raise ValidationError("Email is required")

        if not password:
            raise ValidationError("Password is required")

        user = await self.user_repo.authenticate_user(email, password)

        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User authenticated successfully: {user.email}")
        return user

    async def create_tokens(self, user: User) -> Tuple[str, str]:
        """
        Create access and refresh tokens for user.

        Returns:
            Tuple of (access_token, refresh_token)
        """
        access_token = create_access_token(user_id=user.id, email=user.email)
        refresh_token = create_refresh_token(user_id=user.id, email=user.email)
        return access_token, refresh_token

    async def login(self, email: str, password: str) -> Tuple[User, str, str]:
        """
        Authenticate user and create tokens.

        Returns:
            Tuple of (user, access_token, refresh_token)

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        user = await self.authenticate_user(email, password)
        access_token, refresh_token = await self.create_tokens(user)

        return user, access_token, refresh_token

    async def signup(self, user_data: UserCreate) -> Tuple[User, str, str]:
        """
        Create an account and start a session for it.

        Args:
            user_data: Name, email and password

        Returns:
            Tuple of (user, access_token, refresh_token)

        Raises:
            DuplicateResourceError: If the email is already registered
            ValidationError: If the email or password is rejected
        """
        if not await self.user_repo.check_email_availability(user_data.email):
            raise DuplicateResourceError("User", user_data.email)

        try:
            user = await self.user_repo.create_user(user_data.model_dump())
        except ValueError as e:
            if "already exists" in str(e):
                raise DuplicateResourceError("User", user_data.email)
            raise ValidationError(str(e))

        access_token, refresh_token = await self.create_tokens(user)
        logger.info(f"User signed up: {user.email} (ID: {user.id})")
        return user, access_token, refresh_token

    async def refresh_access_token(self, refresh_token: str) -> str:
        """
        Create new access token from refresh token.

        Raises:
            InvalidTokenError: If refresh token is invalid
            TokenExpiredError: If refresh token is expired
            NotFoundError: If user not found
        """
        try:
            token_payload = verify_token(refresh_token, token_type="refresh")
        except JWTError as e:
            if "expired" in str(e).lower():
                raise TokenExpiredError()
            raise InvalidTokenError(str(e))

        user = await self.get_user_by_id(token_payload.user_id)
        return create_access_token(user_id=user.id, email=user.email)

    async def get_current_user(self, token: str) -> User:
        """
        Get current user from access token.

        Raises:
            InvalidTokenError: If token is invalid or its user no longer exists
            TokenExpiredError: If token is expired
        """
        try:
            token_payload = verify_token(token, token_type="access")
        except JWTError as e:
            if "expired" in str(e).lower():
                raise TokenExpiredError()
            raise InvalidTokenError(str(e))

        try:
            return await self.get_user_by_id(token_payload.user_id)
        except NotFoundError:
            raise InvalidTokenError("Token user no longer exists")

    async def get_user_by_id(self, user_id: int) -> User:
        """
        Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_repo.get_by_id(user_id)

        if not user:
            raise NotFoundError("User", user_id)

        return user
