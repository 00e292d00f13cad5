"""
User model with authentication support.
Handles guest and owner accounts; any user may both book and list properties.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from email_validator import validate_email, EmailNotValidError
from lightbnb.database import Base
from lightbnb.utils.auth import verify_password


class User(Base):
    """
    User model for authentication and ownership.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email})>"

    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Args:
            email: Email address to validate

        Returns:
            Normalized email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    def verify_password(self, password: str) -> bool:
        """Check a plain text password against the stored hash."""
        return verify_password(password, self.hashed_password)

