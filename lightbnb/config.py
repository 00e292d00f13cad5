"""
Configuration management using Pydantic settings.
Handles database URL, JWT secrets, search limits and environment variables.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings sourced from the environment and an optional .env file."""

    # Application configuration
    app_name: str = "LightBnB API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database configuration. When DATABASE_URL is unset the URL is composed
    # from the POSTGRES_* variables below.
    database_url: Optional[str] = None

    postgres_db: str = "lightbnb"
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_host: str = "localhost"
    postgres_port: int = 5432

    # Connection pool configuration
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30

    # JWT configuration
    jwt_secret_key: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    refresh_token_expire_days: int = 7

    # Password hashing
    bcrypt_rounds: int = 12

    # API configuration
    api_v1_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Property search and reservation listing limits
    default_search_limit: int = 20
    max_search_limit: int = 100
    reservation_list_limit: int = 10

    # Log the last statement of a data store checkout held longer than this
    slow_checkout_seconds: float = 5.0

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, v):
        """Ensure an async driver is used for PostgreSQL URLs."""
        if v and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v or None

    @field_validator("jwt_secret_key", mode="before")
    @classmethod
    def validate_jwt_secret_key(cls, v):
        """Validate JWT secret key strength."""
        if not v:
            raise ValueError("JWT_SECRET_KEY is required")
        if len(v) < 32 and v != "your-secret-key-change-in-production":
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters long")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and validate the logging level name."""
        level = v.upper()
        if level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_search_limits(self):
        """The default search limit must fall inside the allowed range."""
        if self.max_search_limit < 1:
            raise ValueError("max_search_limit must be at least 1")
        if not 1 <= self.default_search_limit <= self.max_search_limit:
            raise ValueError("default_search_limit must be between 1 and max_search_limit")
        return self

    @property
    def sqlalchemy_database_url(self) -> str:
        """Database URL used to build the engine."""
        if self.database_url:
            return self.database_url
        credentials = self.postgres_user
        if self.postgres_password:
            credentials = f"{credentials}:{self.postgres_password}"
        return (
            f"postgresql+asyncpg://{credentials}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
