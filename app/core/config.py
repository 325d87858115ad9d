"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, secrets, session TTL, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="sessionauth",
        description="MongoDB database name"
    )
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000,
        description="Driver server selection timeout in milliseconds"
    )
    MONGODB_CONNECT_TIMEOUT_MS: int = Field(
        default=10000,
        description="Driver connect timeout in milliseconds"
    )

    # Session Management
    SESSION_TIMEOUT_MINUTES: int = Field(
        default=30,
        description="Session lifetime in minutes, measured from the last write"
    )
    SESSION_COOKIE_NAME: str = Field(
        default="sid",
        description="Name of the cookie carrying the signed session id"
    )

    # Password hashing
    BCRYPT_ROUNDS: int = Field(
        default=10,
        ge=4,
        le=31,
        description="bcrypt work factor"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/auth",
        description="Auth route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    HOST: str = Field(
        default="0.0.0.0",
        description="Bind address for the development server"
    )
    PORT: int = Field(
        default=5000,
        description="Bind port for the development server"
    )

    # Security
    SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="Secret used to sign session cookies"
    )

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info: ValidationInfo) -> str:
        """Ensure secret key is changed in production."""
        if info.data.get("ENVIRONMENT") == "production" and v == "change-me-in-production":
            raise ValueError("SECRET_KEY must be changed in production environment")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def session_max_age_seconds(self) -> int:
        return self.SESSION_TIMEOUT_MINUTES * 60


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not settings.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if settings.SESSION_TIMEOUT_MINUTES <= 0:
        errors.append("SESSION_TIMEOUT_MINUTES must be positive")

    if not settings.SECRET_KEY:
        errors.append("SECRET_KEY is required")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
