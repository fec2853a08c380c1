"""
Configuration management using Pydantic settings.
Handles database location, JWT secrets, mail provider credentials and CORS from environment variables.
"""

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache
import logging
import sys

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Immutable application settings loaded once at startup.

    Fields without a default are required: the application refuses to start
    when any of them is missing from the environment or the .env file.
    """

    # Application configuration
    app_name: str = "Rentify API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Database configuration
    db_uri: str
    db_name: str

    # JWT configuration
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60

    # Outbound email (SendGrid v3 mail API)
    sendgrid_api_key: str
    sendgrid_from_email: str
    sendgrid_api_url: str = "https://api.sendgrid.com/v3/mail/send"

    # API configuration
    api_v1_prefix: str = "/api/v1"
    cors_origin: str = "http://localhost:3000"
    max_request_size: int = 16 * 1024  # 16KB JSON bodies

    @field_validator("db_uri")
    @classmethod
    def validate_db_uri(cls, v: str) -> str:
        """Strip trailing slashes and make sure an async driver is used."""
        scheme, sep, rest = v.partition("://")
        v = f"{scheme}{sep}{rest.rstrip('/')}"
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret_key(cls, v: str) -> str:
        """Reject empty signing keys."""
        if not v or not v.strip():
            raise ValueError("JWT_SECRET_KEY is required")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("access_token_expire_minutes")
    @classmethod
    def validate_token_window(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
        return v

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL built from the connection string and database name."""
        return f"{self.db_uri}/{self.db_name}"

    @property
    def cors_origins(self) -> List[str]:
        """Origins allowed to make credentialed cross-origin requests."""
        origins = ["http://localhost:5173"]
        for origin in self.cors_origin.split(","):
            origin = origin.strip()
            if origin and origin not in origins:
                origins.append(origin)
        return origins

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


def load_settings_or_exit() -> Settings:
    """Load settings, exiting the process when required variables are missing or invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        for error in e.errors():
            variable = ".".join(str(loc) for loc in error["loc"]).upper()
            logger.critical(f"Invalid or missing environment variable {variable}: {error['msg']}")
        sys.exit(1)


# Global settings instance
settings = load_settings_or_exit()
