"""Configuration management for TeamPulse.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once at
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables (prefix ``TEAMPULSE_``)
    and .env files. All configuration values are validated at startup; the
    two JWT secrets have no default so a missing secret fails fast.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TEAMPULSE_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application Settings
    app_name: str = "TeamPulse"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./tp_data/teampulse.db"
    db_echo: bool = False

    # Security Settings
    jwt_secret: str = Field(
        ...,
        min_length=MIN_SECRET_LENGTH,
        description="Secret key for signing access tokens",
    )
    jwt_refresh_secret: str = Field(
        ...,
        min_length=MIN_SECRET_LENGTH,
        description="Secret key for signing refresh tokens (must differ from jwt_secret)",
    )

    # Password Hashing Settings
    password_hasher: Literal["bcrypt", "argon2"] = "bcrypt"
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    argon2_time_cost: int = Field(default=3, ge=1)
    argon2_memory_cost: int = Field(default=65536, ge=8, description="Memory cost in KiB")
    argon2_parallelism: int = Field(default=4, ge=1)

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @model_validator(mode="after")
    def validate_distinct_secrets(self) -> "Settings":
        """Access and refresh tokens must be signed with different keys."""
        if self.jwt_secret == self.jwt_refresh_secret:
            raise ValueError("jwt_secret and jwt_refresh_secret must be different")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
