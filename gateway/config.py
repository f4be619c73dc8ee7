# =============================================================================
# gateway/config.py - Gateway Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single, frozen Settings class with all configuration values.
#
# Usage:
#   from gateway.config import get_settings
#   settings = get_settings()
#   app = create_app(settings)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are built once at startup and passed explicitly to the app.
# They are never mutated afterwards.
# =============================================================================

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Gateway settings loaded from environment variables.

    Instances are frozen: assigning to a field raises a ValidationError.
    """

    # -------------------------------------------------------------------------
    # Server Binding
    # -------------------------------------------------------------------------

    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the HTTP server"
    )

    HOSTNAME: str = Field(
        default="0.0.0.0",
        description="Host to bind the HTTP server to"
    )

    SHUTDOWN_TIMEOUT: int = Field(
        default=10,
        ge=0,
        description="Seconds to wait for in-flight requests on shutdown"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    # NODE_ENV is accepted for existing deployments; ENVIRONMENT wins if both are set
    ENVIRONMENT: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
        description="Deployment mode (development, production, ...)"
    )

    LOG_LEVEL: str = Field(
        default="info",
        description="Minimum log level (debug, info, warn, error)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once per process.

    Returns:
        Settings: The gateway settings instance
    """
    return Settings()
