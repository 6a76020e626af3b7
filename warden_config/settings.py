"""
Application Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).
The host application builds one Settings instance at startup and passes it
to setup_logging() and create_authorizer().
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    All settings documented in .env.example.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")

    # ========================================================================
    # DEFINITIONS (permissions + roles seeded at startup)
    # ========================================================================
    DEFINITIONS_FILE: str = Field(
        default="",
        description="JSON file with 'permissions' and 'roles' to register at startup",
    )
    STRICT_DEFINITIONS: bool = Field(
        default=True,
        description="Raise on duplicate ids in the definitions file (False: log and skip)",
    )

    # ========================================================================
    # DEPLOYMENT
    # ========================================================================
    ENVIRONMENT: str = Field(
        default="development", pattern="^(development|staging|production)$"
    )
