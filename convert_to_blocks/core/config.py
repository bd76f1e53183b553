"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: PostgresDsn = Field(
        default=...,
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # Admin access
    admin_api_key: str = Field(
        default=...,
        description="Key required to manage options (X-API-Key header or cookie)",
    )
    admin_enabled: bool = Field(
        default=True,
        description="Register the admin settings page",
    )

    # Plugin identity
    plugin_slug: str = Field(
        default="convert-to-blocks",
        description="Slug used for the settings page and its section",
    )
    option_prefix: str = Field(
        default="convert_to_blocks",
        description="Prefix for persisted option names and the settings group",
    )
    plugin_title: str = Field(
        default="Convert to Blocks",
        description="Title shown in the menu entry and page heading",
    )

    # Content types
    excluded_content_types: list[str] = Field(
        default=["attachment"],
        description="Content types that are never selectable",
    )
    dedupe_selection: bool = Field(
        default=False,
        description="Drop repeated content types when saving the selection",
    )

    # Application
    app_env: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment",
    )
    app_debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    app_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def post_types_option(self) -> str:
        """Name of the option holding the selected content types."""
        return f"{self.option_prefix}_post_types"

    @property
    def settings_group(self) -> str:
        return f"{self.option_prefix}_settings"

    @property
    def settings_section(self) -> str:
        return f"{self.plugin_slug}-settings-section"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()
