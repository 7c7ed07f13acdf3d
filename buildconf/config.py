"""Configuration settings for buildconf.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DESCRIPTOR_NAME = "buildconf.yaml"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the BUILDCONF_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDCONF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    descriptor: Path = Field(
        default=Path(DEFAULT_DESCRIPTOR_NAME),
        description="Build descriptor file (YAML or JSON)",
    )

    # Operational modes
    offline: bool = Field(
        default=False,
        description="Offline mode - never contact repositories",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Compiler policy
    incremental_compilation: bool = Field(
        default=False,
        description=(
            "Default incremental compilation flag when the descriptor does "
            "not set one (disabled forces full recompilation)"
        ),
    )

    # Timeouts (in seconds)
    resolve_timeout: float = Field(
        default=30.0,
        ge=1,
        le=600,
        description="Timeout for each repository lookup",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["DEFAULT_DESCRIPTOR_NAME", "Settings", "get_settings", "print_settings_json"]
