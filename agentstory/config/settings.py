"""Pydantic settings for the Agent Story toolkit.

This module defines the AgentStorySettings class that loads configuration
from environment variables and .env files. It uses pydantic-settings for
automatic environment variable parsing and validation.

Settings Categories:
    - Core: Toolkit-level settings (debug mode, log level, environment)
    - Validation: Strictness and issue limits for the validation facade
    - Export: Output directory and default harness adapters
    - API: HTTP surface configuration

Environment Variables:
    AGENTSTORY_DEBUG: Enable debug mode (default: false)
    AGENTSTORY_LOG_LEVEL: Logging level (default: INFO)
    AGENTSTORY_ENVIRONMENT: Deployment environment (default: development)
    AGENTSTORY_VALIDATION__STRICT: Treat consistency warnings as failures
    AGENTSTORY_VALIDATION__MAX_ISSUES: Cap on issues printed by the CLI
    AGENTSTORY_EXPORT__OUTPUT_DIR: Directory for exported harness files
    AGENTSTORY_EXPORT__DEFAULT_ADAPTERS: JSON list of adapter IDs
    AGENTSTORY_API__CORS_ORIGINS: JSON list of allowed origins

Usage:
    from agentstory.config.settings import get_settings

    settings = get_settings()
    print(settings.debug)
    print(settings.validation.strict)
    print(settings.export.output_dir)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# Default Constants
# =============================================================================

DEFAULT_OUTPUT_DIR = "outputs/exports"
"""Default directory the CLI writes harness exports into."""

DEFAULT_MAX_ISSUES = 500
"""Default cap on the number of errors and warnings the CLI prints per result."""


# =============================================================================
# Nested Settings Models
# =============================================================================


class ValidationSettings(BaseModel):
    """Settings for the validation facade.

    Attributes:
        strict: If True, consistency warnings make a result invalid.
        max_issues: Maximum number of errors and warnings the CLI prints.
    """

    strict: bool = Field(
        default=False,
        description="Treat consistency warnings as failures"
    )
    max_issues: int = Field(
        default=DEFAULT_MAX_ISSUES,
        ge=1,
        description="Maximum number of issues printed by the CLI"
    )


class ExportSettings(BaseModel):
    """Settings for harness export.

    Attributes:
        output_dir: Directory exported files are written to by the CLI.
        default_adapters: Adapter IDs used when none are requested.
            An empty list means every compatible adapter.
        include_source: Whether to include the source story JSON.
    """

    output_dir: Path = Field(
        default=Path(DEFAULT_OUTPUT_DIR),
        description="Directory for exported harness files"
    )
    default_adapters: list[str] = Field(
        default_factory=list,
        description="Adapters used when none are requested"
    )
    include_source: bool = Field(
        default=False,
        description="Include the source story JSON in exports"
    )

    @field_validator("output_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v: Any) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v


class APISettings(BaseModel):
    """Settings for the HTTP surface.

    Attributes:
        title: Title shown in the OpenAPI docs.
        cors_origins: Allowed CORS origins.
    """

    title: str = Field(
        default="Agent Story Validation API",
        description="API title"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins"
    )


# =============================================================================
# Main Settings Class
# =============================================================================


class AgentStorySettings(BaseSettings):
    """Main settings class for the Agent Story toolkit.

    Environment variables use the AGENTSTORY_ prefix. Nested groups use a
    double underscore, e.g. ``AGENTSTORY_VALIDATION__STRICT=true``.

    Example usage:
        ```python
        from agentstory.config.settings import get_settings

        settings = get_settings()
        print(settings.log_level)
        print(settings.export.default_adapters)
        ```

    Attributes:
        debug: Enable debug mode for verbose logging.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        environment: Deployment environment (development, staging, production, test).
        validation: Validation facade configuration.
        export: Harness export configuration.
        api: HTTP surface configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="AGENTSTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    # Core settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    environment: str = Field(
        default="development",
        description="Deployment environment"
    )

    # Nested configuration groups
    validation: ValidationSettings = Field(
        default_factory=ValidationSettings,
        description="Validation configuration"
    )
    export: ExportSettings = Field(
        default_factory=ExportSettings,
        description="Export configuration"
    )
    api: APISettings = Field(
        default_factory=APISettings,
        description="API configuration"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return normalized

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate and normalize environment."""
        valid_envs = {"development", "staging", "production", "test"}
        normalized = v.lower()
        if normalized not in valid_envs:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {', '.join(sorted(valid_envs))}"
            )
        return normalized

    def ensure_directories(self) -> None:
        """Create the export directory if it doesn't exist.

        Call this method explicitly when you need the directory to exist.
        """
        self.export.output_dir.mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> dict[str, Any]:
        """Export settings as a JSON-compatible dictionary."""
        return self.model_dump(mode="json")


# =============================================================================
# Singleton Pattern
# =============================================================================

_settings_instance: Optional[AgentStorySettings] = None


def get_settings() -> AgentStorySettings:
    """Get the cached settings instance.

    The settings are created once and cached for subsequent calls to avoid
    repeated .env file parsing and validation.

    Returns:
        The cached AgentStorySettings instance.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = AgentStorySettings()
    return _settings_instance


def reload_settings() -> AgentStorySettings:
    """Reload settings from environment, clearing the cache.

    Returns:
        A fresh AgentStorySettings instance.

    Example:
        ```python
        import os
        os.environ["AGENTSTORY_DEBUG"] = "true"
        settings = reload_settings()
        assert settings.debug is True
        ```
    """
    global _settings_instance
    _settings_instance = AgentStorySettings()
    return _settings_instance


def clear_settings_cache() -> None:
    """Clear the settings cache without creating a new instance."""
    global _settings_instance
    _settings_instance = None


__all__ = [
    "AgentStorySettings",
    "ValidationSettings",
    "ExportSettings",
    "APISettings",
    "get_settings",
    "reload_settings",
    "clear_settings_cache",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_MAX_ISSUES",
]
