"""Configuration module for the Agent Story toolkit.

Usage:
    from agentstory.config import get_settings

    settings = get_settings()
    print(settings.validation.strict)
"""

from agentstory.config.settings import (
    AgentStorySettings,
    ValidationSettings,
    ExportSettings,
    APISettings,
    get_settings,
    reload_settings,
    clear_settings_cache,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_MAX_ISSUES,
)

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
