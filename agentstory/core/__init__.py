"""Core module for the Agent Story toolkit.

This module contains the exception hierarchy shared by every other
subsystem.

Usage:
    from agentstory.core import AgentStoryError

    try:
        export_story(candidate, ["claude"])
    except AgentStoryError as e:
        print(f"Error: {e.code} - {e.message}")
"""

from agentstory.core.exceptions import (
    AgentStoryError,
    ConfigurationError,
    StoryValidationError,
    ExportError,
    AdapterNotFoundError,
    IncompatibleStoryError,
    OrganizationError,
    CollaboratorError,
    LLMServiceError,
)

__all__ = [
    "AgentStoryError",
    "ConfigurationError",
    "StoryValidationError",
    "ExportError",
    "AdapterNotFoundError",
    "IncompatibleStoryError",
    "OrganizationError",
    "CollaboratorError",
    "LLMServiceError",
]
