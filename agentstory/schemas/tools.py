"""Tool schemas for skills."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.base import LAX, StoryModel


class ToolPermission(str, Enum):
    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"
    ADMIN = "admin"


class Tool(StoryModel):
    """A tool or MCP server a skill uses.

    Attributes:
        name: Tool or MCP server name.
        purpose: Why the skill uses this tool.
        permissions: Access levels required (at least one).
        required: Whether the skill cannot run without the tool.
        conditions: When the tool is available or used.
    """

    name: str = Field(..., min_length=1)
    purpose: str = Field(..., min_length=1)
    permissions: list[Annotated[ToolPermission, LAX]] = Field(..., min_length=1)
    required: bool = True
    conditions: Optional[str] = None


__all__ = ["ToolPermission", "Tool"]
