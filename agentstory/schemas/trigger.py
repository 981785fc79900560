"""Skill trigger schema.

A trigger describes what activates a skill. Every skill carries at least
one trigger; the description may be left empty while drafting, which the
completeness checker reports.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.base import LAX, StoryModel


class TriggerType(str, Enum):
    """Kinds of events that can activate a skill."""

    MESSAGE = "message"
    RESOURCE_CHANGE = "resource_change"
    SCHEDULE = "schedule"
    CASCADE = "cascade"
    MANUAL = "manual"


class SkillTrigger(StoryModel):
    """A single activation trigger for a skill.

    Attributes:
        type: What kind of event activates the skill.
        description: Human-readable description of the event.
        conditions: Optional guard conditions.
        examples: Concrete examples of triggering events.
    """

    type: Annotated[TriggerType, LAX]
    description: str = ""
    conditions: Optional[list[str]] = None
    examples: Optional[list[str]] = None


__all__ = ["TriggerType", "SkillTrigger"]
