"""Skill schema.

A Skill is a composable unit of agent capability. It is owned by exactly
one AgentStory and owns all of its sub-objects (triggers, behavior,
reasoning, tools, acceptance, failure handling, guardrails).

Structural rules enforced here:
    - ``name`` is non-empty.
    - ``description`` and ``domain`` must be present but may be empty while
      drafting.
    - ``triggers`` holds at least one trigger.
    - ``acceptance`` is required and lists at least one success condition.

Whether a skill is "ready" is a separate question answered by
``agentstory.validation.completeness``.

Example:
    >>> skill = Skill.model_validate({
    ...     "name": "Triage",
    ...     "domain": "Support",
    ...     "description": "Route incoming tickets",
    ...     "acquired": "built_in",
    ...     "triggers": [{"type": "message", "description": "New ticket"}],
    ...     "acceptance": {"successConditions": ["Ticket labelled"]},
    ... })
    >>> skill.behavior is None
    True
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.acceptance import FailureHandling, SkillAcceptance
from agentstory.schemas.base import (
    LAX,
    SLUG_MAX_LENGTH,
    SLUG_PATTERN,
    StoryModel,
    generate_slug,
    is_valid_slug,
)
from agentstory.schemas.behavior import SkillBehavior
from agentstory.schemas.guardrails import SkillGuardrail
from agentstory.schemas.reasoning import Reasoning
from agentstory.schemas.tools import Tool
from agentstory.schemas.trigger import SkillTrigger, TriggerType


class SkillAcquisition(str, Enum):
    """How the agent came to have a skill."""

    BUILT_IN = "built_in"
    LEARNED = "learned"
    DELEGATED = "delegated"


class SkillInput(StoryModel):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    description: str = ""
    required: bool = True


class SkillOutput(StoryModel):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    description: str = ""


class PortableFile(StoryModel):
    """A script or reference document bundled with an exported skill."""

    filename: str = Field(..., min_length=1)
    content: Optional[str] = None


class SkillPortability(StoryModel):
    """Settings used when exporting a skill as a standalone package."""

    slug: Optional[str] = Field(default=None, max_length=SLUG_MAX_LENGTH, pattern=SLUG_PATTERN)
    license: Optional[str] = None
    compatibility: Optional[str] = None
    scripts: Optional[list[PortableFile]] = None
    references: Optional[list[PortableFile]] = None


class Skill(StoryModel):
    """A composable unit of agent capability.

    Attributes:
        id: Optional client-generated identifier.
        name: Skill name, unique within its story.
        description: What the skill does.
        domain: Knowledge domain the skill operates in.
        acquired: How the agent obtained the skill.
        triggers: What activates the skill (at least one).
        inputs: Declared inputs.
        outputs: Declared outputs.
        behavior: Execution model (tagged on ``model``).
        reasoning: Decision-making configuration.
        tools: Tools the skill uses.
        acceptance: Success criteria.
        failure_handling: Recovery behavior.
        guardrails: Skill-scoped constraints.
        portability: Standalone export settings.
    """

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: str
    domain: str
    acquired: Annotated[SkillAcquisition, LAX]
    triggers: list[SkillTrigger] = Field(..., min_length=1)
    inputs: Optional[list[SkillInput]] = None
    outputs: Optional[list[SkillOutput]] = None
    behavior: Optional[SkillBehavior] = None
    reasoning: Optional[Reasoning] = None
    tools: Optional[list[Tool]] = None
    acceptance: SkillAcceptance
    failure_handling: Optional[FailureHandling] = None
    guardrails: Optional[list[SkillGuardrail]] = None
    portability: Optional[SkillPortability] = None

    @property
    def slug(self) -> str:
        """Portability slug if configured, otherwise derived from the name."""
        if self.portability is not None and self.portability.slug:
            return self.portability.slug
        return generate_slug(self.name)

    def has_trigger_type(self, trigger_type: TriggerType) -> bool:
        return any(t.type == trigger_type for t in self.triggers)


__all__ = [
    "SkillAcquisition",
    "SkillInput",
    "SkillOutput",
    "PortableFile",
    "SkillPortability",
    "Skill",
    "generate_slug",
    "is_valid_slug",
]
