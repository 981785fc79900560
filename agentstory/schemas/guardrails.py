"""Guardrail schemas at skill and agent level."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.base import LAX, StoryModel


class GuardrailEnforcement(str, Enum):
    HARD = "hard"
    SOFT = "soft"


class SkillGuardrail(StoryModel):
    """A constraint scoped to a single skill."""

    name: str = Field(..., min_length=1)
    constraint: str = Field(..., min_length=1)
    enforcement: Annotated[GuardrailEnforcement, LAX] = GuardrailEnforcement.HARD
    on_violation: Optional[str] = None


class AgentGuardrail(StoryModel):
    """A constraint that applies across every skill of an agent."""

    name: str = Field(..., min_length=1)
    constraint: str = Field(..., min_length=1)
    rationale: Optional[str] = None
    enforcement: Annotated[GuardrailEnforcement, LAX] = GuardrailEnforcement.HARD


__all__ = ["GuardrailEnforcement", "SkillGuardrail", "AgentGuardrail"]
