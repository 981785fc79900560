"""AgentStory schema.

The AgentStory is the root entity: the description of one AI agent.
Only ``name`` is required. Everything else may be filled in progressively,
and ``skills`` may be empty while drafting.

Example:
    >>> story = AgentStory.model_validate({
    ...     "name": "Support Bot",
    ...     "autonomyLevel": "directed",
    ... })
    >>> story.skills
    []
    >>> story.to_dict()
    {'version': '1.0', 'name': 'Support Bot', 'autonomyLevel': 'directed', 'skills': []}
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.base import IDENTIFIER_PATTERN, LAX, StoryModel
from agentstory.schemas.collaboration import AgentCollaboration, HumanInteraction
from agentstory.schemas.guardrails import AgentGuardrail
from agentstory.schemas.memory import Memory
from agentstory.schemas.skill import Skill


class AutonomyLevel(str, Enum):
    """How much the agent may act without human approval."""

    FULL = "full"
    SUPERVISED = "supervised"
    COLLABORATIVE = "collaborative"
    DIRECTED = "directed"


AUTONOMY_LEVEL_METADATA: dict[str, dict[str, str]] = {
    "full": {
        "label": "Full Autonomy",
        "human_involvement": "Minimal oversight",
        "description": "Agent operates independently with full decision-making power",
    },
    "supervised": {
        "label": "Supervised",
        "human_involvement": "Exception-based review",
        "description": "Agent handles routine tasks, humans review exceptions",
    },
    "collaborative": {
        "label": "Collaborative",
        "human_involvement": "Active partnership",
        "description": "Human and agent work together on decisions",
    },
    "directed": {
        "label": "Directed",
        "human_involvement": "Step-by-step approval",
        "description": "Agent requires human approval for each action",
    },
}


class AgentStory(StoryModel):
    """Description of one AI agent.

    Attributes:
        id: Client-generated identifier.
        version: Schema version of the document.
        identifier: Optional slug-like handle (lowercase, starts with a letter).
        name: Display name (required, 1-100 characters).
        role: What the agent is ("As a ...").
        purpose: Why the agent exists.
        autonomy_level: How much the agent may act on its own.
        skills: Ordered skills owned by this story.
        human_interaction: Human oversight configuration.
        collaboration: Multi-agent relationships.
        memory: Working, persistent and learning memory.
        guardrails: Agent-wide constraints.
        tags: Free-form labels.
        notes: Free-form notes.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
        created_by: Author identifier.
    """

    id: Optional[str] = None
    version: str = "1.0"
    identifier: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=50,
        pattern=IDENTIFIER_PATTERN,
    )
    name: str = Field(..., min_length=1, max_length=100)
    role: Optional[str] = None
    purpose: Optional[str] = None
    autonomy_level: Optional[Annotated[AutonomyLevel, LAX]] = None
    skills: list[Skill] = Field(default_factory=list)
    human_interaction: Optional[HumanInteraction] = None
    collaboration: Optional[AgentCollaboration] = None
    memory: Optional[Memory] = None
    guardrails: Optional[list[AgentGuardrail]] = None
    tags: Optional[list[str]] = None
    notes: Optional[str] = None
    created_at: Optional[Annotated[datetime, LAX]] = None
    updated_at: Optional[Annotated[datetime, LAX]] = None
    created_by: Optional[str] = None

    def touch(self) -> None:
        """Refresh ``updated_at`` after an in-place edit."""
        self.updated_at = datetime.now(timezone.utc)

    def get_skill(self, name: str) -> Optional[Skill]:
        """Return the first skill with the given name, if any."""
        for skill in self.skills:
            if skill.name == name:
                return skill
        return None

    def all_tools(self):
        """Yield every tool declared by any skill, in skill order."""
        for skill in self.skills:
            for tool in skill.tools or []:
                yield tool


__all__ = ["AutonomyLevel", "AUTONOMY_LEVEL_METADATA", "AgentStory"]
