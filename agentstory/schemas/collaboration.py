"""Agent-level human interaction and multi-agent collaboration schemas."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.base import LAX, StoryModel


class HumanInteractionMode(str, Enum):
    IN_THE_LOOP = "in_the_loop"
    ON_THE_LOOP = "on_the_loop"
    OUT_OF_LOOP = "out_of_loop"


class CheckpointType(str, Enum):
    APPROVAL = "approval"
    INPUT = "input"
    REVIEW = "review"
    ESCALATION = "escalation"


class CollaborationRole(str, Enum):
    SUPERVISOR = "supervisor"
    WORKER = "worker"
    PEER = "peer"


class PeerInteraction(str, Enum):
    REQUEST_RESPONSE = "request_response"
    PUB_SUB = "pub_sub"
    SHARED_STATE = "shared_state"


class Checkpoint(StoryModel):
    name: str = Field(..., min_length=1)
    trigger: str = Field(..., min_length=1)
    type: Annotated[CheckpointType, LAX]
    timeout: Optional[str] = None


class Escalation(StoryModel):
    conditions: str = Field(..., min_length=1)
    channel: str = Field(..., min_length=1)


class HumanInteraction(StoryModel):
    """How humans take part in the agent's work.

    Attributes:
        mode: Where the human sits relative to the agent's decision loop.
        checkpoints: Points where the agent pauses for a human.
        escalation: When and how the agent hands over to a human.
    """

    mode: Annotated[HumanInteractionMode, LAX]
    checkpoints: Optional[list[Checkpoint]] = None
    escalation: Optional[Escalation] = None


class Coordination(StoryModel):
    """A subordinate agent this agent coordinates."""

    agent: str = Field(..., min_length=1)
    via: str = Field(..., min_length=1)
    for_: str = Field(..., alias="for", min_length=1)


class PeerRelation(StoryModel):
    agent: str = Field(..., min_length=1)
    interaction: Annotated[PeerInteraction, LAX]


class AgentCollaboration(StoryModel):
    role: Annotated[CollaborationRole, LAX]
    coordinates: Optional[list[Coordination]] = None
    reports_to: Optional[str] = None
    peers: Optional[list[PeerRelation]] = None


__all__ = [
    "HumanInteractionMode",
    "CheckpointType",
    "CollaborationRole",
    "PeerInteraction",
    "Checkpoint",
    "Escalation",
    "HumanInteraction",
    "Coordination",
    "PeerRelation",
    "AgentCollaboration",
]
