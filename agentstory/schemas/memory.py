"""Agent memory schemas: working context, persistent stores, learning."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.base import LAX, StoryModel


class MemoryStoreType(str, Enum):
    KB = "kb"
    VECTOR = "vector"
    RELATIONAL = "relational"
    KV = "kv"


class MemoryUpdateMode(str, Enum):
    READ_ONLY = "read_only"
    APPEND = "append"
    FULL_CRUD = "full_crud"


class LearningType(str, Enum):
    FEEDBACK_LOOP = "feedback_loop"
    REINFORCEMENT = "reinforcement"
    FINE_TUNING = "fine_tuning"


class PersistentStore(StoryModel):
    name: str = Field(..., min_length=1)
    type: Annotated[MemoryStoreType, LAX]
    purpose: str = Field(..., min_length=1)
    updates: Annotated[MemoryUpdateMode, LAX] = MemoryUpdateMode.READ_ONLY


class LearningConfig(StoryModel):
    type: Annotated[LearningType, LAX]
    signal: str = Field(..., min_length=1)


class Memory(StoryModel):
    """Memory configuration for an agent.

    Attributes:
        working: Things the agent keeps in context during a session.
        persistent: Durable stores the agent reads or writes.
        learning: Signals the agent learns from.
    """

    working: Optional[list[str]] = None
    persistent: Optional[list[PersistentStore]] = None
    learning: Optional[list[LearningConfig]] = None


__all__ = [
    "MemoryStoreType",
    "MemoryUpdateMode",
    "LearningType",
    "PersistentStore",
    "LearningConfig",
    "Memory",
]
