"""Skill behavior schemas.

Behavior is a tagged union keyed on ``model``. Each variant declares its
own required fields:

    sequential  steps (at least one)
    workflow    stages (at least one), optional entryStage
    adaptive    capabilities (at least one), optional selectionStrategy
    iterative   body (at least one) and terminationCondition, optional
                maxIterations (positive)

Example:
    >>> from pydantic import TypeAdapter
    >>> TypeAdapter(SkillBehavior).validate_python(
    ...     {"model": "sequential", "steps": ["Read ticket", "Label ticket"]}
    ... )
    SequentialBehavior(model='sequential', steps=['Read ticket', 'Label ticket'])
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from agentstory.schemas.base import StoryModel


class StageTransition(StoryModel):
    """Edge from one workflow stage to another."""

    to: str = Field(..., min_length=1)
    when: str = Field(..., min_length=1)


class ExecutionStage(StoryModel):
    """A named stage inside a workflow behavior."""

    name: str = Field(..., min_length=1)
    purpose: str = Field(..., min_length=1)
    actions: Optional[list[str]] = None
    transitions: Optional[list[StageTransition]] = None


class SequentialBehavior(StoryModel):
    model: Literal["sequential"] = "sequential"
    steps: list[str] = Field(..., min_length=1)


class WorkflowBehavior(StoryModel):
    model: Literal["workflow"] = "workflow"
    stages: list[ExecutionStage] = Field(..., min_length=1)
    entry_stage: Optional[str] = None


class AdaptiveBehavior(StoryModel):
    model: Literal["adaptive"] = "adaptive"
    capabilities: list[str] = Field(..., min_length=1)
    selection_strategy: Optional[str] = None


class IterativeBehavior(StoryModel):
    model: Literal["iterative"] = "iterative"
    body: list[str] = Field(..., min_length=1)
    termination_condition: str = Field(..., min_length=1)
    max_iterations: Optional[int] = Field(default=None, gt=0)


SkillBehavior = Annotated[
    Union[SequentialBehavior, WorkflowBehavior, AdaptiveBehavior, IterativeBehavior],
    Field(discriminator="model"),
]
"""Tagged union of the four behavior models."""

BEHAVIOR_MODELS = ("sequential", "workflow", "adaptive", "iterative")


__all__ = [
    "StageTransition",
    "ExecutionStage",
    "SequentialBehavior",
    "WorkflowBehavior",
    "AdaptiveBehavior",
    "IterativeBehavior",
    "SkillBehavior",
    "BEHAVIOR_MODELS",
]
