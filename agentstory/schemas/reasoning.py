"""Skill reasoning schemas.

Reasoning describes how a skill makes decisions: the overall strategy,
named decision points, retry policy and a confidence gate.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.base import LAX, StoryModel


class ReasoningStrategy(str, Enum):
    RULE_BASED = "rule_based"
    LLM_GUIDED = "llm_guided"
    HYBRID = "hybrid"


class BackoffStrategy(str, Enum):
    NONE = "none"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


class DecisionPoint(StoryModel):
    """A named decision the skill makes.

    Attributes:
        name: Decision name.
        inputs: Information considered (at least one).
        approach: How the decision is made.
        outcomes: Possible results.
    """

    name: str = Field(..., min_length=1)
    inputs: list[str] = Field(..., min_length=1)
    approach: str = Field(..., min_length=1)
    outcomes: Optional[list[str]] = None


class RetryConfig(StoryModel):
    """Retry policy for a skill."""

    max_attempts: int = Field(default=3, ge=1)
    backoff_strategy: Annotated[BackoffStrategy, LAX] = BackoffStrategy.EXPONENTIAL
    retry_on: Optional[list[str]] = None


class ConfidenceConfig(StoryModel):
    """Confidence gate for a skill.

    A threshold without a fallback action is accepted structurally but is
    flagged by the consistency checker.
    """

    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    fallback_action: Optional[str] = None


class Reasoning(StoryModel):
    strategy: Annotated[ReasoningStrategy, LAX]
    decision_points: Optional[list[DecisionPoint]] = None
    retry: Optional[RetryConfig] = None
    confidence: Optional[ConfidenceConfig] = None


__all__ = [
    "ReasoningStrategy",
    "BackoffStrategy",
    "DecisionPoint",
    "RetryConfig",
    "ConfidenceConfig",
    "Reasoning",
]
