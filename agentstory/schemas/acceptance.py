"""Acceptance criteria and failure handling schemas for skills."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from agentstory.schemas.base import StoryModel


class QualityMetric(StoryModel):
    name: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    measurement: Optional[str] = None


class SkillAcceptance(StoryModel):
    """What it means for a skill run to succeed.

    Attributes:
        success_conditions: Conditions that must hold (at least one entry;
            an empty string passes the schema but not the completeness check).
        quality_metrics: Optional measurable targets.
        timeout: Maximum execution time, free-form (e.g. "5m").
    """

    success_conditions: list[str] = Field(..., min_length=1)
    quality_metrics: Optional[list[QualityMetric]] = None
    timeout: Optional[str] = None


class FailureMode(StoryModel):
    condition: str = Field(..., min_length=1)
    recovery: str = Field(..., min_length=1)
    escalate: bool = False


class FailureHandling(StoryModel):
    """How a skill recovers when it fails."""

    modes: Optional[list[FailureMode]] = None
    default_fallback: Optional[str] = None
    notify_on_failure: bool = True


__all__ = [
    "QualityMetric",
    "SkillAcceptance",
    "FailureMode",
    "FailureHandling",
]
