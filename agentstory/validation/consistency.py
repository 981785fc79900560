"""Consistency checks for structurally valid stories and skills.

These checks look for combinations that parse fine on their own but are
questionable together. They only ever produce warnings. Every rule runs on
every call; one rule firing never stops another.

Story rules:
    autonomy_contradiction   full autonomy with a human in the loop, or
                             directed autonomy with the human out of the loop
    duplicate_skill_names    two or more skills share a name (case-sensitive)
    guardrail_duplication    a skill guardrail repeats an agent guardrail
                             name (case-insensitive)

Skill rules (applied to each skill, paths prefixed with ``skills[i].``):
    incomplete_skill             one warning per completeness miss
    adaptive_without_tools       adaptive behavior but no tools
    single_stage_workflow        workflow with fewer than two stages
    unbounded_iteration          iterative behavior without maxIterations
    threshold_without_fallback   confidence threshold but no fallbackAction
    empty_failure_handling       failureHandling with no modes or fallback
    schedule_without_timeout     schedule trigger but no acceptance.timeout
"""

from __future__ import annotations

from agentstory.schemas.behavior import AdaptiveBehavior, IterativeBehavior, WorkflowBehavior
from agentstory.schemas.collaboration import HumanInteractionMode
from agentstory.schemas.skill import Skill
from agentstory.schemas.story import AgentStory, AutonomyLevel
from agentstory.schemas.trigger import TriggerType
from agentstory.validation.completeness import get_skill_completeness
from agentstory.validation.result import ValidationWarning


def _join(prefix: str, path: str) -> str:
    return f"{prefix}.{path}" if prefix else path


def check_skill_consistency(skill: Skill, prefix: str = "") -> list[ValidationWarning]:
    """Run the per-skill rules.

    Args:
        skill: A structurally valid skill.
        prefix: Path prefix for the skill's position in a story, e.g.
            ``skills[2]``. Empty when validating a lone skill.

    Returns:
        Warnings in rule order.
    """
    warnings: list[ValidationWarning] = []

    for missing in get_skill_completeness(skill).missing:
        warnings.append(ValidationWarning(
            path=_join(prefix, missing),
            message=f"Missing required field: {missing}",
            rule="incomplete_skill",
        ))

    behavior = skill.behavior
    if isinstance(behavior, AdaptiveBehavior) and not skill.tools:
        warnings.append(ValidationWarning(
            path=_join(prefix, "behavior"),
            message="Adaptive behavior without tools may indicate missing configuration",
            rule="adaptive_without_tools",
        ))

    if isinstance(behavior, WorkflowBehavior) and len(behavior.stages) < 2:
        warnings.append(ValidationWarning(
            path=_join(prefix, "behavior.stages"),
            message="Workflow behavior typically has multiple stages",
            rule="single_stage_workflow",
        ))

    if isinstance(behavior, IterativeBehavior) and behavior.max_iterations is None:
        warnings.append(ValidationWarning(
            path=_join(prefix, "behavior.maxIterations"),
            message="Consider setting maxIterations to prevent infinite loops",
            rule="unbounded_iteration",
        ))

    confidence = skill.reasoning.confidence if skill.reasoning else None
    if confidence is not None and confidence.threshold is not None and not confidence.fallback_action:
        warnings.append(ValidationWarning(
            path=_join(prefix, "reasoning.confidence"),
            message="Confidence threshold set without fallback action",
            rule="threshold_without_fallback",
        ))

    handling = skill.failure_handling
    if handling is not None and not handling.modes and not handling.default_fallback:
        warnings.append(ValidationWarning(
            path=_join(prefix, "failureHandling"),
            message="Failure handling configured without specific modes or default fallback",
            rule="empty_failure_handling",
        ))

    if skill.has_trigger_type(TriggerType.SCHEDULE) and not skill.acceptance.timeout:
        warnings.append(ValidationWarning(
            path=_join(prefix, "acceptance.timeout"),
            message="Scheduled skill should have a timeout defined",
            rule="schedule_without_timeout",
        ))

    return warnings


def check_story_consistency(story: AgentStory) -> list[ValidationWarning]:
    """Run every story-level and per-skill rule.

    Returns:
        Warnings ordered as: autonomy rules, per-skill rules in skill order,
        duplicate names, guardrail duplication.
    """
    warnings: list[ValidationWarning] = []
    mode = story.human_interaction.mode if story.human_interaction else None

    if story.autonomy_level == AutonomyLevel.FULL and mode == HumanInteractionMode.IN_THE_LOOP:
        warnings.append(ValidationWarning(
            path="humanInteraction.mode",
            message="Full autonomy with in-the-loop collaboration may be contradictory",
            rule="autonomy_contradiction",
        ))

    if story.autonomy_level == AutonomyLevel.DIRECTED and mode == HumanInteractionMode.OUT_OF_LOOP:
        warnings.append(ValidationWarning(
            path="humanInteraction.mode",
            message="Directed autonomy with out-of-loop collaboration may be contradictory",
            rule="autonomy_contradiction",
        ))

    for i, skill in enumerate(story.skills):
        warnings.extend(check_skill_consistency(skill, prefix=f"skills[{i}]"))

    seen: set[str] = set()
    duplicates: dict[str, None] = {}
    for skill in story.skills:
        if skill.name in seen:
            duplicates[skill.name] = None
        seen.add(skill.name)
    if duplicates:
        warnings.append(ValidationWarning(
            path="skills",
            message=f"Duplicate skill names: {', '.join(duplicates)}",
            rule="duplicate_skill_names",
        ))

    agent_guardrails = {g.name.lower(): g for g in story.guardrails or []}
    for i, skill in enumerate(story.skills):
        for j, guardrail in enumerate(skill.guardrails or []):
            match = agent_guardrails.get(guardrail.name.lower())
            if match is None:
                continue
            warnings.append(ValidationWarning(
                path=f"skills[{i}].guardrails[{j}].name",
                message=(
                    f'Skill guardrail "{guardrail.name}" duplicates '
                    f'agent-level guardrail "{match.name}"'
                ),
                rule="guardrail_duplication",
            ))

    return warnings


__all__ = ["check_skill_consistency", "check_story_consistency"]
