"""Completeness checks for skills and stories.

A structurally valid entity is not necessarily usable. A skill parses with
an empty description or an empty trigger description, for example, but it
is not "complete" until those are filled in. These checks are pure
functions of their input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from agentstory.schemas.skill import Skill
from agentstory.schemas.story import AgentStory


@dataclass
class Completeness:
    """Outcome of a completeness check.

    Attributes:
        complete: True when nothing is missing
        missing: Field paths, relative to the checked entity, that are
            empty or absent
    """

    complete: bool
    missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"complete": self.complete, "missing": list(self.missing)}


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def get_skill_completeness(skill: Skill) -> Completeness:
    """Check that a skill has the content it needs to be ready.

    Checked, in order: name, description, domain; at least one trigger and
    a description on every trigger; at least one success condition and no
    blank condition.

    Example:
        >>> skill = Skill.model_validate({
        ...     "name": "Triage", "domain": "", "description": "x",
        ...     "acquired": "built_in",
        ...     "triggers": [{"type": "manual", "description": ""}],
        ...     "acceptance": {"successConditions": ["done"]},
        ... })
        >>> get_skill_completeness(skill).missing
        ['domain', 'triggers[0].description']
    """
    missing: list[str] = []

    if _blank(skill.name):
        missing.append("name")
    if _blank(skill.description):
        missing.append("description")
    if _blank(skill.domain):
        missing.append("domain")

    if not skill.triggers:
        missing.append("triggers")
    for i, trigger in enumerate(skill.triggers or []):
        if _blank(trigger.description):
            missing.append(f"triggers[{i}].description")

    conditions = skill.acceptance.success_conditions if skill.acceptance else []
    if not conditions:
        missing.append("acceptance.successConditions")
    for i, condition in enumerate(conditions):
        if _blank(condition):
            missing.append(f"acceptance.successConditions[{i}]")

    return Completeness(complete=not missing, missing=missing)


def get_story_completeness(story: AgentStory) -> Completeness:
    """Check that a story is ready to hand over.

    A complete story has a name, role, purpose and autonomy level, at least
    one skill, and every skill is itself complete. Skill misses are
    prefixed with ``skills[i].``.
    """
    missing: list[str] = []

    if _blank(story.name):
        missing.append("name")
    if _blank(story.role):
        missing.append("role")
    if _blank(story.purpose):
        missing.append("purpose")
    if story.autonomy_level is None:
        missing.append("autonomyLevel")

    if not story.skills:
        missing.append("skills")
    for i, skill in enumerate(story.skills):
        missing.extend(f"skills[{i}].{m}" for m in get_skill_completeness(skill).missing)

    return Completeness(complete=not missing, missing=missing)


__all__ = ["Completeness", "get_skill_completeness", "get_story_completeness"]
