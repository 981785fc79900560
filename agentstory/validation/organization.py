"""Referential integrity for the organization module.

Organization records point at each other by id: a department belongs to a
domain, a role to a department, a HAP pairs a person in a role with an
agent story. The schemas only check each record on its own; this module
checks the links between them.

Key Components:
    - check_organization_integrity: structural + dangling-reference check
      over a whole organization snapshot
    - HAPValidationIssue / validate_hap_agent_assignment: checks that a
      HAP's agent story exists and covers the agent-owned phases
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, TypeVar

from pydantic import BaseModel

from agentstory.schemas.hap import HumanAgentPair, analyze_agent_skill_coverage
from agentstory.schemas.organization import BusinessDomain, Department, Person, Role
from agentstory.schemas.story import AgentStory
from agentstory.validation.result import ValidationIssue, ValidationResult, ValidationWarning
from agentstory.validation.structural import parse_candidate


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DANGLING_REFERENCE = "dangling_reference"


# =============================================================================
# Organization Integrity
# =============================================================================


def _parse_collection(
    model_cls: type[ModelT],
    collection: str,
    records: Sequence[Any],
    errors: list[ValidationIssue],
) -> list[ModelT]:
    """Parse every record, prefixing error paths with ``collection[i]``."""
    parsed: list[ModelT] = []
    for i, record in enumerate(records):
        if isinstance(record, model_cls):
            parsed.append(record)
            continue
        model, issues = parse_candidate(model_cls, record)
        for issue in issues:
            suffix = f".{issue.path}" if issue.path else ""
            errors.append(ValidationIssue(f"{collection}[{i}]{suffix}", issue.message, issue.code))
        if model is not None:
            parsed.append(model)
    return parsed


def _dangling(path: str, kind: str, ref: str) -> ValidationIssue:
    return ValidationIssue(path, f"Unknown {kind} id '{ref}'", DANGLING_REFERENCE)


def check_organization_integrity(
    domains: Sequence[Any] = (),
    departments: Sequence[Any] = (),
    roles: Sequence[Any] = (),
    people: Sequence[Any] = (),
    haps: Sequence[Any] = (),
    stories: Sequence[Any] = (),
) -> ValidationResult:
    """Validate an organization snapshot.

    Records may be model instances or decoded dicts. Dicts are parsed
    first; any structural error is reported with the collection name and
    index prefixed (``departments[1].name``). References are then checked
    among the records that parsed.

    Reference rules:
        department.domainId        -> domains
        department.managerId       -> people (when set)
        role.departmentId          -> departments
        person.departmentId        -> departments
        person.roleAssignments[].roleId -> roles
        hap.personId / roleId      -> people / roles
        hap.agentStoryId           -> stories (when set)

    A HAP phase whose ``skillId`` matches no skill id of the paired story
    is reported as a warning.

    Returns:
        ValidationResult; ``valid`` is False on any error.
    """
    errors: list[ValidationIssue] = []
    warnings: list[ValidationWarning] = []

    parsed_domains = _parse_collection(BusinessDomain, "domains", domains, errors)
    parsed_departments = _parse_collection(Department, "departments", departments, errors)
    parsed_roles = _parse_collection(Role, "roles", roles, errors)
    parsed_people = _parse_collection(Person, "people", people, errors)
    parsed_haps = _parse_collection(HumanAgentPair, "haps", haps, errors)
    parsed_stories = _parse_collection(AgentStory, "stories", stories, errors)

    domain_ids = {d.id for d in parsed_domains}
    department_ids = {d.id for d in parsed_departments}
    role_ids = {r.id for r in parsed_roles}
    person_ids = {p.id for p in parsed_people}
    stories_by_id = {s.id: s for s in parsed_stories if s.id}

    for i, department in enumerate(parsed_departments):
        if department.domain_id not in domain_ids:
            errors.append(_dangling(f"departments[{i}].domainId", "domain", department.domain_id))
        if department.manager_id and department.manager_id not in person_ids:
            errors.append(_dangling(f"departments[{i}].managerId", "person", department.manager_id))

    for i, role in enumerate(parsed_roles):
        if role.department_id not in department_ids:
            errors.append(_dangling(f"roles[{i}].departmentId", "department", role.department_id))

    for i, person in enumerate(parsed_people):
        if person.department_id not in department_ids:
            errors.append(_dangling(f"people[{i}].departmentId", "department", person.department_id))
        for j, assignment in enumerate(person.role_assignments):
            if assignment.role_id not in role_ids:
                errors.append(_dangling(
                    f"people[{i}].roleAssignments[{j}].roleId", "role", assignment.role_id,
                ))

    for i, hap in enumerate(parsed_haps):
        if hap.person_id not in person_ids:
            errors.append(_dangling(f"haps[{i}].personId", "person", hap.person_id))
        if hap.role_id not in role_ids:
            errors.append(_dangling(f"haps[{i}].roleId", "role", hap.role_id))
        if not hap.agent_story_id:
            continue
        story = stories_by_id.get(hap.agent_story_id)
        if story is None:
            errors.append(_dangling(f"haps[{i}].agentStoryId", "agent story", hap.agent_story_id))
            continue

        skill_ids = {s.id for s in story.skills if s.id}
        for j, task in enumerate(hap.tasks):
            for phase, assignment in task.phases.items():
                if assignment.skill_id and assignment.skill_id not in skill_ids:
                    warnings.append(ValidationWarning(
                        path=f"haps[{i}].tasks[{j}].phases.{phase.value}.skillId",
                        message=(
                            f"Skill '{assignment.skill_id}' is not a skill of "
                            f'agent story "{story.name}"'
                        ),
                        rule=DANGLING_REFERENCE,
                    ))

    logger.debug(
        "Organization integrity: %d error(s), %d warning(s)", len(errors), len(warnings)
    )
    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


# =============================================================================
# HAP Agent Assignment
# =============================================================================


@dataclass
class HAPValidationIssue:
    """Finding about a HAP's agent assignment.

    Attributes:
        type: "error" or "warning"
        code: Upper-case issue code, e.g. "AGENT_NOT_FOUND"
        message: Human-readable description
        details: Extra data for display
    """

    type: str
    code: str
    message: str
    details: Optional[dict[str, Any]] = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "code": self.code, "message": self.message}
        if self.details is not None:
            data["details"] = self.details
        return data


def validate_hap_agent_assignment(
    hap: HumanAgentPair,
    story: Optional[AgentStory] = None,
) -> list[HAPValidationIssue]:
    """Check that a HAP points at its agent story and that the story's
    skills cover every agent-owned phase.

    Stops at the first error (no agent, agent not found, id mismatch).
    Otherwise returns coverage warnings, which may be empty.
    """
    if not hap.agent_story_id:
        return [HAPValidationIssue(
            type="error",
            code="NO_AGENT_ASSIGNED",
            message="No agent story is assigned to this HAP",
        )]

    if story is None:
        return [HAPValidationIssue(
            type="error",
            code="AGENT_NOT_FOUND",
            message="The assigned agent story could not be found",
            details={"agentStoryId": hap.agent_story_id},
        )]

    if story.id != hap.agent_story_id:
        return [HAPValidationIssue(
            type="error",
            code="AGENT_ID_MISMATCH",
            message="The provided agent story does not match the HAP assignment",
            details={"expected": hap.agent_story_id, "provided": story.id},
        )]

    issues: list[HAPValidationIssue] = []
    coverage = analyze_agent_skill_coverage(hap.tasks, story.skills)

    if not story.skills and coverage.total_agent_phases > 0:
        issues.append(HAPValidationIssue(
            type="warning",
            code="AGENT_NO_SKILLS",
            message=(
                f'Agent "{story.name}" has no skills defined but is assigned to '
                f"{coverage.total_agent_phases} phase(s)"
            ),
            details={"agentName": story.name, "agentPhases": coverage.total_agent_phases},
        ))

    if coverage.phases_without_skills > 0:
        issues.append(HAPValidationIssue(
            type="warning",
            code="INCOMPLETE_SKILL_COVERAGE",
            message=(
                f"{coverage.phases_without_skills} of {coverage.total_agent_phases} "
                f"agent phase(s) don't have skills assigned "
                f"({coverage.coverage_percent}% coverage)"
            ),
            details={
                "coverage": coverage.to_dict(),
                "uncoveredPhases": [
                    {"task": p.task_name, "phase": p.phase.value}
                    for p in coverage.uncovered_phases
                ],
            },
        ))

    return issues


__all__ = [
    "DANGLING_REFERENCE",
    "check_organization_integrity",
    "HAPValidationIssue",
    "validate_hap_agent_assignment",
]
