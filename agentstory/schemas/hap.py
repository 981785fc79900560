"""Human-Agent Pair (HAP) schemas and helpers.

A HAP links a Person in a Role to an AgentStory. The work they share is
broken into tasks, and every task is split into four responsibility
phases:

    manage   sets goals, priorities, constraints
    define   specifies requirements and acceptance criteria
    perform  executes the work
    review   validates output and gives feedback

Each phase is owned by either the human or the agent. An agent-owned
phase is "covered" once it points at a skill of the paired story.

Key Components:
    - PhaseAssignment, TaskPhases, TaskResponsibility: per-task ownership
    - CapabilityRequirement: a skill the agent still needs for a phase
    - HumanAgentPair: the pairing record itself
    - RESPONSIBILITY_PRESETS: common ownership patterns (HHHH, HAAH, ...)
    - calculate_hap_metrics, determine_integration_status,
      determine_task_integration_status, calculate_phase_distribution,
      analyze_agent_skill_coverage: derived views

Example:
    >>> task = create_task_from_preset("Weekly report", "supervised-execution")
    >>> [owner.value for _, owner in task.phases.owners()]
    ['human', 'agent', 'agent', 'human']
"""

from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Iterator, Optional, Sequence

from pydantic import Field

from agentstory.core.exceptions import OrganizationError
from agentstory.schemas.base import LAX, StoryModel
from agentstory.schemas.organization import OrganizationRecord
from agentstory.schemas.skill import Skill


# =============================================================================
# Enums
# =============================================================================


class ResponsibilityPhase(str, Enum):
    MANAGE = "manage"
    DEFINE = "define"
    PERFORM = "perform"
    REVIEW = "review"


PHASE_ORDER = (
    ResponsibilityPhase.MANAGE,
    ResponsibilityPhase.DEFINE,
    ResponsibilityPhase.PERFORM,
    ResponsibilityPhase.REVIEW,
)


class PhaseOwner(str, Enum):
    HUMAN = "human"
    AGENT = "agent"


class TaskIntegrationStatus(str, Enum):
    NOT_STARTED = "not_started"
    PARTIALLY_DEFINED = "partially_defined"
    READY = "ready"
    ACTIVE = "active"


class HAPIntegrationStatus(str, Enum):
    NOT_STARTED = "not_started"
    PLANNING = "planning"
    SKILLS_PENDING = "skills_pending"
    READY = "ready"
    ACTIVE = "active"
    PAUSED = "paused"


class CapabilityRequirementStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    READY = "ready"
    APPLIED = "applied"
    REJECTED = "rejected"


OPEN_REQUIREMENT_STATUSES = frozenset({
    CapabilityRequirementStatus.PENDING,
    CapabilityRequirementStatus.GENERATING,
    CapabilityRequirementStatus.READY,
})


# =============================================================================
# Schemas
# =============================================================================


class PhaseAssignment(StoryModel):
    phase: Annotated[ResponsibilityPhase, LAX]
    owner: Annotated[PhaseOwner, LAX] = PhaseOwner.HUMAN
    skill_id: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class TaskPhases(StoryModel):
    """The four phase assignments of one task."""

    manage: PhaseAssignment
    define: PhaseAssignment
    perform: PhaseAssignment
    review: PhaseAssignment

    def items(self) -> Iterator[tuple[ResponsibilityPhase, PhaseAssignment]]:
        for phase in PHASE_ORDER:
            yield phase, getattr(self, phase.value)

    def owners(self) -> Iterator[tuple[ResponsibilityPhase, PhaseOwner]]:
        for phase, assignment in self.items():
            yield phase, assignment.owner


class TaskResponsibility(StoryModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), min_length=1)
    task_name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    phases: TaskPhases
    integration_status: Annotated[TaskIntegrationStatus, LAX] = TaskIntegrationStatus.NOT_STARTED
    blockers: Optional[list[str]] = None
    target_date: Optional[Annotated[datetime, LAX]] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class CapabilityRequirement(OrganizationRecord):
    """A capability the agent needs before it can own a task phase."""

    hap_id: str = Field(..., min_length=1)
    task_id: str = Field(..., min_length=1)
    phase: Annotated[ResponsibilityPhase, LAX]
    task_name: str
    task_description: Optional[str] = None
    role_context: Optional[str] = None
    suggested_capability_name: str
    suggested_capability_description: str
    required_skills: Optional[list[str]] = None
    status: Annotated[CapabilityRequirementStatus, LAX] = CapabilityRequirementStatus.PENDING
    agent_story_id: str = Field(..., min_length=1)
    applied_at: Optional[Annotated[datetime, LAX]] = None


class HAPMetrics(StoryModel):
    total_tasks: int = 0
    total_phases: int = 0
    human_phases: int = 0
    agent_phases: int = 0
    agent_phases_with_skills: int = 0
    agent_phases_pending_skills: int = 0
    pending_capability_requirements: int = 0
    ready_tasks: int = 0


class HumanAgentPair(OrganizationRecord):
    """Links a person in a role to an agent story.

    Attributes:
        person_id: The human half of the pair.
        role_id: The role the person holds in this pairing.
        agent_story_id: The agent half of the pair.
        tasks: Shared tasks with per-phase ownership.
        capability_requirements: Skills the agent still needs.
        integration_status: Overall rollout state.
        metrics: Cached metrics, see ``calculate_hap_metrics``.
        notes: Free-form notes.
    """

    person_id: str = Field(..., min_length=1)
    role_id: str = Field(..., min_length=1)
    agent_story_id: str = ""
    tasks: list[TaskResponsibility] = Field(default_factory=list)
    capability_requirements: list[CapabilityRequirement] = Field(default_factory=list)
    integration_status: Annotated[HAPIntegrationStatus, LAX] = HAPIntegrationStatus.NOT_STARTED
    metrics: Optional[HAPMetrics] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


# =============================================================================
# Presets
# =============================================================================


def _pattern(code: str) -> dict[ResponsibilityPhase, PhaseOwner]:
    owners = {"H": PhaseOwner.HUMAN, "A": PhaseOwner.AGENT}
    return {phase: owners[letter] for phase, letter in zip(PHASE_ORDER, code)}


RESPONSIBILITY_PRESETS: dict[str, dict] = {
    "human-only": {
        "label": "Human Only",
        "description": "Human handles all phases",
        "pattern": "HHHH",
        "phases": _pattern("HHHH"),
    },
    "agent-only": {
        "label": "Agent Only",
        "description": "Agent handles all phases autonomously",
        "pattern": "AAAA",
        "phases": _pattern("AAAA"),
    },
    "supervised-execution": {
        "label": "Supervised Execution",
        "description": "Human manages and reviews; agent defines and performs",
        "pattern": "HAAH",
        "phases": _pattern("HAAH"),
    },
    "directed-execution": {
        "label": "Directed Execution",
        "description": "Human directs; agent performs and self-reviews",
        "pattern": "HHAA",
        "phases": _pattern("HHAA"),
    },
    "human-controlled": {
        "label": "Human Controlled",
        "description": "Human controls all except execution",
        "pattern": "HHAH",
        "phases": _pattern("HHAH"),
    },
    "agent-directed": {
        "label": "Agent Directed",
        "description": "Agent directs; human performs and reviews",
        "pattern": "AAHH",
        "phases": _pattern("AAHH"),
    },
}


def _get_preset(preset: str) -> dict:
    try:
        return RESPONSIBILITY_PRESETS[preset]
    except KeyError:
        raise OrganizationError(
            f"Unknown responsibility preset '{preset}'. "
            f"Valid presets: {', '.join(RESPONSIBILITY_PRESETS)}",
            entity="task",
        ) from None


# =============================================================================
# Factories
# =============================================================================


def create_phase_assignment(
    phase: ResponsibilityPhase,
    owner: PhaseOwner = PhaseOwner.HUMAN,
) -> PhaseAssignment:
    return PhaseAssignment(phase=phase, owner=owner, skill_id=None)


def create_task_from_preset(task_name: str, preset: str = "human-only") -> TaskResponsibility:
    """Create a task whose phase owners follow a named preset.

    Raises:
        OrganizationError: If the preset name is unknown.
    """
    owners = _get_preset(preset)["phases"]
    phases = TaskPhases(**{
        phase.value: create_phase_assignment(phase, owners[phase]) for phase in PHASE_ORDER
    })
    return TaskResponsibility(task_name=task_name, phases=phases)


def apply_preset_to_task(task: TaskResponsibility, preset: str) -> TaskResponsibility:
    """Return a copy of ``task`` with phase owners replaced by ``preset``.

    Skill links and notes on each phase are kept.
    """
    owners = _get_preset(preset)["phases"]
    phases = TaskPhases(**{
        phase.value: assignment.model_copy(update={"owner": owners[phase]})
        for phase, assignment in task.phases.items()
    })
    return task.model_copy(update={"phases": phases})


def create_hap(person_id: str, role_id: str, agent_story_id: str) -> HumanAgentPair:
    return HumanAgentPair(person_id=person_id, role_id=role_id, agent_story_id=agent_story_id)


_PHASE_VERBS = {
    ResponsibilityPhase.MANAGE: "Manage",
    ResponsibilityPhase.DEFINE: "Define",
    ResponsibilityPhase.PERFORM: "Execute",
    ResponsibilityPhase.REVIEW: "Review",
}


def create_capability_requirement(
    hap: HumanAgentPair,
    task: TaskResponsibility,
    phase: ResponsibilityPhase,
) -> CapabilityRequirement:
    """Create a pending requirement for the agent to cover ``phase`` of ``task``."""
    return CapabilityRequirement(
        hap_id=hap.id,
        task_id=task.id,
        phase=phase,
        task_name=task.task_name,
        task_description=task.description,
        suggested_capability_name=f"{_PHASE_VERBS[phase]} {task.task_name}",
        suggested_capability_description=f'Capability to {phase.value} the "{task.task_name}" task',
        agent_story_id=hap.agent_story_id,
    )


# =============================================================================
# Metrics
# =============================================================================


def _percent(part: int, total: int) -> int:
    # Half-up rounding.
    return int(math.floor(part * 100 / total + 0.5))


def calculate_hap_metrics(hap: HumanAgentPair) -> HAPMetrics:
    """Count phase ownership and skill coverage across a HAP's tasks.

    A task counts as ready when it has no agent phases or every agent
    phase has a skill linked.
    """
    human_phases = 0
    agent_phases = 0
    with_skills = 0
    ready_tasks = 0

    for task in hap.tasks:
        task_ready = True
        for _, assignment in task.phases.items():
            if assignment.owner == PhaseOwner.HUMAN:
                human_phases += 1
                continue
            agent_phases += 1
            if assignment.skill_id:
                with_skills += 1
            else:
                task_ready = False
        if task_ready:
            ready_tasks += 1

    pending = sum(
        1 for r in hap.capability_requirements if r.status in OPEN_REQUIREMENT_STATUSES
    )

    return HAPMetrics(
        total_tasks=len(hap.tasks),
        total_phases=len(hap.tasks) * len(PHASE_ORDER),
        human_phases=human_phases,
        agent_phases=agent_phases,
        agent_phases_with_skills=with_skills,
        agent_phases_pending_skills=agent_phases - with_skills,
        pending_capability_requirements=pending,
        ready_tasks=ready_tasks,
    )


def determine_integration_status(hap: HumanAgentPair) -> HAPIntegrationStatus:
    """Derive the rollout state of a HAP from its tasks.

    no tasks -> not_started; no agent phases -> planning; any agent phase
    without a skill -> skills_pending; otherwise ready.
    """
    if not hap.tasks:
        return HAPIntegrationStatus.NOT_STARTED

    metrics = calculate_hap_metrics(hap)
    if metrics.agent_phases == 0:
        return HAPIntegrationStatus.PLANNING
    if metrics.agent_phases_pending_skills > 0:
        return HAPIntegrationStatus.SKILLS_PENDING
    return HAPIntegrationStatus.READY


def determine_task_integration_status(task: TaskResponsibility) -> TaskIntegrationStatus:
    agent_assignments = [a for _, a in task.phases.items() if a.owner == PhaseOwner.AGENT]
    if not agent_assignments:
        return TaskIntegrationStatus.NOT_STARTED
    if all(a.skill_id for a in agent_assignments):
        return TaskIntegrationStatus.READY
    return TaskIntegrationStatus.PARTIALLY_DEFINED


def calculate_phase_distribution(tasks: Sequence[TaskResponsibility]) -> dict[str, int]:
    """Share of phases owned by humans vs. the agent.

    Returns:
        Dict with ``human``, ``agent``, ``human_percent`` and
        ``agent_percent``. With no tasks everything is human (100/0).
    """
    if not tasks:
        return {"human": 0, "agent": 0, "human_percent": 100, "agent_percent": 0}

    human = 0
    agent = 0
    for task in tasks:
        for _, owner in task.phases.owners():
            if owner == PhaseOwner.HUMAN:
                human += 1
            else:
                agent += 1

    total = human + agent
    return {
        "human": human,
        "agent": agent,
        "human_percent": _percent(human, total),
        "agent_percent": _percent(agent, total),
    }


# =============================================================================
# Skill Coverage
# =============================================================================


class AgentPhaseRequirement(StoryModel):
    task_id: str
    task_name: str
    phase: Annotated[ResponsibilityPhase, LAX]
    has_skill_assigned: bool
    assigned_skill_id: Optional[str] = None
    assigned_skill_name: Optional[str] = None


class SkillCoverageAnalysis(StoryModel):
    total_agent_phases: int
    phases_with_skills: int
    phases_without_skills: int
    coverage_percent: int
    is_fully_covered: bool
    uncovered_phases: list[AgentPhaseRequirement] = Field(default_factory=list)
    covered_phases: list[AgentPhaseRequirement] = Field(default_factory=list)


def analyze_agent_skill_coverage(
    tasks: Sequence[TaskResponsibility],
    agent_skills: Optional[Sequence[Skill]] = None,
) -> SkillCoverageAnalysis:
    """Check whether every agent-owned phase links to one of the agent's skills.

    A phase is covered only if its ``skill_id`` matches the ``id`` of a
    skill in ``agent_skills``. Skills without an id can never cover a phase.
    """
    skill_names = {s.id: s.name for s in agent_skills or [] if s.id}
    covered: list[AgentPhaseRequirement] = []
    uncovered: list[AgentPhaseRequirement] = []

    for task in tasks:
        for phase, assignment in task.phases.items():
            if assignment.owner != PhaseOwner.AGENT:
                continue
            has_skill = bool(assignment.skill_id) and assignment.skill_id in skill_names
            requirement = AgentPhaseRequirement(
                task_id=task.id,
                task_name=task.task_name,
                phase=phase,
                has_skill_assigned=has_skill,
                assigned_skill_id=assignment.skill_id or None,
                assigned_skill_name=skill_names.get(assignment.skill_id) if assignment.skill_id else None,
            )
            (covered if has_skill else uncovered).append(requirement)

    total = len(covered) + len(uncovered)
    return SkillCoverageAnalysis(
        total_agent_phases=total,
        phases_with_skills=len(covered),
        phases_without_skills=len(uncovered),
        coverage_percent=_percent(len(covered), total) if total else 100,
        is_fully_covered=not uncovered,
        uncovered_phases=uncovered,
        covered_phases=covered,
    )


__all__ = [
    "ResponsibilityPhase",
    "PHASE_ORDER",
    "PhaseOwner",
    "TaskIntegrationStatus",
    "HAPIntegrationStatus",
    "CapabilityRequirementStatus",
    "PhaseAssignment",
    "TaskPhases",
    "TaskResponsibility",
    "CapabilityRequirement",
    "HAPMetrics",
    "HumanAgentPair",
    "RESPONSIBILITY_PRESETS",
    "create_phase_assignment",
    "create_task_from_preset",
    "apply_preset_to_task",
    "create_hap",
    "create_capability_requirement",
    "calculate_hap_metrics",
    "determine_integration_status",
    "determine_task_integration_status",
    "calculate_phase_distribution",
    "AgentPhaseRequirement",
    "SkillCoverageAnalysis",
    "analyze_agent_skill_coverage",
]
