"""AgentSkills.io export.

Converts a Skill into an AgentSkills.io package: a ``SKILL.md`` file with
YAML frontmatter and a Markdown body, plus optional ``scripts/`` and
``references/`` files taken from the skill's portability settings.

Key Components:
    - export_to_agentskills: export one skill
    - AgentSkillsExport: the exported package
    - AgentSkillsAdapter: harness adapter writing one package per skill

Example:
    >>> package = export_to_agentskills(skill)
    >>> package.slug
    'triage-tickets'
    >>> package.skill_md.startswith("---\\nname: triage-tickets\\n")
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from agentstory.core.exceptions import ExportError
from agentstory.export.base import HarnessAdapter, HarnessCompatibility, HarnessFile, HarnessOutput
from agentstory.schemas.behavior import (
    AdaptiveBehavior,
    IterativeBehavior,
    SequentialBehavior,
    WorkflowBehavior,
)
from agentstory.schemas.skill import PortableFile, Skill, generate_slug, is_valid_slug
from agentstory.schemas.story import AgentStory


logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 1024


@dataclass
class ExportedFile:
    filename: str
    content: str


@dataclass
class AgentSkillsExport:
    """One exported skill package.

    Attributes:
        skill_md: Full SKILL.md text (frontmatter and body).
        scripts: Files for the ``scripts/`` directory.
        references: Files for the ``references/`` directory.
        warnings: Notes produced during export.
        slug: Directory name of the package.
    """

    skill_md: str
    slug: str
    scripts: list[ExportedFile] = field(default_factory=list)
    references: list[ExportedFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def files(self, root: str = "") -> list[HarnessFile]:
        """Flatten the package into files under ``root/slug/``."""
        base = f"{root}/{self.slug}" if root else self.slug
        files = [HarnessFile(f"{base}/SKILL.md", self.skill_md)]
        files.extend(HarnessFile(f"{base}/scripts/{s.filename}", s.content) for s in self.scripts)
        files.extend(HarnessFile(f"{base}/references/{r.filename}", r.content) for r in self.references)
        return files


def export_to_agentskills(
    skill: Skill,
    include_scripts: bool = True,
    include_references: bool = True,
    generate_missing_slug: bool = True,
) -> AgentSkillsExport:
    """Export a skill in AgentSkills.io format.

    Args:
        skill: The skill to export.
        include_scripts: Copy portability scripts that have content.
        include_references: Copy portability references that have content.
        generate_missing_slug: Derive a slug from the name when none is set.

    Returns:
        AgentSkillsExport with the rendered package.

    Raises:
        ExportError: If no slug is available or the slug is invalid.
    """
    warnings: list[str] = []
    portability = skill.portability

    slug = portability.slug if portability is not None else None
    if not slug and generate_missing_slug:
        slug = generate_slug(skill.name)
        warnings.append(f'Generated slug "{slug}" from skill name')
    if not slug:
        raise ExportError(
            f'Missing slug for skill "{skill.name}". '
            "Configure portability settings or enable generate_missing_slug.",
            adapter_id="agentskills",
        )
    if not is_valid_slug(slug):
        raise ExportError(
            f'Invalid slug "{slug}" for skill "{skill.name}". '
            "Must be lowercase alphanumeric with hyphens.",
            adapter_id="agentskills",
        )

    skill_md = f"---\n{render_frontmatter(skill, slug)}---\n\n{render_body(skill)}"

    scripts: list[ExportedFile] = []
    references: list[ExportedFile] = []
    if portability is not None:
        if include_scripts:
            scripts = _with_content(portability.scripts)
        if include_references:
            references = _with_content(portability.references)

    return AgentSkillsExport(
        skill_md=skill_md,
        slug=slug,
        scripts=scripts,
        references=references,
        warnings=warnings,
    )


def _with_content(files: Optional[list[PortableFile]]) -> list[ExportedFile]:
    return [ExportedFile(f.filename, f.content) for f in files or [] if f.content]


# =============================================================================
# Frontmatter
# =============================================================================


def render_frontmatter(skill: Skill, slug: str) -> str:
    """Render the YAML frontmatter block, without the ``---`` fences."""
    data: dict[str, Any] = {
        "name": slug,
        "description": skill.description[:DESCRIPTION_MAX_LENGTH],
    }
    portability = skill.portability
    if portability is not None and portability.license:
        data["license"] = portability.license
    if portability is not None and portability.compatibility:
        data["compatibility"] = portability.compatibility
    if skill.tools:
        data["allowed-tools"] = " ".join(generate_slug(t.name) for t in skill.tools)

    metadata: dict[str, str] = {"domain": skill.domain, "acquired": skill.acquired.value}
    if skill.id:
        metadata["source-id"] = skill.id
    data["metadata"] = metadata

    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)


# =============================================================================
# Markdown Body
# =============================================================================


def _render_behavior(skill: Skill, lines: list[str]) -> None:
    behavior = skill.behavior
    if behavior is None:
        return

    lines.append("## Behavior\n")
    lines.append(f"**Model**: {behavior.model}\n")

    if isinstance(behavior, SequentialBehavior):
        lines.append("### Steps\n")
        lines.extend(f"{i}. {step}" for i, step in enumerate(behavior.steps, 1))
        lines.append("")
    elif isinstance(behavior, WorkflowBehavior):
        lines.append("### Stages\n")
        for stage in behavior.stages:
            lines.append(f"#### {stage.name}\n")
            lines.append(f"{stage.purpose}\n")
            if stage.actions:
                lines.append("Actions:")
                lines.extend(f"- {a}" for a in stage.actions)
            if stage.transitions:
                lines.append("\nTransitions:")
                lines.extend(f"- → {t.to} when {t.when}" for t in stage.transitions)
            lines.append("")
    elif isinstance(behavior, AdaptiveBehavior):
        lines.append("### Capabilities\n")
        lines.extend(f"- {c}" for c in behavior.capabilities)
        if behavior.selection_strategy:
            lines.append(f"\n**Selection Strategy**: {behavior.selection_strategy}")
        lines.append("")
    elif isinstance(behavior, IterativeBehavior):
        lines.append("### Iteration\n")
        lines.append("**Body**:")
        lines.extend(f"- {b}" for b in behavior.body)
        lines.append(f"\n**Terminates when**: {behavior.termination_condition}")
        if behavior.max_iterations:
            lines.append(f"**Max iterations**: {behavior.max_iterations}")
        lines.append("")


def render_body(skill: Skill) -> str:
    lines = [f"# {skill.name}\n", f"{skill.description}\n"]

    lines.append("## Triggers\n")
    for trigger in skill.triggers:
        lines.append(f"- **{trigger.type.value}**: {trigger.description}")
        if trigger.conditions:
            lines.append(f"  - Conditions: {', '.join(trigger.conditions)}")
        if trigger.examples:
            lines.append(f"  - Examples: {', '.join(trigger.examples)}")
    lines.append("")

    if skill.inputs or skill.outputs:
        lines.append("## Interface\n")
        if skill.inputs:
            lines.append("### Inputs\n")
            lines.append("| Name | Type | Required | Description |")
            lines.append("|------|------|----------|-------------|")
            for item in skill.inputs:
                required = "Yes" if item.required else "No"
                lines.append(f"| {item.name} | {item.type} | {required} | {item.description} |")
            lines.append("")
        if skill.outputs:
            lines.append("### Outputs\n")
            lines.append("| Name | Type | Description |")
            lines.append("|------|------|-------------|")
            for item in skill.outputs:
                lines.append(f"| {item.name} | {item.type} | {item.description} |")
            lines.append("")

    _render_behavior(skill, lines)

    if skill.tools:
        lines.append("## Tools\n")
        lines.append("| Tool | Purpose | Permissions |")
        lines.append("|------|---------|-------------|")
        for tool in skill.tools:
            permissions = ", ".join(p.value for p in tool.permissions)
            lines.append(f"| {tool.name} | {tool.purpose} | {permissions} |")
        lines.append("")

    reasoning = skill.reasoning
    if reasoning is not None:
        lines.append("## Reasoning\n")
        lines.append(f"**Strategy**: {reasoning.strategy.value}\n")
        if reasoning.decision_points:
            lines.append("### Decision Points\n")
            for dp in reasoning.decision_points:
                lines.append(f"#### {dp.name}\n")
                lines.append(f"- **Inputs**: {', '.join(dp.inputs)}")
                lines.append(f"- **Approach**: {dp.approach}")
                if dp.outcomes:
                    lines.append(f"- **Outcomes**: {', '.join(dp.outcomes)}")
                lines.append("")
        if reasoning.retry is not None:
            lines.append("### Retry Configuration\n")
            lines.append(f"- Max attempts: {reasoning.retry.max_attempts}")
            lines.append(f"- Backoff: {reasoning.retry.backoff_strategy.value}")
            if reasoning.retry.retry_on:
                lines.append(f"- Retry on: {', '.join(reasoning.retry.retry_on)}")
            lines.append("")

    acceptance = skill.acceptance
    lines.append("## Success Criteria\n")
    lines.append("### Conditions\n")
    lines.extend(f"- {c}" for c in acceptance.success_conditions)
    lines.append("")
    if acceptance.quality_metrics:
        lines.append("### Quality Metrics\n")
        lines.append("| Metric | Target |")
        lines.append("|--------|--------|")
        lines.extend(f"| {m.name} | {m.target} |" for m in acceptance.quality_metrics)
        lines.append("")
    if acceptance.timeout:
        lines.append(f"**Timeout**: {acceptance.timeout}\n")

    handling = skill.failure_handling
    if handling is not None:
        lines.append("## Error Handling\n")
        if handling.modes:
            lines.append("### Failure Modes\n")
            for mode in handling.modes:
                note = " *(escalate)*" if mode.escalate else ""
                lines.append(f"- **{mode.condition}**: {mode.recovery}{note}")
            lines.append("")
        if handling.default_fallback:
            lines.append(f"**Default fallback**: {handling.default_fallback}\n")

    if skill.guardrails:
        lines.append("## Guardrails\n")
        for guardrail in skill.guardrails:
            lines.append(f"### {guardrail.name}\n")
            lines.append(f"- **Constraint**: {guardrail.constraint}")
            lines.append(f"- **Enforcement**: {guardrail.enforcement.value}")
            if guardrail.on_violation:
                lines.append(f"- **On violation**: {guardrail.on_violation}")
            lines.append("")

    return "\n".join(lines)


# =============================================================================
# Harness Adapter
# =============================================================================


class AgentSkillsAdapter(HarnessAdapter):
    """Writes every skill of a story as ``skills/<slug>/`` package."""

    id = "agentskills"
    name = "AgentSkills.io"
    description = "Export each skill as an AgentSkills.io SKILL.md package"
    url = "https://agentskills.io"

    root = "skills"

    def can_export(self, story: AgentStory) -> HarnessCompatibility:
        missing: list[str] = []
        warnings: list[str] = []
        if not story.skills:
            missing.append("skills")
        for skill in story.skills:
            if skill.portability is None or not skill.portability.slug:
                warnings.append(f'Skill "{skill.name}" has no slug; one will be generated')
        return HarnessCompatibility(compatible=not missing, warnings=warnings, missing_features=missing)

    def generate(self, story: AgentStory) -> HarnessOutput:
        files: list[HarnessFile] = []
        warnings: list[str] = []
        seen: set[str] = set()

        for skill in story.skills:
            try:
                package = export_to_agentskills(skill)
            except ExportError as exc:
                logger.warning("Skipping skill %r: %s", skill.name, exc.message)
                warnings.append(exc.message)
                continue
            if package.slug in seen:
                warnings.append(f'Skipping skill "{skill.name}": slug "{package.slug}" already exported')
                continue
            seen.add(package.slug)
            files.extend(package.files(self.root))

        return HarnessOutput(
            files=files,
            warnings=warnings,
            instructions=(
                "## Using with AgentSkills.io\n\n"
                f"Copy each directory under `{self.root}/` into your agent's skills directory. "
                "Each package holds a `SKILL.md` plus any `scripts/` and `references/`."
            ),
        )


__all__ = [
    "ExportedFile",
    "AgentSkillsExport",
    "export_to_agentskills",
    "render_frontmatter",
    "render_body",
    "AgentSkillsAdapter",
]
