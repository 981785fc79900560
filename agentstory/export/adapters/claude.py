"""Claude Code adapter.

Generates a ``CLAUDE.md`` persona file, one ``.claude/commands/<slug>.md``
slash command per skill and, when any skill declares tools, an
``mcp.json`` server stub.
"""

from __future__ import annotations

import json
from typing import Optional

from agentstory.export.base import HarnessAdapter, HarnessCompatibility, HarnessFile, HarnessOutput
from agentstory.schemas.behavior import (
    AdaptiveBehavior,
    IterativeBehavior,
    SequentialBehavior,
    WorkflowBehavior,
)
from agentstory.schemas.collaboration import HumanInteractionMode
from agentstory.schemas.guardrails import GuardrailEnforcement
from agentstory.schemas.skill import Skill, generate_slug
from agentstory.schemas.story import AUTONOMY_LEVEL_METADATA, AgentStory
from agentstory.schemas.trigger import TriggerType


AUTONOMY_GUIDANCE: dict[str, str] = {
    "full": (
        "This agent operates with full autonomy. Make decisions independently and "
        "execute actions without requiring approval. Use your judgment to complete "
        "tasks efficiently."
    ),
    "supervised": (
        "This agent operates under supervision. Handle routine tasks independently "
        "but escalate edge cases, unusual situations, or high-risk decisions to a "
        "human for review."
    ),
    "collaborative": (
        "This agent works collaboratively with humans. Propose actions and wait for "
        "feedback before proceeding on significant decisions. Maintain an ongoing "
        "dialogue about approach and progress."
    ),
    "directed": (
        "This agent follows explicit direction. Wait for specific instructions before "
        "taking action. Request approval for each significant step in a process."
    ),
}

HUMAN_INTERACTION_LABELS: dict[HumanInteractionMode, str] = {
    HumanInteractionMode.IN_THE_LOOP: "Human-in-the-loop (approval required for actions)",
    HumanInteractionMode.ON_THE_LOOP: "Human-on-the-loop (oversight with ability to intervene)",
    HumanInteractionMode.OUT_OF_LOOP: "Human-out-of-loop (autonomous operation)",
}

INSTRUCTIONS = """## Using with Claude Code

1. Copy the contents of `CLAUDE.md` to your project root as `CLAUDE.md`
2. Copy the `.claude/commands/` directory to your project
3. If using MCP tools, configure `mcp.json` with your actual server URLs

Each skill is available as a slash command named after its slug, e.g. `/{example}`."""


def _any_trigger(story: AgentStory, trigger_type: TriggerType) -> bool:
    return any(skill.has_trigger_type(trigger_type) for skill in story.skills)


class ClaudeAdapter(HarnessAdapter):
    id = "claude"
    name = "Claude Code"
    description = "Generate CLAUDE.md and slash commands for Claude Code"
    url = "https://claude.ai"

    def can_export(self, story: AgentStory) -> HarnessCompatibility:
        warnings: list[str] = []
        missing: list[str] = []
        unsupported: list[str] = []
        memory = story.memory

        if memory is not None and memory.persistent:
            warnings.append("Persistent memory stores are not directly supported in Claude")
            unsupported.append("persistent memory")

        if _any_trigger(story, TriggerType.SCHEDULE):
            warnings.append("Schedule triggers require external orchestration")
            unsupported.append("scheduled triggers")

        if _any_trigger(story, TriggerType.RESOURCE_CHANGE):
            warnings.append("Resource change triggers require external file watching")
            unsupported.append("resource change triggers")

        if memory is not None and memory.learning:
            warnings.append("Learning/feedback loops are not persisted between sessions")
            unsupported.append("persistent learning")

        if not story.name:
            missing.append("agent name")

        return HarnessCompatibility(
            compatible=not missing,
            warnings=warnings,
            missing_features=missing,
            unsupported_features=unsupported,
        )

    def generate(self, story: AgentStory) -> HarnessOutput:
        files = [HarnessFile("claude/CLAUDE.md", render_claude_md(story))]
        warnings: list[str] = []

        for skill in story.skills:
            files.append(HarnessFile(
                f"claude/.claude/commands/{skill.slug}.md",
                render_slash_command(skill),
            ))

        mcp_config = render_mcp_config(story)
        if mcp_config is not None:
            files.append(HarnessFile("claude/mcp.json", mcp_config))
            warnings.append("MCP configuration generated - review server URLs before use")

        example = story.skills[0].slug if story.skills else "skill-name"
        return HarnessOutput(
            files=files,
            warnings=warnings,
            instructions=INSTRUCTIONS.format(example=example),
        )


# =============================================================================
# CLAUDE.md
# =============================================================================


def _execution_summary(skill: Skill) -> list[str]:
    behavior = skill.behavior
    if isinstance(behavior, SequentialBehavior):
        return [f"{i}. {step}" for i, step in enumerate(behavior.steps, 1)]
    if isinstance(behavior, WorkflowBehavior):
        return [f"- **{stage.name}**: {stage.purpose}" for stage in behavior.stages]
    if isinstance(behavior, AdaptiveBehavior):
        return [f"Choose from: {', '.join(behavior.capabilities)}"]
    if isinstance(behavior, IterativeBehavior):
        return [
            f"Repeat: {', '.join(behavior.body)}",
            f"Until: {behavior.termination_condition}",
        ]
    return []


def render_claude_md(story: AgentStory) -> str:
    lines = ["## Persona\n", f"You are **{story.name}**."]
    if story.role:
        lines.append(f"\n{story.role}")
    if story.purpose:
        lines.append(f"\n**Purpose**: {story.purpose}")
    lines.append("")

    if story.autonomy_level is not None:
        level = AUTONOMY_LEVEL_METADATA[story.autonomy_level.value]
        lines.append("## Operating Mode\n")
        lines.append(f"**Autonomy**: {level['label']} ({level['human_involvement']})\n")
        lines.append(AUTONOMY_GUIDANCE.get(story.autonomy_level.value, AUTONOMY_GUIDANCE["collaborative"]))
        lines.append("")

    interaction = story.human_interaction
    if interaction is not None:
        lines.append("## Human Interaction\n")
        lines.append(f"**Mode**: {HUMAN_INTERACTION_LABELS[interaction.mode]}\n")
        if interaction.checkpoints:
            lines.append("### Checkpoints\n")
            for cp in interaction.checkpoints:
                lines.append(f'- **{cp.type.value}** "{cp.name}": {cp.trigger}')
                if cp.timeout:
                    lines.append(f"  - Timeout: {cp.timeout}")
            lines.append("")
        if interaction.escalation is not None:
            lines.append("### Escalation\n")
            lines.append(f"- **When**: {interaction.escalation.conditions}")
            lines.append(f"- **How**: {interaction.escalation.channel}")
            lines.append("")

    if story.skills:
        lines.append("## Capabilities\n")
        for skill in story.skills:
            lines.append(f"### {skill.name}\n")
            lines.append(skill.description)
            lines.append("")

            lines.append("**When to activate**:")
            for trigger in skill.triggers:
                lines.append(f"- {trigger.description}")
                if trigger.examples:
                    lines.append(f"  - Examples: {', '.join(trigger.examples)}")
            lines.append("")

            execution = _execution_summary(skill)
            if execution:
                lines.append("**Execution**:")
                lines.extend(execution)
                lines.append("")

            lines.append("**Success criteria**:")
            lines.extend(f"- {c}" for c in skill.acceptance.success_conditions)
            lines.append("")

    tools = {}
    for tool in story.all_tools():
        tools.setdefault(tool.name, tool)
    if tools:
        lines.append("## Tools\n")
        lines.append("The following tools are available:\n")
        for tool in tools.values():
            lines.append(f"- **{tool.name}**: {tool.purpose}")
            if tool.conditions:
                lines.append(f"  - Use when: {tool.conditions}")
        lines.append("")

    if story.guardrails:
        lines.append("## Constraints\n")
        for guardrail in story.guardrails:
            marker = "⚠️" if guardrail.enforcement == GuardrailEnforcement.HARD else ""
            lines.append(f"- {marker}**{guardrail.name}**: {guardrail.constraint}")
            if guardrail.rationale:
                lines.append(f"  - Rationale: {guardrail.rationale}")
        lines.append("")

    if story.memory is not None and story.memory.working:
        lines.append("## Context Management\n")
        lines.append("Maintain awareness of:")
        lines.extend(f"- {item}" for item in story.memory.working)
        lines.append("")

    return "\n".join(lines)


# =============================================================================
# Slash Commands
# =============================================================================


def render_slash_command(skill: Skill) -> str:
    lines = [skill.description, ""]

    if skill.inputs:
        lines.append("## Inputs\n")
        for item in skill.inputs:
            required = "(required)" if item.required else "(optional)"
            lines.append(f"- **{item.name}** {required}: {item.description}")
        lines.append("")

    behavior = skill.behavior
    if behavior is not None:
        lines.append("## Steps\n")
        if isinstance(behavior, SequentialBehavior):
            lines.extend(f"{i}. {step}" for i, step in enumerate(behavior.steps, 1))
        elif isinstance(behavior, WorkflowBehavior):
            for stage in behavior.stages:
                lines.append(f"### {stage.name}\n")
                lines.append(stage.purpose)
                lines.extend(f"- {action}" for action in stage.actions or [])
                lines.append("")
        elif isinstance(behavior, AdaptiveBehavior):
            lines.append("Select and execute based on context:\n")
            lines.extend(f"- {c}" for c in behavior.capabilities)
        elif isinstance(behavior, IterativeBehavior):
            lines.append("Repeat the following until done:\n")
            lines.extend(f"- {b}" for b in behavior.body)
            lines.append(f"\nStop when: {behavior.termination_condition}")
        lines.append("")

    lines.append("## Success Criteria\n")
    lines.extend(f"- [ ] {c}" for c in skill.acceptance.success_conditions)
    lines.append("")

    if skill.guardrails:
        lines.append("## Constraints\n")
        lines.extend(f"- **{g.name}**: {g.constraint}" for g in skill.guardrails)
        lines.append("")

    return "\n".join(lines)


# =============================================================================
# MCP Configuration
# =============================================================================


def render_mcp_config(story: AgentStory) -> Optional[str]:
    """One MCP server entry per distinct tool slug, or None without tools."""
    servers: dict[str, dict] = {}
    for tool in story.all_tools():
        slug = generate_slug(tool.name)
        if slug not in servers:
            servers[slug] = {"command": f"npx @{slug}/mcp-server", "args": []}
    if not servers:
        return None
    return json.dumps({"mcpServers": servers}, indent=2)


__all__ = [
    "ClaudeAdapter",
    "AUTONOMY_GUIDANCE",
    "render_claude_md",
    "render_slash_command",
    "render_mcp_config",
]
