"""Letta adapter.

Generates ``letta/agent.json`` in Letta's agent definition format (system
prompt, persona, memory blocks, tools) and, when the story exposes any
tools, ``letta/tools.py`` with one stub function per tool.

Every skill becomes a callable tool whose parameters come from the skill's
inputs. Tools declared by skills are added after them. Tool names are
deduplicated by slug, first one wins.
"""

from __future__ import annotations

import json
from typing import Any

from agentstory.export.adapters.python_source import docstring_literal, python_identifier, unique_identifier
from agentstory.export.base import HarnessAdapter, HarnessCompatibility, HarnessFile, HarnessOutput
from agentstory.schemas.behavior import WorkflowBehavior
from agentstory.schemas.skill import generate_slug
from agentstory.schemas.story import AgentStory
from agentstory.schemas.trigger import TriggerType


PERSONA_AUTONOMY: dict[str, str] = {
    "full": "I operate autonomously and make decisions independently.",
    "supervised": "I handle routine tasks independently but escalate edge cases.",
    "collaborative": "I work collaboratively, proposing actions and seeking feedback.",
    "directed": "I follow explicit direction and request approval for actions.",
}

PERSISTENT_BLOCK_LIMIT = 2000
CONTEXT_BLOCK_LIMIT = 5000

INSTRUCTIONS = """## Using with Letta

1. Install Letta: `pip install letta`
2. Create agent from config:
   ```python
   import json
   from letta import create_client

   client = create_client()

   with open('agent.json') as f:
       config = json.load(f)

   agent = client.create_agent(
       name=config['name'],
       system=config['system'],
       memory=config['memory'],
       tools=config['tools']
   )
   ```
3. If using custom tools, register them from `tools.py` first."""


def json_type(type_name: str) -> str:
    """Map a free-form input type ("List of strings", "int") to a JSON type."""
    lowered = type_name.lower()
    if "string" in lowered or "text" in lowered:
        return "string"
    if "number" in lowered or "int" in lowered or "float" in lowered:
        return "number"
    if "bool" in lowered:
        return "boolean"
    if "array" in lowered or "list" in lowered:
        return "array"
    if "object" in lowered or "dict" in lowered:
        return "object"
    return "string"


PYTHON_TYPES = {
    "string": "str",
    "number": "float",
    "boolean": "bool",
    "array": "list",
    "object": "dict",
}


class LettaAdapter(HarnessAdapter):
    id = "letta"
    name = "Letta"
    description = "Generate agent.json for Letta agent framework"
    url = "https://letta.com"

    def can_export(self, story: AgentStory) -> HarnessCompatibility:
        warnings: list[str] = []
        missing: list[str] = []
        unsupported: list[str] = []

        if not story.name:
            missing.append("agent name")

        if any(isinstance(s.behavior, WorkflowBehavior) for s in story.skills):
            warnings.append("Complex workflows may need manual adjustment in Letta")

        if any(s.has_trigger_type(TriggerType.SCHEDULE) for s in story.skills):
            warnings.append("Schedule triggers require Letta cron job configuration")
            unsupported.append("scheduled triggers")

        if story.memory is not None and story.memory.persistent:
            warnings.append("Persistent stores will be mapped to Letta memory blocks")

        return HarnessCompatibility(
            compatible=not missing,
            warnings=warnings,
            missing_features=missing,
            unsupported_features=unsupported,
        )

    def generate(self, story: AgentStory) -> HarnessOutput:
        tools = extract_tools(story)
        files = [HarnessFile("letta/agent.json", json.dumps(build_agent(story, tools), indent=2))]
        if tools:
            files.append(HarnessFile("letta/tools.py", render_tools_module(story, tools)))
        return HarnessOutput(files=files, instructions=INSTRUCTIONS)


# =============================================================================
# Agent Definition
# =============================================================================


def extract_tools(story: AgentStory) -> list[dict[str, Any]]:
    tools: list[dict[str, Any]] = []
    seen: set[str] = set()

    for skill in story.skills:
        tool_name = generate_slug(skill.name)
        if tool_name in seen:
            continue
        seen.add(tool_name)

        tool: dict[str, Any] = {"name": tool_name, "description": skill.description}
        if skill.inputs:
            properties = {
                item.name: {"type": json_type(item.type), "description": item.description}
                for item in skill.inputs
            }
            parameters: dict[str, Any] = {"type": "object", "properties": properties}
            required = [item.name for item in skill.inputs if item.required]
            if required:
                parameters["required"] = required
            tool["parameters"] = parameters
        tools.append(tool)

    for declared in story.all_tools():
        tool_name = generate_slug(declared.name)
        if tool_name in seen:
            continue
        seen.add(tool_name)
        tools.append({"name": tool_name, "description": declared.purpose})

    return tools


def build_agent(story: AgentStory, tools: list[dict[str, Any]]) -> dict[str, Any]:
    system: list[str] = []
    if story.role:
        system.append(story.role)
    if story.purpose:
        system.append(f"\nYour purpose: {story.purpose}")
    if story.skills:
        system.append("\n\nYou have the following capabilities:")
        system.extend(f"- {s.name}: {s.description}" for s in story.skills)
    if story.guardrails:
        system.append("\n\nConstraints:")
        system.extend(f"- {g.name}: {g.constraint}" for g in story.guardrails)

    persona = [f"I am {story.name}."]
    if story.role:
        persona.append(story.role)
    if story.autonomy_level is not None:
        persona.append(PERSONA_AUTONOMY[story.autonomy_level.value])

    blocks: list[dict[str, Any]] = []
    memory = story.memory
    if memory is not None:
        for store in memory.persistent or []:
            blocks.append({"label": store.name, "value": store.purpose, "limit": PERSISTENT_BLOCK_LIMIT})
        if memory.working:
            blocks.append({"label": "context", "value": "\n".join(memory.working), "limit": CONTEXT_BLOCK_LIMIT})

    agent_memory: dict[str, Any] = {
        "human": "The user interacting with this agent.",
        "persona": " ".join(persona),
    }
    if blocks:
        agent_memory["blocks"] = blocks

    metadata: dict[str, Any] = {"source": "agentstories", "version": story.version}
    if story.autonomy_level is not None:
        metadata["autonomyLevel"] = story.autonomy_level.value

    return {
        "name": generate_slug(story.name),
        "description": story.purpose or f"{story.name} agent",
        "system": "\n".join(system),
        "memory": agent_memory,
        "tools": tools,
        "metadata": metadata,
    }


# =============================================================================
# tools.py
# =============================================================================


def render_tools_module(story: AgentStory, tools: list[dict[str, Any]]) -> str:
    header = (
        f"\nTool definitions for {story.name}\n\n"
        "Register these tools with your Letta client before creating the agent.\n"
    )
    lines = [docstring_literal(header), "", "from letta import tool", ""]

    for tool in tools:
        function_name = python_identifier(tool["name"])
        properties = tool.get("parameters", {}).get("properties", {})

        taken: set[str] = set()
        params = [
            f"{unique_identifier(name, taken)}: {PYTHON_TYPES.get(prop['type'], 'str')}"
            for name, prop in properties.items()
        ]

        lines.extend([
            "",
            "@tool",
            f"def {function_name}({', '.join(params)}) -> str:",
            f"    {docstring_literal(tool['description'])}",
            f'    raise NotImplementedError("{function_name} is not implemented yet")',
        ])

    return "\n".join(lines) + "\n"


__all__ = [
    "LettaAdapter",
    "json_type",
    "extract_tools",
    "build_agent",
    "render_tools_module",
]
