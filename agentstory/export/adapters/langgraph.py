"""LangGraph adapter.

Generates a runnable LangGraph project under ``langgraph/``:

- ``state.py``: the ``AgentState`` TypedDict shared by every node
- ``agent.py``: system prompt, one node per skill, keyword router and
  ``create_graph()``
- ``tools.py``: ``@tool`` stubs for the tools skills declare, when any
- ``requirements.txt``

Skill behaviors shape the node bodies: workflow stages become a stage
table, iterative skills count iterations in state, sequential and adaptive
skills list their steps or capabilities.
"""

from __future__ import annotations

from agentstory.export.adapters.python_source import docstring_literal, python_identifier, unique_identifier
from agentstory.export.base import HarnessAdapter, HarnessCompatibility, HarnessFile, HarnessOutput
from agentstory.schemas.behavior import (
    AdaptiveBehavior,
    IterativeBehavior,
    SequentialBehavior,
    WorkflowBehavior,
)
from agentstory.schemas.skill import Skill, generate_slug
from agentstory.schemas.story import AgentStory


DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_ITERATIONS = 10

# Node names the generated graph uses for itself.
RESERVED_NODES = frozenset({"agent", "tools"})

# Names tools.py defines besides the tool functions.
RESERVED_TOOL_NAMES = frozenset({"tool", "get_tools"})

# Fields every generated AgentState carries.
BASE_STATE_FIELDS = ("messages", "current_skill", "stage", "iteration")

REQUIREMENTS = """langgraph>=0.2.0
langchain-anthropic>=0.2.0
langchain-core>=0.3.0
"""

INSTRUCTIONS = """## Using with LangGraph

1. Install dependencies:
   ```bash
   pip install -r requirements.txt
   ```
2. Set your API key:
   ```bash
   export ANTHROPIC_API_KEY=your-key
   ```
3. Run the agent:
   ```python
   from agent import create_graph

   graph = create_graph()
   result = graph.invoke({"messages": [("user", "Hello!")]})
   ```
4. For streaming:
   ```python
   for event in graph.stream({"messages": [("user", "Hello!")]}):
       print(event)
   ```
5. Or chat interactively with `python agent.py`."""


class LangGraphAdapter(HarnessAdapter):
    id = "langgraph"
    name = "LangGraph"
    description = "Generate Python graph definitions for LangGraph"
    url = "https://langchain-ai.github.io/langgraph/"

    def can_export(self, story: AgentStory) -> HarnessCompatibility:
        warnings: list[str] = []
        missing: list[str] = []

        if not story.name:
            missing.append("agent name")

        if not story.skills:
            warnings.append("Agent has no skills, so the graph will only have the agent node")

        if not any(isinstance(s.behavior, WorkflowBehavior) for s in story.skills):
            warnings.append(
                "No workflow behaviors found. Workflow skills give the graph more structure"
            )

        if story.memory is not None and story.memory.persistent:
            warnings.append("Persistent stores will be mapped to graph state fields")

        return HarnessCompatibility(compatible=not missing, warnings=warnings, missing_features=missing)

    def generate(self, story: AgentStory) -> HarnessOutput:
        nodes = node_names(story)
        tool_names = collect_tool_names(story)

        files = [
            HarnessFile("langgraph/agent.py", render_agent_module(story, nodes, tool_names)),
            HarnessFile("langgraph/state.py", render_state_module(story)),
        ]
        if tool_names:
            files.append(HarnessFile("langgraph/tools.py", render_tools_module(story, tool_names)))
        files.append(HarnessFile("langgraph/requirements.txt", REQUIREMENTS))
        return HarnessOutput(files=files, instructions=INSTRUCTIONS)


# =============================================================================
# Naming
# =============================================================================


def node_names(story: AgentStory) -> list[str]:
    """One unique graph node name per skill, in skill order."""
    taken = set(RESERVED_NODES)
    return [unique_identifier(skill.name, taken) for skill in story.skills]


def collect_tool_names(story: AgentStory) -> dict[str, str]:
    """Map a function name to its purpose for each distinct tool, first declaration wins.

    Tools are deduplicated by slug. Names never shadow ``tool`` or ``get_tools``.
    """
    tools: dict[str, str] = {}
    seen: set[str] = set()
    taken = set(RESERVED_TOOL_NAMES)
    for tool in story.all_tools():
        slug = generate_slug(tool.name)
        if slug in seen:
            continue
        seen.add(slug)
        tools[unique_identifier(tool.name, taken)] = tool.purpose
    return tools


def build_system_prompt(story: AgentStory) -> str:
    parts = [f"You are {story.name}."]
    if story.role:
        parts.append(story.role)
    if story.purpose:
        parts.append(f"Your purpose: {story.purpose}")
    if story.skills:
        parts.append("\nYou have the following capabilities:")
        parts.extend(f"- {s.name}: {s.description}" for s in story.skills)
    if story.guardrails:
        parts.append("\nConstraints you must follow:")
        parts.extend(f"- {g.name}: {g.constraint}" for g in story.guardrails)
    return "\n".join(parts)


# =============================================================================
# state.py
# =============================================================================


def render_state_module(story: AgentStory) -> str:
    lines = [
        docstring_literal(f"State definitions for the {story.name} LangGraph agent."),
        "",
        "from typing import Annotated, Optional, Sequence, TypedDict",
        "",
        "from langgraph.graph.message import add_messages",
        "",
        "",
        "class AgentState(TypedDict, total=False):",
        '    """State passed between nodes in the graph."""',
        "",
        "    messages: Annotated[Sequence, add_messages]",
        "    current_skill: Optional[str]",
        "    stage: Optional[str]",
        "    iteration: int",
    ]

    taken = set(BASE_STATE_FIELDS)
    memory = story.memory
    for store in (memory.persistent or []) if memory is not None else []:
        lines.append(f"    # {_comment(store.purpose)}")
        lines.append(f"    {unique_identifier(store.name, taken)}: Optional[dict]")

    for skill in story.skills:
        if skill.outputs:
            lines.append(f"    # Output from {_comment(skill.name)}")
            lines.append(f"    {unique_identifier(skill.name + ' output', taken)}: Optional[dict]")

    return "\n".join(lines) + "\n"


# =============================================================================
# agent.py
# =============================================================================


def render_agent_module(story: AgentStory, nodes: list[str], tool_names: dict[str, str]) -> str:
    header = f"LangGraph agent: {story.name}"
    if story.purpose:
        header += f"\n\n{story.purpose}"

    lines = [
        docstring_literal(header),
        "",
        "from langchain_anthropic import ChatAnthropic",
        "from langchain_core.messages import HumanMessage, SystemMessage",
        "from langgraph.graph import END, StateGraph",
    ]
    if tool_names:
        lines.append("from langgraph.prebuilt import ToolNode")
    lines.extend(["", "from state import AgentState"])
    if tool_names:
        lines.append("from tools import get_tools")

    lines.extend([
        "",
        "",
        f"SYSTEM_PROMPT = {docstring_literal(build_system_prompt(story))}",
        "",
        f"model = ChatAnthropic(model={DEFAULT_MODEL!r}, temperature=0)",
    ])
    if tool_names:
        lines.extend(["tools = get_tools()", "model_with_tools = model.bind_tools(tools)"])

    for skill, node in zip(story.skills, nodes):
        lines.extend(["", ""])
        lines.extend(render_node_function(skill, node))

    lines.extend(["", ""])
    lines.extend(render_router(story, nodes, has_tools=bool(tool_names)))

    invoker = "model_with_tools" if tool_names else "model"
    lines.extend([
        "",
        "",
        "def agent_node(state: AgentState) -> dict:",
        '    """Main agent node that answers the conversation."""',
        '    messages = [SystemMessage(content=SYSTEM_PROMPT)] + list(state["messages"])',
        f"    return {{\"messages\": [{invoker}.invoke(messages)]}}",
        "",
        "",
        "def create_graph():",
        f"    {docstring_literal(f'Create the {story.name} agent graph.')}",
        "    graph = StateGraph(AgentState)",
        '    graph.add_node("agent", agent_node)',
    ])
    if tool_names:
        lines.append('    graph.add_node("tools", ToolNode(tools))')
    lines.extend(f'    graph.add_node("{node}", {node}_node)' for node in nodes)

    targets = (["tools"] if tool_names else []) + nodes
    lines.extend([
        "",
        '    graph.set_entry_point("agent")',
        f"    graph.add_conditional_edges(\"agent\", route_agent, {targets!r} + [END])",
    ])
    if tool_names:
        lines.append('    graph.add_edge("tools", "agent")')
    lines.extend(f'    graph.add_edge("{node}", "agent")' for node in nodes)

    lines.extend([
        "    return graph.compile()",
        "",
        "",
        'if __name__ == "__main__":',
        "    graph = create_graph()",
        f"    print({f'Chat with {story.name}. Type quit to exit.'!r})",
        '    state = {"messages": [], "current_skill": None, "stage": None, "iteration": 0}',
        "",
        "    while True:",
        '        user_input = input("You: ")',
        '        if user_input.strip().lower() == "quit":',
        "            break",
        '        state["messages"] = list(state["messages"]) + [HumanMessage(content=user_input)]',
        "        state = graph.invoke(state)",
        '        print(f"Agent: {state[\'messages\'][-1].content}")',
    ])

    return "\n".join(lines) + "\n"


def render_node_function(skill: Skill, node: str) -> list[str]:
    doc = f"{skill.name}: {skill.description}"
    if skill.triggers:
        doc += "\n\n    Triggers:\n" + "\n".join(
            f"    - {t.type.value}: {t.description}" for t in skill.triggers
        )
        doc += "\n    "

    lines = [
        f"def {node}_node(state: AgentState) -> dict:",
        f"    {docstring_literal(doc)}",
    ]

    behavior = skill.behavior
    if isinstance(behavior, SequentialBehavior):
        lines.append(f"    steps = {behavior.steps!r}")
        lines.append("    for step in steps:")
        lines.append("        pass  # execute the step")
    elif isinstance(behavior, WorkflowBehavior):
        stages = {
            python_identifier(stage.name): {
                "purpose": stage.purpose,
                "transitions": [
                    {"to": python_identifier(t.to), "when": t.when} for t in stage.transitions or []
                ],
            }
            for stage in behavior.stages
        }
        entry = python_identifier(behavior.entry_stage or behavior.stages[0].name)
        lines.append(f"    stages = {stages!r}")
        lines.append(f"    current_stage = state.get(\"stage\") or {entry!r}")
        lines.append("    # execute stages[current_stage] and pick the next stage from its transitions")
        lines.append(f"    return {{\"current_skill\": {node!r}, \"stage\": current_stage}}")
        return lines
    elif isinstance(behavior, AdaptiveBehavior):
        lines.append(f"    capabilities = {behavior.capabilities!r}")
        lines.append("    # select a capability that fits the conversation")
    elif isinstance(behavior, IterativeBehavior):
        lines.append(f"    max_iterations = {behavior.max_iterations or DEFAULT_MAX_ITERATIONS}")
        lines.append(f"    termination = {behavior.termination_condition!r}")
        lines.append(f"    body = {behavior.body!r}")
        lines.append('    iteration = state.get("iteration", 0)')
        lines.append("    if iteration >= max_iterations:")
        lines.append(f"        return {{\"current_skill\": {node!r}, \"iteration\": 0}}")
        lines.append(f"    return {{\"current_skill\": {node!r}, \"iteration\": iteration + 1}}")
        return lines

    lines.append(f"    return {{\"current_skill\": {node!r}}}")
    return lines


def render_router(story: AgentStory, nodes: list[str], has_tools: bool = False) -> list[str]:
    """Route on tool calls first, then on skill-name keywords."""
    lines = [
        "def route_agent(state: AgentState) -> str:",
        '    """Route agent output to the next node."""',
        '    last_message = state["messages"][-1]',
    ]
    if has_tools:
        lines.append('    if getattr(last_message, "tool_calls", None):')
        lines.append('        return "tools"')

    if nodes:
        lines.append('    content = str(getattr(last_message, "content", "")).lower()')
        for skill, node in zip(story.skills, nodes):
            keywords = skill.name.lower().split()
            lines.append(
                f"    if state.get(\"current_skill\") != {node!r} "
                f"and any(kw in content for kw in {keywords!r}):"
            )
            lines.append(f"        return {node!r}")

    lines.append("    return END")
    return lines


# =============================================================================
# tools.py
# =============================================================================


def render_tools_module(story: AgentStory, tool_names: dict[str, str]) -> str:
    lines = [
        docstring_literal(f"Tool definitions for the {story.name} LangGraph agent."),
        "",
        "from langchain_core.tools import tool",
    ]

    for function_name, purpose in tool_names.items():
        lines.extend([
            "",
            "",
            "@tool",
            f"def {function_name}() -> str:",
            f"    {docstring_literal(purpose)}",
            f'    raise NotImplementedError("{function_name} is not implemented yet")',
        ])

    lines.extend([
        "",
        "",
        "def get_tools():",
        '    """Return all available tools."""',
        f"    return [{', '.join(tool_names)}]",
    ])
    return "\n".join(lines) + "\n"


def _comment(text: str) -> str:
    return " ".join(text.split())


__all__ = [
    "LangGraphAdapter",
    "node_names",
    "collect_tool_names",
    "build_system_prompt",
    "render_state_module",
    "render_agent_module",
    "render_node_function",
    "render_router",
    "render_tools_module",
]
