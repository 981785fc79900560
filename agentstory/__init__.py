"""agentstory - Agent Story schema validation and export toolkit.

An Agent Story is a structured description of one AI agent:
- identity, role and purpose
- autonomy level and human oversight
- skills with triggers, tools, behavior, reasoning and acceptance criteria
- memory, collaboration and guardrails

The toolkit validates stories structurally, checks them for consistency,
reports completeness and exports them to agent harnesses.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
