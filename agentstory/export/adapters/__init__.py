"""Built-in harness adapters."""

from agentstory.export.adapters.claude import ClaudeAdapter
from agentstory.export.adapters.langgraph import LangGraphAdapter
from agentstory.export.adapters.letta import LettaAdapter

__all__ = ["ClaudeAdapter", "LangGraphAdapter", "LettaAdapter"]
