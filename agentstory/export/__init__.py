"""Export of Agent Stories to agent harnesses.

Usage:
    >>> from agentstory.export import export_story
    >>> result = export_story(document, adapter_ids=["claude", "letta"])
    >>> for path in (f.path for f in result.all_files()):
    ...     print(path)
"""

from agentstory.export.base import (
    HarnessAdapter,
    HarnessAdapterInfo,
    HarnessCompatibility,
    HarnessExportResult,
    HarnessFile,
    HarnessOutput,
)
from agentstory.export.agentskills import (
    AgentSkillsAdapter,
    AgentSkillsExport,
    ExportedFile,
    export_to_agentskills,
)
from agentstory.export.adapters import ClaudeAdapter, LangGraphAdapter, LettaAdapter
from agentstory.export.registry import (
    AdapterRegistry,
    export_story,
    get_default_registry,
    reset_default_registry,
)

__all__ = [
    "HarnessAdapter",
    "HarnessAdapterInfo",
    "HarnessCompatibility",
    "HarnessExportResult",
    "HarnessFile",
    "HarnessOutput",
    "AgentSkillsAdapter",
    "AgentSkillsExport",
    "ExportedFile",
    "export_to_agentskills",
    "ClaudeAdapter",
    "LangGraphAdapter",
    "LettaAdapter",
    "AdapterRegistry",
    "export_story",
    "get_default_registry",
    "reset_default_registry",
]
