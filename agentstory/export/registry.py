"""Harness adapter registry.

Central lookup for harness adapters with batch export across them.

Key Components:
    - AdapterRegistry: register/lookup/compatibility/export operations
    - get_default_registry: process-wide registry with the built-in adapters
    - export_story: validate a candidate document, then export it

Example:
    >>> result = export_story(document, adapter_ids=["claude"])
    >>> [f.path for f in result.outputs["claude"].files]
    ['claude/CLAUDE.md', 'claude/.claude/commands/triage.md']
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

from agentstory.core.exceptions import AdapterNotFoundError, IncompatibleStoryError, StoryValidationError
from agentstory.export.base import (
    HarnessAdapter,
    HarnessAdapterInfo,
    HarnessCompatibility,
    HarnessExportResult,
    HarnessOutput,
)
from agentstory.schemas.story import AgentStory
from agentstory.validation.validator import validate_story


logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry of harness adapters keyed by adapter id.

    Adapters keep their registration order for ``list``.
    """

    def __init__(self, adapters: Optional[Sequence[HarnessAdapter]] = None) -> None:
        self._adapters: dict[str, HarnessAdapter] = {}
        for adapter in adapters or []:
            self.register(adapter)

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, adapter: HarnessAdapter) -> None:
        """Register an adapter. An existing adapter with the same id is replaced."""
        if adapter.id in self._adapters:
            logger.warning("Harness adapter %r is already registered. Overwriting.", adapter.id)
        self._adapters[adapter.id] = adapter

    def unregister(self, adapter_id: str) -> bool:
        """Remove an adapter. Returns False if it was not registered."""
        return self._adapters.pop(adapter_id, None) is not None

    # =========================================================================
    # Discovery
    # =========================================================================

    def get(self, adapter_id: str) -> Optional[HarnessAdapter]:
        return self._adapters.get(adapter_id)

    def has(self, adapter_id: str) -> bool:
        return adapter_id in self._adapters

    def list(self) -> list[HarnessAdapter]:
        return list(self._adapters.values())

    def ids(self) -> list[str]:
        return list(self._adapters)

    def info_list(self) -> list[HarnessAdapterInfo]:
        return [adapter.info() for adapter in self._adapters.values()]

    def _require(self, adapter_id: str) -> HarnessAdapter:
        adapter = self.get(adapter_id)
        if adapter is None:
            raise AdapterNotFoundError(
                f"Unknown harness adapter '{adapter_id}'",
                adapter_id=adapter_id,
                available_adapters=self.ids(),
            )
        return adapter

    # =========================================================================
    # Compatibility
    # =========================================================================

    def check_all_compatibility(self, story: AgentStory) -> dict[str, HarnessCompatibility]:
        return {adapter.id: adapter.can_export(story) for adapter in self._adapters.values()}

    def get_compatible(self, story: AgentStory) -> list[HarnessAdapter]:
        """Compatible adapters, those with fewer warnings first, then by name."""
        compatible = [
            (adapter, compat)
            for adapter in self._adapters.values()
            for compat in [adapter.can_export(story)]
            if compat.compatible
        ]
        compatible.sort(key=lambda pair: (len(pair[1].warnings), pair[0].name.lower()))
        return [adapter for adapter, _ in compatible]

    # =========================================================================
    # Export
    # =========================================================================

    def export_to_harnesses(
        self,
        story: AgentStory,
        adapter_ids: Optional[Sequence[str]] = None,
        include_source: bool = False,
    ) -> HarnessExportResult:
        """Export ``story`` with several adapters.

        Args:
            story: A structurally valid story.
            adapter_ids: Adapters to run, in order. Defaults to every
                compatible adapter.
            include_source: Attach the story JSON to the result.

        Returns:
            HarnessExportResult. Incompatible adapters are skipped with a
            warning rather than failing the export.

        Raises:
            AdapterNotFoundError: If an id in ``adapter_ids`` is unknown.
        """
        if adapter_ids is None:
            adapters = self.get_compatible(story)
        else:
            adapters = [self._require(adapter_id) for adapter_id in adapter_ids]

        result = HarnessExportResult()
        for adapter in adapters:
            compat = adapter.can_export(story)
            if not compat.compatible:
                result.warnings.append(f"Skipping {adapter.name}: not compatible")
                continue
            result.warnings.extend(f"{adapter.name}: {w}" for w in compat.warnings)

            output = adapter.generate(story)
            result.outputs[adapter.id] = output
            result.warnings.extend(f"{adapter.name}: {w}" for w in output.warnings)

        if include_source:
            result.source = json.dumps(story.to_dict(), indent=2)

        logger.debug(
            "Exported story %r with %d adapter(s), %d warning(s)",
            story.name,
            len(result.outputs),
            len(result.warnings),
        )
        return result

    def export_to_harness(self, story: AgentStory, adapter_id: str) -> HarnessOutput:
        """Export ``story`` with one adapter.

        Raises:
            AdapterNotFoundError: If the adapter is unknown.
            IncompatibleStoryError: If the adapter cannot export the story.
        """
        adapter = self._require(adapter_id)
        compat = adapter.can_export(story)
        if not compat.compatible:
            raise IncompatibleStoryError(
                f"Story '{story.name}' cannot be exported to {adapter.name}",
                adapter_id=adapter_id,
                missing_features=compat.missing_features,
            )
        return adapter.generate(story)

    def __len__(self) -> int:
        return len(self._adapters)

    def __contains__(self, adapter_id: object) -> bool:
        return adapter_id in self._adapters


# =============================================================================
# Default Registry
# =============================================================================

_default_registry: Optional[AdapterRegistry] = None


def get_default_registry() -> AdapterRegistry:
    """Get the shared registry, creating it with the built-in adapters."""
    global _default_registry
    if _default_registry is None:
        from agentstory.export.adapters import ClaudeAdapter, LangGraphAdapter, LettaAdapter
        from agentstory.export.agentskills import AgentSkillsAdapter

        _default_registry = AdapterRegistry([
            ClaudeAdapter(),
            LettaAdapter(),
            LangGraphAdapter(),
            AgentSkillsAdapter(),
        ])
    return _default_registry


def reset_default_registry() -> None:
    """Drop the shared registry so the next access rebuilds it."""
    global _default_registry
    _default_registry = None


def export_story(
    candidate: Any,
    adapter_ids: Optional[Sequence[str]] = None,
    include_source: bool = False,
    registry: Optional[AdapterRegistry] = None,
) -> HarnessExportResult:
    """Validate a story document and export it.

    Consistency warnings never block the export.

    Raises:
        StoryValidationError: If the candidate fails structural validation.
        AdapterNotFoundError: If an adapter id is unknown.
    """
    if isinstance(candidate, AgentStory):
        story = candidate
    else:
        result = validate_story(candidate)
        if not result.valid:
            raise StoryValidationError(
                f"Cannot export an invalid story: {len(result.errors)} structural error(s)",
                result=result,
            )
        story = result.data

    if registry is None:
        registry = get_default_registry()
    return registry.export_to_harnesses(story, adapter_ids=adapter_ids, include_source=include_source)


__all__ = [
    "AdapterRegistry",
    "get_default_registry",
    "reset_default_registry",
    "export_story",
]
