"""Tests for the adapter registry and export_story."""

import json

import pytest

from agentstory.core.exceptions import AdapterNotFoundError, IncompatibleStoryError, StoryValidationError
from agentstory.export.base import HarnessAdapter, HarnessCompatibility, HarnessFile, HarnessOutput
from agentstory.export.registry import AdapterRegistry, export_story, get_default_registry


class EchoAdapter(HarnessAdapter):
    id = "echo"
    name = "Echo"
    description = "Writes the story name"

    def can_export(self, story):
        return HarnessCompatibility(compatible=True)

    def generate(self, story):
        return HarnessOutput(files=[HarnessFile("echo/name.txt", story.name)], warnings=["echoed"])


class NeverAdapter(EchoAdapter):
    id = "never"
    name = "Never"

    def can_export(self, story):
        return HarnessCompatibility(compatible=False, missing_features=["everything"])


class TestRegistration:
    """Tests for register/unregister/lookup."""

    def test_register_and_lookup(self):
        registry = AdapterRegistry()
        assert len(registry) == 0

        adapter = EchoAdapter()
        registry.register(adapter)
        assert registry.get("echo") is adapter
        assert registry.has("echo")
        assert "echo" in registry
        assert registry.get("nope") is None
        assert registry.ids() == ["echo"]
        assert [i.to_dict() for i in registry.info_list()] == [
            {"id": "echo", "name": "Echo", "description": "Writes the story name", "url": None}
        ]

    def test_overwrite_keeps_one_entry(self, caplog):
        registry = AdapterRegistry([EchoAdapter()])
        replacement = EchoAdapter()
        registry.register(replacement)

        assert len(registry) == 1
        assert registry.get("echo") is replacement
        assert "already registered" in caplog.text

    def test_unregister(self):
        registry = AdapterRegistry([EchoAdapter()])
        assert registry.unregister("echo") is True
        assert registry.unregister("echo") is False
        assert "echo" not in registry

    def test_default_registry(self):
        registry = get_default_registry()
        assert registry.ids() == ["claude", "letta", "langgraph", "agentskills"]
        assert get_default_registry() is registry


class TestCompatibility:
    """Tests for compatibility lookups."""

    def test_check_all(self, minimal_story):
        compat = get_default_registry().check_all_compatibility(minimal_story)
        assert {k: v.compatible for k, v in compat.items()} == {
            "claude": True,
            "letta": True,
            "langgraph": True,
            "agentskills": False,
        }

    def test_get_compatible_orders_by_warnings_then_name(self, story):
        compatible = get_default_registry().get_compatible(story)
        assert [a.id for a in compatible] == ["claude", "langgraph", "agentskills", "letta"]

    def test_incompatible_adapters_excluded(self, minimal_story):
        compatible = get_default_registry().get_compatible(minimal_story)
        assert [a.id for a in compatible] == ["claude", "letta", "langgraph"]


class TestExportToHarnesses:
    """Tests for AdapterRegistry.export_to_harnesses."""

    def test_defaults_to_compatible_adapters(self, minimal_story):
        result = get_default_registry().export_to_harnesses(minimal_story)
        assert list(result.outputs) == ["claude", "letta", "langgraph"]
        assert result.source is None

    def test_explicit_ids_keep_order(self, story):
        result = get_default_registry().export_to_harnesses(story, adapter_ids=["letta", "claude"])
        assert list(result.outputs) == ["letta", "claude"]
        assert result.warnings == [
            "Letta: Complex workflows may need manual adjustment in Letta",
            "Claude Code: MCP configuration generated - review server URLs before use",
        ]

    def test_incompatible_explicit_adapter_skipped(self, minimal_story):
        registry = AdapterRegistry([EchoAdapter(), NeverAdapter()])
        result = registry.export_to_harnesses(minimal_story, adapter_ids=["never", "echo"])

        assert list(result.outputs) == ["echo"]
        assert result.warnings == ["Skipping Never: not compatible", "Echo: echoed"]
        assert [f.content for f in result.all_files()] == ["Bare Bot"]

    def test_unknown_adapter(self, story):
        with pytest.raises(AdapterNotFoundError) as exc_info:
            get_default_registry().export_to_harnesses(story, adapter_ids=["claude", "cursor"])
        assert exc_info.value.adapter_id == "cursor"
        assert exc_info.value.available_adapters == ["claude", "letta", "langgraph", "agentskills"]

    def test_include_source(self, story):
        result = get_default_registry().export_to_harnesses(story, adapter_ids=["claude"], include_source=True)
        source = json.loads(result.source)
        assert source["name"] == "Ops Assistant"
        assert source["autonomyLevel"] == "supervised"
        assert result.to_dict()["source"] == result.source


class TestExportToHarness:
    """Tests for AdapterRegistry.export_to_harness."""

    def test_single_adapter(self, story):
        output = get_default_registry().export_to_harness(story, "letta")
        assert [f.path for f in output.files] == ["letta/agent.json", "letta/tools.py"]

    def test_incompatible(self, minimal_story):
        with pytest.raises(IncompatibleStoryError) as exc_info:
            get_default_registry().export_to_harness(minimal_story, "agentskills")
        assert exc_info.value.missing_features == ["skills"]

    def test_unknown(self, story):
        with pytest.raises(AdapterNotFoundError):
            get_default_registry().export_to_harness(story, "cursor")


class TestExportStory:
    """Tests for export_story."""

    def test_exports_document(self, full_story):
        result = export_story(full_story, adapter_ids=["agentskills"])
        assert [f.path for f in result.all_files()][0] == "skills/triage-tickets/SKILL.md"

    def test_consistency_warnings_do_not_block(self, support_bot):
        result = export_story(support_bot, adapter_ids=["claude"])
        assert list(result.outputs) == ["claude"]

    def test_invalid_document(self):
        with pytest.raises(StoryValidationError) as exc_info:
            export_story({"name": ""})
        assert exc_info.value.result.valid is False
        assert exc_info.value.result.get_failed_paths() == ["name"]

    def test_custom_registry(self, story):
        registry = AdapterRegistry([EchoAdapter()])
        result = export_story(story, registry=registry)
        assert list(result.outputs) == ["echo"]

    def test_empty_registry_is_used(self, story):
        assert export_story(story, registry=AdapterRegistry()).outputs == {}
