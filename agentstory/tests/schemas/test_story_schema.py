"""Tests for the AgentStory and Skill schemas."""

import pytest
from pydantic import TypeAdapter, ValidationError

from agentstory.schemas import (
    AdaptiveBehavior,
    AgentStory,
    AutonomyLevel,
    GuardrailEnforcement,
    Skill,
    SkillBehavior,
    WorkflowBehavior,
    generate_slug,
    is_valid_slug,
)
from agentstory.schemas.memory import MemoryUpdateMode
from agentstory.schemas.reasoning import BackoffStrategy


class TestWireFormat:
    """Tests for camelCase aliases and serialization."""

    def test_parses_camel_case(self, full_story):
        """Test that camelCase keys populate snake_case attributes."""
        story = AgentStory.model_validate(full_story)
        assert story.autonomy_level == AutonomyLevel.SUPERVISED
        assert story.skills[0].acceptance.success_conditions == ["Ticket has a priority label"]
        assert story.skills[0].behavior.entry_stage == "Read"

    def test_parses_snake_case(self):
        """Test that Python attribute names are accepted too."""
        story = AgentStory.model_validate({"name": "Bot", "autonomy_level": "full"})
        assert story.autonomy_level == AutonomyLevel.FULL

    def test_unknown_fields_ignored(self):
        """Test that unknown keys do not fail parsing."""
        story = AgentStory.model_validate({"name": "Bot", "favouriteColour": "teal"})
        assert "favouriteColour" not in story.to_dict()

    def test_to_dict_omits_unset_optionals(self):
        """Test serialization output."""
        story = AgentStory.model_validate({"name": "Support Bot", "autonomyLevel": "directed"})
        assert story.to_dict() == {
            "version": "1.0",
            "name": "Support Bot",
            "autonomyLevel": "directed",
            "skills": [],
        }

    def test_coordination_for_alias(self, full_story):
        """Test that the reserved word ``for`` round-trips."""
        story = AgentStory.model_validate(full_story)
        coordination = story.collaboration.coordinates[0]
        assert coordination.for_ == "refunds"
        assert story.to_dict()["collaboration"]["coordinates"][0]["for"] == "refunds"


class TestDefaults:
    """Tests for defaulted fields."""

    def test_story_defaults(self):
        story = AgentStory.model_validate({"name": "Bot"})
        assert story.version == "1.0"
        assert story.skills == []
        assert story.autonomy_level is None

    def test_nested_defaults(self, triage_skill):
        """Test that defaults are applied inside nested objects."""
        triage_skill["guardrails"] = [{"name": "Polite", "constraint": "Be polite"}]
        triage_skill["reasoning"] = {"strategy": "rule_based", "retry": {}}
        triage_skill["failureHandling"] = {"defaultFallback": "Escalate"}
        skill = Skill.model_validate(triage_skill)

        assert skill.guardrails[0].enforcement == GuardrailEnforcement.HARD
        assert skill.reasoning.retry.max_attempts == 3
        assert skill.reasoning.retry.backoff_strategy == BackoffStrategy.EXPONENTIAL
        assert skill.failure_handling.notify_on_failure is True

    def test_memory_store_default_updates(self):
        story = AgentStory.model_validate({
            "name": "Bot",
            "memory": {"persistent": [{"name": "KB", "type": "kb", "purpose": "Docs"}]},
        })
        assert story.memory.persistent[0].updates == MemoryUpdateMode.READ_ONLY


class TestStoryConstraints:
    """Tests for story-level structural rules."""

    def test_name_required(self):
        with pytest.raises(ValidationError):
            AgentStory.model_validate({})

    def test_name_length(self):
        with pytest.raises(ValidationError):
            AgentStory.model_validate({"name": ""})
        with pytest.raises(ValidationError):
            AgentStory.model_validate({"name": "x" * 101})

    def test_identifier_pattern(self):
        assert AgentStory.model_validate({"name": "Bot", "identifier": "ops-bot-2"}).identifier == "ops-bot-2"
        with pytest.raises(ValidationError):
            AgentStory.model_validate({"name": "Bot", "identifier": "2-ops"})
        with pytest.raises(ValidationError):
            AgentStory.model_validate({"name": "Bot", "identifier": "Ops"})

    def test_autonomy_level_enum(self):
        with pytest.raises(ValidationError):
            AgentStory.model_validate({"name": "Bot", "autonomyLevel": "rogue"})


class TestSkill:
    """Tests for the Skill schema."""

    def test_description_may_be_empty(self, triage_skill):
        triage_skill["description"] = ""
        assert Skill.model_validate(triage_skill).description == ""

    def test_triggers_required(self, triage_skill):
        triage_skill["triggers"] = []
        with pytest.raises(ValidationError):
            Skill.model_validate(triage_skill)

    def test_success_conditions_required(self, triage_skill):
        triage_skill["acceptance"] = {"successConditions": []}
        with pytest.raises(ValidationError):
            Skill.model_validate(triage_skill)

    def test_confidence_threshold_range(self, triage_skill):
        triage_skill["reasoning"] = {"strategy": "llm_guided", "confidence": {"threshold": 1.5}}
        with pytest.raises(ValidationError):
            Skill.model_validate(triage_skill)

    def test_tool_needs_permission(self, triage_skill):
        triage_skill["tools"] = [{"name": "Slack", "purpose": "Post", "permissions": []}]
        with pytest.raises(ValidationError):
            Skill.model_validate(triage_skill)

    def test_slug_from_portability(self, full_story):
        story = AgentStory.model_validate(full_story)
        assert story.skills[0].slug == "triage-tickets"
        assert story.skills[1].slug == "daily-digest"

    def test_portability_slug_pattern(self, triage_skill):
        triage_skill["portability"] = {"slug": "Not A Slug"}
        with pytest.raises(ValidationError):
            Skill.model_validate(triage_skill)

    def test_skills_are_independent(self, triage_skill):
        """Test that parsing the same dict twice gives unshared instances."""
        story = AgentStory.model_validate({"name": "Bot", "skills": [triage_skill, triage_skill]})
        story.skills[0].triggers[0].description = "changed"
        assert story.skills[1].triggers[0].description == "A new ticket arrives"

    def test_story_helpers(self, full_story):
        story = AgentStory.model_validate(full_story)
        assert story.get_skill("Daily Digest").id == "skill-digest"
        assert story.get_skill("Nope") is None
        assert [t.name for t in story.all_tools()] == ["Zendesk"]


class TestBehaviorUnion:
    """Tests for the behavior discriminated union."""

    adapter = TypeAdapter(SkillBehavior)

    def test_selects_variant(self):
        behavior = self.adapter.validate_python({"model": "adaptive", "capabilities": ["search"]})
        assert isinstance(behavior, AdaptiveBehavior)

    def test_workflow_requires_stages(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"model": "workflow", "stages": []})

    def test_single_stage_workflow_parses(self):
        behavior = self.adapter.validate_python({
            "model": "workflow",
            "stages": [{"name": "Only", "purpose": "Do it"}],
        })
        assert isinstance(behavior, WorkflowBehavior)

    def test_iterative_requires_termination(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"model": "iterative", "body": ["poll"]})
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"model": "iterative", "body": ["poll"], "terminationCondition": ""})

    def test_iterative_max_iterations_positive(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({
                "model": "iterative",
                "body": ["poll"],
                "terminationCondition": "done",
                "maxIterations": 0,
            })

    def test_unknown_model_rejected(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"model": "chaotic", "steps": ["a"]})


class TestSlugs:
    """Tests for slug helpers."""

    @pytest.mark.parametrize("text,expected", [
        ("  Triage Incoming Tickets! ", "triage-incoming-tickets"),
        ("Already-a-slug", "already-a-slug"),
        ("C++ / Rust", "c-rust"),
        ("!!!", ""),
    ])
    def test_generate_slug(self, text, expected):
        assert generate_slug(text) == expected

    def test_generate_slug_truncates(self):
        slug = generate_slug("word " * 40)
        assert len(slug) <= 64
        assert not slug.endswith("-")

    @pytest.mark.parametrize("text,valid", [
        ("triage", True),
        ("triage-tickets-2", True),
        ("", False),
        ("Triage", False),
        ("triage--tickets", False),
        ("-triage", False),
        ("a" * 65, False),
    ])
    def test_is_valid_slug(self, text, valid):
        assert is_valid_slug(text) is valid
