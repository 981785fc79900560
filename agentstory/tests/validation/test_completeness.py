"""Tests for skill and story completeness."""

from agentstory.schemas.skill import Skill
from agentstory.schemas.story import AgentStory
from agentstory.validation.completeness import get_skill_completeness, get_story_completeness


class TestSkillCompleteness:
    """Tests for get_skill_completeness."""

    def test_complete(self, triage_skill):
        completeness = get_skill_completeness(Skill.model_validate(triage_skill))
        assert completeness.complete is True
        assert completeness.missing == []

    def test_whitespace_is_blank(self, triage_skill):
        triage_skill.update(name="Triage", description="   ", domain="\t")
        completeness = get_skill_completeness(Skill.model_validate(triage_skill))
        assert completeness.missing == ["description", "domain"]

    def test_trigger_and_condition_paths(self, triage_skill):
        triage_skill["triggers"] = [
            {"type": "message", "description": "ok"},
            {"type": "manual", "description": ""},
        ]
        triage_skill["acceptance"] = {"successConditions": ["", "done", " "]}
        completeness = get_skill_completeness(Skill.model_validate(triage_skill))

        assert completeness.complete is False
        assert completeness.missing == [
            "triggers[1].description",
            "acceptance.successConditions[0]",
            "acceptance.successConditions[2]",
        ]

    def test_to_dict(self, triage_skill):
        triage_skill["domain"] = ""
        assert get_skill_completeness(Skill.model_validate(triage_skill)).to_dict() == {
            "complete": False,
            "missing": ["domain"],
        }


class TestStoryCompleteness:
    """Tests for get_story_completeness."""

    def test_complete(self, full_story):
        assert get_story_completeness(AgentStory.model_validate(full_story)).complete is True

    def test_bare_story(self):
        completeness = get_story_completeness(AgentStory.model_validate({"name": "Bot"}))
        assert completeness.missing == ["role", "purpose", "autonomyLevel", "skills"]

    def test_skill_misses_prefixed(self, support_bot, triage_skill):
        triage_skill["description"] = ""
        support_bot.update(role="Helper", purpose="Help")
        support_bot["skills"].append(triage_skill)
        completeness = get_story_completeness(AgentStory.model_validate(support_bot))
        assert completeness.missing == ["skills[1].description"]
