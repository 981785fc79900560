"""Tests for AgentSkills.io export."""

import pytest
import yaml

from agentstory.core.exceptions import ExportError
from agentstory.export.agentskills import AgentSkillsAdapter, export_to_agentskills
from agentstory.schemas.skill import Skill


def frontmatter(skill_md):
    _, block, body = skill_md.split("---\n", 2)
    return yaml.safe_load(block), body


class TestExportToAgentSkills:
    """Tests for export_to_agentskills."""

    def test_frontmatter(self, story):
        package = export_to_agentskills(story.skills[0])
        data, _ = frontmatter(package.skill_md)

        assert package.slug == "triage-tickets"
        assert package.warnings == []
        assert data == {
            "name": "triage-tickets",
            "description": "Classify incoming tickets by urgency",
            "license": "MIT",
            "allowed-tools": "zendesk",
            "metadata": {"domain": "Support", "acquired": "built_in", "source-id": "skill-triage"},
        }

    def test_body_sections(self, story):
        _, body = frontmatter(export_to_agentskills(story.skills[0]).skill_md)
        assert body.startswith("\n# Triage Tickets\n")
        for heading in (
            "## Triggers",
            "## Interface",
            "## Behavior",
            "### Stages",
            "## Tools",
            "## Reasoning",
            "## Success Criteria",
            "### Quality Metrics",
            "## Error Handling",
            "## Guardrails",
        ):
            assert heading in body
        assert "- → Label when parsed" in body
        assert "| ticket_text | string | Yes | Ticket body |" in body
        assert "**Timeout**: 30s" in body
        assert "- **Zendesk down**: Retry later *(escalate)*" in body

    def test_scripts_and_references(self, story):
        package = export_to_agentskills(story.skills[0])
        assert [s.filename for s in package.scripts] == ["label.py"]
        # References without content are dropped.
        assert [r.filename for r in package.references] == ["priorities.md"]
        assert [f.path for f in package.files("skills")] == [
            "skills/triage-tickets/SKILL.md",
            "skills/triage-tickets/scripts/label.py",
            "skills/triage-tickets/references/priorities.md",
        ]

    def test_exclude_scripts_and_references(self, story):
        package = export_to_agentskills(story.skills[0], include_scripts=False, include_references=False)
        assert package.scripts == []
        assert package.references == []

    def test_generated_slug(self, story):
        package = export_to_agentskills(story.skills[1])
        assert package.slug == "daily-digest"
        assert package.warnings == ['Generated slug "daily-digest" from skill name']

    def test_missing_slug(self, story):
        with pytest.raises(ExportError) as exc_info:
            export_to_agentskills(story.skills[1], generate_missing_slug=False)
        assert exc_info.value.adapter_id == "agentskills"
        assert "Missing slug" in exc_info.value.message

    def test_unusable_name(self, triage_skill):
        triage_skill["name"] = "!!!"
        with pytest.raises(ExportError):
            export_to_agentskills(Skill.model_validate(triage_skill))

    def test_long_description_truncated(self, triage_skill):
        triage_skill["description"] = "x" * 2000
        data, _ = frontmatter(export_to_agentskills(Skill.model_validate(triage_skill)).skill_md)
        assert len(data["description"]) == 1024


class TestAgentSkillsAdapter:
    """Tests for AgentSkillsAdapter."""

    adapter = AgentSkillsAdapter()

    def test_needs_skills(self, minimal_story):
        compat = self.adapter.can_export(minimal_story)
        assert compat.compatible is False
        assert compat.missing_features == ["skills"]

    def test_warns_about_generated_slugs(self, story):
        compat = self.adapter.can_export(story)
        assert compat.compatible is True
        assert compat.warnings == ['Skill "Daily Digest" has no slug; one will be generated']

    def test_generate(self, story):
        output = self.adapter.generate(story)
        assert [f.path for f in output.files] == [
            "skills/triage-tickets/SKILL.md",
            "skills/triage-tickets/scripts/label.py",
            "skills/triage-tickets/references/priorities.md",
            "skills/daily-digest/SKILL.md",
        ]
        assert output.warnings == []

    def test_skips_bad_and_duplicate_skills(self, triage_skill):
        from agentstory.schemas.story import AgentStory

        unusable = dict(triage_skill, name="???")
        story = AgentStory.model_validate({"name": "Bot", "skills": [triage_skill, triage_skill, unusable]})
        output = self.adapter.generate(story)

        assert [f.path for f in output.files] == ["skills/triage/SKILL.md"]
        assert len(output.warnings) == 2
        assert 'slug "triage" already exported' in output.warnings[0]
        assert "Missing slug" in output.warnings[1]
