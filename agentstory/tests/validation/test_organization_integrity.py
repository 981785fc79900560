"""Tests for organization referential integrity and HAP agent assignment."""

import pytest

from agentstory.schemas.hap import create_hap, create_task_from_preset
from agentstory.schemas.organization import (
    create_department,
    create_domain,
    create_person,
    create_role,
    create_role_assignment,
)
from agentstory.schemas.story import AgentStory
from agentstory.validation.organization import (
    DANGLING_REFERENCE,
    check_organization_integrity,
    validate_hap_agent_assignment,
)


@pytest.fixture
def org(full_story):
    """A consistent organization snapshot."""
    domain = create_domain("Support")
    department = create_department(domain.id, "Tier 1")
    role = create_role(department.id, "Support Agent")
    person = create_person(department.id, "Ada", "ada@example.com")
    person.role_assignments.append(create_role_assignment(role.id, is_primary=True))
    department.manager_id = person.id
    story = AgentStory.model_validate(full_story)
    hap = create_hap(person.id, role.id, story.id)

    task = create_task_from_preset("Triage queue", "supervised-execution")
    task.phases.define.skill_id = "skill-triage"
    task.phases.perform.skill_id = "skill-digest"
    hap.tasks.append(task)

    return {
        "domains": [domain],
        "departments": [department],
        "roles": [role],
        "people": [person],
        "haps": [hap],
        "stories": [story],
    }


class TestOrganizationIntegrity:
    """Tests for check_organization_integrity."""

    def test_consistent_snapshot(self, org):
        result = check_organization_integrity(**org)
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_empty_snapshot(self):
        assert check_organization_integrity().valid is True

    def test_dangling_department_domain(self, org):
        org["departments"][0].domain_id = "no-such-domain"
        result = check_organization_integrity(**org)

        assert result.valid is False
        assert [(e.path, e.code) for e in result.errors] == [
            ("departments[0].domainId", DANGLING_REFERENCE),
        ]
        assert result.errors[0].message == "Unknown domain id 'no-such-domain'"

    def test_dangling_references_everywhere(self, org):
        org["departments"][0].manager_id = "ghost"
        org["roles"][0].department_id = "gone"
        org["people"][0].role_assignments.append(create_role_assignment("missing-role"))
        org["haps"][0].agent_story_id = "no-story"
        result = check_organization_integrity(**org)

        assert result.get_failed_paths() == [
            "departments[0].managerId",
            "roles[0].departmentId",
            "people[0].roleAssignments[1].roleId",
            "haps[0].agentStoryId",
        ]

    def test_hap_person_and_role(self, org):
        org["people"] = []
        org["departments"][0].manager_id = None
        result = check_organization_integrity(**org)
        assert result.get_failed_paths() == ["haps[0].personId"]

    def test_unknown_phase_skill_is_warning(self, org):
        org["haps"][0].tasks[0].phases.perform.skill_id = "skill-unknown"
        result = check_organization_integrity(**org)

        assert result.valid is True
        assert [w.path for w in result.warnings] == ["haps[0].tasks[0].phases.perform.skillId"]
        assert result.warnings[0].message == "Skill 'skill-unknown' is not a skill of agent story \"Ops Assistant\""

    def test_accepts_dicts(self, org):
        dicts = {key: [record.to_dict() for record in records] for key, records in org.items()}
        assert check_organization_integrity(**dicts).valid is True

    def test_structural_errors_prefixed(self):
        result = check_organization_integrity(
            domains=[{"name": "Support"}],
            departments=[{"domainId": "x", "name": ""}],
        )
        paths = result.get_failed_paths()
        assert "departments[0].name" in paths
        # Records that fail to parse are not checked for references.
        assert "departments[0].domainId" not in paths

    def test_unassigned_hap_story_not_checked(self, org):
        org["haps"][0].agent_story_id = ""
        assert check_organization_integrity(**org).valid is True


class TestHAPAgentAssignment:
    """Tests for validate_hap_agent_assignment."""

    @pytest.fixture
    def story(self, full_story):
        return AgentStory.model_validate(full_story)

    def test_no_agent(self):
        issues = validate_hap_agent_assignment(create_hap("p", "r", ""))
        assert [(i.type, i.code) for i in issues] == [("error", "NO_AGENT_ASSIGNED")]

    def test_agent_not_found(self):
        issues = validate_hap_agent_assignment(create_hap("p", "r", "story-1"))
        assert [i.code for i in issues] == ["AGENT_NOT_FOUND"]
        assert issues[0].details == {"agentStoryId": "story-1"}

    def test_id_mismatch(self, story):
        issues = validate_hap_agent_assignment(create_hap("p", "r", "story-2"), story)
        assert [i.code for i in issues] == ["AGENT_ID_MISMATCH"]

    def test_fully_covered(self, story):
        hap = create_hap("p", "r", "story-1")
        task = create_task_from_preset("Triage", "human-controlled")
        task.phases.perform.skill_id = "skill-triage"
        hap.tasks.append(task)
        assert validate_hap_agent_assignment(hap, story) == []

    def test_incomplete_coverage(self, story):
        hap = create_hap("p", "r", "story-1")
        task = create_task_from_preset("Triage", "supervised-execution")
        task.phases.define.skill_id = "skill-triage"
        hap.tasks.append(task)
        issues = validate_hap_agent_assignment(hap, story)

        assert [(i.type, i.code) for i in issues] == [("warning", "INCOMPLETE_SKILL_COVERAGE")]
        assert issues[0].message == "1 of 2 agent phase(s) don't have skills assigned (50% coverage)"
        assert issues[0].details["uncoveredPhases"] == [{"task": "Triage", "phase": "perform"}]

    def test_agent_without_skills(self):
        story = AgentStory.model_validate({"id": "story-1", "name": "Empty Agent"})
        hap = create_hap("p", "r", "story-1")
        hap.tasks.append(create_task_from_preset("Triage", "agent-only"))
        issues = validate_hap_agent_assignment(hap, story)

        assert [i.code for i in issues] == ["AGENT_NO_SKILLS", "INCOMPLETE_SKILL_COVERAGE"]
        assert issues[0].to_dict()["details"] == {"agentName": "Empty Agent", "agentPhases": 4}
