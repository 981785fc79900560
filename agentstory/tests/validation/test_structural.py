"""Tests for structural validation: error paths and codes."""

import pytest

from agentstory.validation import format_path, map_error_code, validate_story


def codes_by_path(result):
    return {e.path: e.code for e in result.errors}


class TestFormatPath:
    """Tests for format_path."""

    @pytest.mark.parametrize("loc,expected", [
        ((), ""),
        (("name",), "name"),
        (("skills", 0, "name"), "skills[0].name"),
        (("skills", 2, "behavior", "workflow", "stages"), "skills[2].behavior.stages"),
        (("skills", 0, "behavior", "iterative", "body", 1), "skills[0].behavior.body[1]"),
        (("skills", 0, "triggers", 0, "type"), "skills[0].triggers[0].type"),
    ])
    def test_format(self, loc, expected):
        assert format_path(loc) == expected

    def test_keeps_tag_like_names_elsewhere(self):
        """Only segments right after ``behavior`` are dropped."""
        assert format_path(("memory", "workflow")) == "memory.workflow"


class TestErrorCodes:
    """Tests for map_error_code."""

    @pytest.mark.parametrize("error_type,code", [
        ("missing", "missing_required_field"),
        ("string_too_short", "too_small"),
        ("too_short", "too_small"),
        ("greater_than", "too_small"),
        ("string_too_long", "too_big"),
        ("less_than_equal", "too_big"),
        ("enum", "invalid_enum_value"),
        ("literal_error", "invalid_enum_value"),
        ("union_tag_invalid", "invalid_union_discriminator"),
        ("string_pattern_mismatch", "invalid_string"),
        ("string_type", "invalid_type"),
        ("float_parsing", "invalid_type"),
        ("model_type", "invalid_type"),
        ("value_error", "custom"),
        ("something_new", "custom"),
    ])
    def test_mapping(self, error_type, code):
        assert map_error_code(error_type) == code


class TestStoryErrors:
    """Tests for the errors reported on invalid stories."""

    def test_missing_name(self):
        result = validate_story({"autonomyLevel": "full"})
        assert result.valid is False
        assert codes_by_path(result) == {"name": "missing_required_field"}

    def test_empty_name(self):
        result = validate_story({"name": ""})
        assert codes_by_path(result) == {"name": "too_small"}

    def test_bad_enum(self):
        result = validate_story({"name": "Bot", "autonomyLevel": "rogue"})
        assert codes_by_path(result) == {"autonomyLevel": "invalid_enum_value"}

    def test_non_mapping_candidate(self):
        result = validate_story(["not", "a", "story"])
        assert [(e.path, e.code) for e in result.errors] == [("", "invalid_type")]

    def test_workflow_with_no_stages(self, triage_skill):
        triage_skill["behavior"] = {"model": "workflow", "stages": []}
        result = validate_story({"name": "Bot", "skills": [triage_skill]})
        assert result.valid is False
        assert codes_by_path(result) == {"skills[0].behavior.stages": "too_small"}

    def test_unknown_behavior_model(self, triage_skill):
        triage_skill["behavior"] = {"model": "chaotic"}
        result = validate_story({"name": "Bot", "skills": [triage_skill]})
        assert codes_by_path(result) == {"skills[0].behavior": "invalid_union_discriminator"}

    def test_threshold_out_of_range(self, triage_skill):
        triage_skill["reasoning"] = {"strategy": "hybrid", "confidence": {"threshold": 1.5}}
        result = validate_story({"name": "Bot", "skills": [triage_skill]})
        assert codes_by_path(result) == {"skills[0].reasoning.confidence.threshold": "too_big"}

    def test_identifier_pattern(self):
        result = validate_story({"name": "Bot", "identifier": "Not Valid"})
        assert codes_by_path(result) == {"identifier": "invalid_string"}

    def test_wrong_type(self):
        result = validate_story({"name": "Bot", "skills": "Triage"})
        assert codes_by_path(result) == {"skills": "invalid_type"}

    def test_reports_every_violation(self, triage_skill):
        """Test that all violations come back in one pass."""
        broken = dict(triage_skill, acquired="stolen", triggers=[])
        del broken["acceptance"]
        result = validate_story({"name": "", "skills": [broken]})

        assert codes_by_path(result) == {
            "name": "too_small",
            "skills[0].acquired": "invalid_enum_value",
            "skills[0].triggers": "too_small",
            "skills[0].acceptance": "missing_required_field",
        }
        assert result.warnings == []


class TestNoCoercion:
    """Tests that scalar values must already have the declared type."""

    def test_quoted_threshold(self, triage_skill):
        triage_skill["reasoning"] = {"strategy": "hybrid", "confidence": {"threshold": "0.5"}}
        result = validate_story({"name": "Bot", "skills": [triage_skill]})
        assert codes_by_path(result) == {"skills[0].reasoning.confidence.threshold": "invalid_type"}

    def test_yes_for_boolean(self, triage_skill):
        triage_skill["failureHandling"] = {"notifyOnFailure": "yes"}
        result = validate_story({"name": "Bot", "skills": [triage_skill]})
        assert codes_by_path(result) == {"skills[0].failureHandling.notifyOnFailure": "invalid_type"}

    def test_boolean_for_count(self, triage_skill):
        triage_skill["behavior"] = {
            "model": "iterative",
            "body": ["Check queue"],
            "terminationCondition": "Queue empty",
            "maxIterations": True,
        }
        result = validate_story({"name": "Bot", "skills": [triage_skill]})
        assert codes_by_path(result) == {"skills[0].behavior.maxIterations": "invalid_type"}

    def test_integer_threshold_allowed(self, triage_skill):
        triage_skill["reasoning"] = {
            "strategy": "hybrid",
            "confidence": {"threshold": 1, "fallbackAction": "Ask a human"},
        }
        assert validate_story({"name": "Bot", "skills": [triage_skill]}).valid is True

    def test_enum_and_timestamp_strings_accepted(self):
        result = validate_story({
            "name": "Bot",
            "autonomyLevel": "supervised",
            "createdAt": "2025-01-15T09:30:00Z",
        })
        assert result.valid is True
        assert result.data.autonomy_level.value == "supervised"
        assert result.data.created_at.year == 2025
