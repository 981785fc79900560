"""Tests for the agentstory exception hierarchy."""

import pytest

from agentstory.core.exceptions import (
    AdapterNotFoundError,
    AgentStoryError,
    CollaboratorError,
    ConfigurationError,
    ExportError,
    IncompatibleStoryError,
    LLMServiceError,
    OrganizationError,
    StoryValidationError,
)
from agentstory.validation.validator import validate_story


class TestBaseError:
    """Tests for AgentStoryError."""

    def test_defaults(self):
        error = AgentStoryError("Something broke")
        assert error.code == "AGENTSTORY_ERROR"
        assert error.context == {}
        assert error.recoverable is False
        assert str(error) == "[AGENTSTORY_ERROR] Something broke"

    def test_to_log_dict(self):
        error = ExportError("Template missing", adapter_id="claude")
        assert error.to_log_dict() == {
            "error_type": "ExportError",
            "error_code": "EXPORT_ERROR",
            "message": "Template missing",
            "recoverable": False,
            "context": {"adapter_id": "claude"},
        }

    @pytest.mark.parametrize("error", [
        ConfigurationError("x"),
        StoryValidationError("x"),
        ExportError("x"),
        AdapterNotFoundError("x"),
        IncompatibleStoryError("x"),
        OrganizationError("x"),
        CollaboratorError("x"),
        LLMServiceError("x"),
    ])
    def test_hierarchy(self, error):
        assert isinstance(error, AgentStoryError)


class TestSpecificErrors:
    """Tests for error context."""

    def test_configuration_error(self):
        error = ConfigurationError("Bad value", config_key="log_level", validation_details="LOUD")
        assert error.code == "CONFIG_ERROR"
        assert error.context == {"config_key": "log_level", "validation_details": "LOUD"}

    def test_story_validation_error(self):
        result = validate_story({"name": "", "autonomyLevel": "rogue"})
        error = StoryValidationError("Invalid story", result=result)

        assert error.code == "STORY_VALIDATION_ERROR"
        assert error.recoverable is True
        assert error.result is result
        assert error.error_count == 2
        assert error.context == {"error_count": 2, "paths": ["name", "autonomyLevel"]}

    def test_story_validation_error_without_result(self):
        error = StoryValidationError("Invalid story")
        assert error.error_count == 0
        assert error.context == {"error_count": 0}

    def test_export_errors(self):
        missing = AdapterNotFoundError("nope", adapter_id="cursor", available_adapters=["claude"])
        assert isinstance(missing, ExportError)
        assert missing.code == "ADAPTER_NOT_FOUND"
        assert missing.context == {"adapter_id": "cursor", "available_adapters": ["claude"]}

        incompatible = IncompatibleStoryError("no", adapter_id="agentskills", missing_features=["skills"])
        assert incompatible.code == "INCOMPATIBLE_STORY"
        assert incompatible.missing_features == ["skills"]

    def test_organization_error(self):
        error = OrganizationError("Unknown preset", entity="task")
        assert error.code == "ORGANIZATION_ERROR"
        assert error.entity == "task"

    def test_collaborator_errors(self):
        error = CollaboratorError("Repository unreachable", service="github")
        assert error.code == "COLLABORATOR_ERROR"
        assert error.recoverable is True
        assert error.context == {"service": "github"}

        llm = LLMServiceError("Rate limited", status_code=429)
        assert isinstance(llm, CollaboratorError)
        assert llm.code == "LLM_SERVICE_ERROR"
        assert llm.service == "llm"
        assert llm.context == {"service": "llm", "status_code": 429}

    def test_collaborator_error_not_recoverable(self):
        assert CollaboratorError("Gone", recoverable=False).recoverable is False
