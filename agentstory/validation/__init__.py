"""Validation engine for Agent Stories.

Two layers run in order:

    structural   Pydantic parsing; failures are blocking ``errors``
    consistency  advisory rules over a parsed story; ``warnings`` only

Usage:
    >>> from agentstory.validation import validate_story
    >>> result = validate_story(document)
    >>> result.to_dict()
    {'valid': True, 'errors': [], 'warnings': [...]}
"""

from agentstory.validation.result import (
    IssueSeverity,
    ValidationIssue,
    ValidationResult,
    ValidationWarning,
)
from agentstory.validation.structural import format_path, map_error_code
from agentstory.validation.completeness import (
    Completeness,
    get_skill_completeness,
    get_story_completeness,
)
from agentstory.validation.consistency import check_skill_consistency, check_story_consistency
from agentstory.validation.validator import (
    StoryValidator,
    validate_partial_story,
    validate_skill,
    validate_story,
)
from agentstory.validation.organization import (
    HAPValidationIssue,
    check_organization_integrity,
    validate_hap_agent_assignment,
)

__all__ = [
    # Results
    "IssueSeverity",
    "ValidationIssue",
    "ValidationResult",
    "ValidationWarning",
    # Structural
    "format_path",
    "map_error_code",
    # Completeness
    "Completeness",
    "get_skill_completeness",
    "get_story_completeness",
    # Consistency
    "check_skill_consistency",
    "check_story_consistency",
    # Façade
    "StoryValidator",
    "validate_story",
    "validate_partial_story",
    "validate_skill",
    # Organization
    "HAPValidationIssue",
    "check_organization_integrity",
    "validate_hap_agent_assignment",
]
