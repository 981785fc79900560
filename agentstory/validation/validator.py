"""Validation façade for Agent Stories and Skills.

Key Components:
    - StoryValidator: runs structural parsing, then consistency checks
    - validate_story / validate_partial_story / validate_skill: module-level
      shortcuts using a non-strict validator

Structural failures are blocking and come back as ``errors``. Consistency
findings are advisory and come back as ``warnings``. Nothing here raises on
bad input; the result describes it.

Example:
    >>> result = validate_story({"name": "Support Bot", "autonomyLevel": "directed"})
    >>> result.valid
    True
    >>> validate_story({}).get_failed_paths()
    ['name']
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic_core import ErrorDetails

from agentstory.schemas.skill import Skill
from agentstory.schemas.story import AgentStory
from agentstory.validation.consistency import check_skill_consistency, check_story_consistency
from agentstory.validation.result import ValidationResult
from agentstory.validation.structural import collect_errors, issues_from_errors, parse_candidate


logger = logging.getLogger(__name__)

# Raw error types that only say "something is absent". Partial validation
# ignores them for top-level story fields other than the name.
ABSENCE_ERROR_TYPES = frozenset({"missing", "union_tag_not_found"})


def _is_tolerated_absence(error: ErrorDetails) -> bool:
    loc = tuple(error["loc"])
    return error["type"] in ABSENCE_ERROR_TYPES and len(loc) == 1 and loc != ("name",)


class StoryValidator:
    """Validation engine for stories and skills.

    Example:
        >>> validator = StoryValidator(strict_mode=True)
        >>> result = validator.validate_story(candidate)
        >>> if not result.valid:
        ...     print(result.get_error_summary())
    """

    def __init__(self, strict_mode: bool = False) -> None:
        """Initialize the validator.

        Args:
            strict_mode: If True, consistency warnings also make a result
                invalid.
        """
        self.strict_mode = strict_mode

    def _finish(self, result: ValidationResult, kind: str) -> ValidationResult:
        if self.strict_mode and result.warnings:
            result.valid = False
        logger.debug(
            "Validated %s: valid=%s errors=%d warnings=%d",
            kind,
            result.valid,
            len(result.errors),
            len(result.warnings),
        )
        return result

    def validate_story(self, candidate: Any) -> ValidationResult:
        """Validate a complete story.

        Args:
            candidate: Decoded JSON/YAML document.

        Returns:
            ValidationResult. On structural success ``data`` holds the parsed
            AgentStory and ``warnings`` holds every consistency finding.
        """
        story, errors = parse_candidate(AgentStory, candidate)
        if story is None:
            return self._finish(ValidationResult(valid=False, errors=errors), "story")

        warnings = check_story_consistency(story)
        return self._finish(ValidationResult(valid=True, warnings=warnings, data=story), "story")

    def validate_partial_story(self, candidate: Any) -> ValidationResult:
        """Validate a story that is still being drafted.

        Absent top-level fields are tolerated, except ``name``. Anything
        nested that is present is validated in full, so a half-written skill
        is still an error. Consistency checks are not run.

        Returns:
            ValidationResult with no warnings. ``data`` is set only when the
            draft also parses as a complete story.
        """
        story, raw_errors = collect_errors(AgentStory, candidate)
        kept = [e for e in raw_errors if not _is_tolerated_absence(e)]
        errors = issues_from_errors(kept)
        return self._finish(
            ValidationResult(valid=not errors, errors=errors, data=story),
            "partial story",
        )

    def validate_skill(self, candidate: Any) -> ValidationResult:
        """Validate a single skill with the per-skill consistency rules.

        Warning paths are relative to the skill itself.
        """
        skill, errors = parse_candidate(Skill, candidate)
        if skill is None:
            return self._finish(ValidationResult(valid=False, errors=errors), "skill")

        warnings = check_skill_consistency(skill)
        return self._finish(ValidationResult(valid=True, warnings=warnings, data=skill), "skill")


_default_validator = StoryValidator()


def validate_story(candidate: Any) -> ValidationResult:
    return _default_validator.validate_story(candidate)


def validate_partial_story(candidate: Any) -> ValidationResult:
    return _default_validator.validate_partial_story(candidate)


def validate_skill(candidate: Any) -> ValidationResult:
    return _default_validator.validate_skill(candidate)


__all__ = [
    "StoryValidator",
    "validate_story",
    "validate_partial_story",
    "validate_skill",
]
