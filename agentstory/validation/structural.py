"""Structural validation on top of the Pydantic schemas.

Parsing is delegated to Pydantic. This module turns Pydantic's error
details into ValidationIssue objects with toolkit paths and codes.

Code mapping (Pydantic error type -> code):
    missing                                  missing_required_field
    too_short, string_too_short, greater_*   too_small
    too_long, string_too_long, less_*        too_big
    enum, literal_error                      invalid_enum_value
    union_tag_invalid, union_tag_not_found   invalid_union_discriminator
    string_pattern_mismatch                  invalid_string
    value_error, assertion_error             custom
    *_type, *_parsing                        invalid_type
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails

from agentstory.schemas.behavior import BEHAVIOR_MODELS
from agentstory.validation.result import ValidationIssue


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ERROR_CODE_MAP: dict[str, str] = {
    "missing": "missing_required_field",
    "too_short": "too_small",
    "string_too_short": "too_small",
    "greater_than": "too_small",
    "greater_than_equal": "too_small",
    "too_long": "too_big",
    "string_too_long": "too_big",
    "less_than": "too_big",
    "less_than_equal": "too_big",
    "enum": "invalid_enum_value",
    "literal_error": "invalid_enum_value",
    "union_tag_invalid": "invalid_union_discriminator",
    "union_tag_not_found": "invalid_union_discriminator",
    "string_pattern_mismatch": "invalid_string",
    "value_error": "custom",
    "assertion_error": "custom",
    "model_type": "invalid_type",
    "model_attributes_type": "invalid_type",
    "int_from_float": "invalid_type",
}

# Pydantic inserts the chosen variant tag into the error location of a
# discriminated union. Keyed by the field holding the union.
DISCRIMINATED_FIELDS: dict[str, frozenset[str]] = {
    "behavior": frozenset(BEHAVIOR_MODELS),
}


def map_error_code(error_type: str) -> str:
    """Map a Pydantic error type onto a toolkit violation code."""
    if error_type in ERROR_CODE_MAP:
        return ERROR_CODE_MAP[error_type]
    if error_type.endswith("_type") or error_type.endswith("_parsing"):
        return "invalid_type"
    return "custom"


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """Render a Pydantic location tuple as ``a.b[0].c``.

    Discriminated-union tag segments are dropped so the path names the
    field the user edits.

    Example:
        >>> format_path(("skills", 0, "behavior", "workflow", "stages"))
        'skills[0].behavior.stages'
    """
    path = ""
    previous: Optional[Union[str, int]] = None
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif previous in DISCRIMINATED_FIELDS and segment in DISCRIMINATED_FIELDS[previous]:
            continue
        else:
            path = f"{path}.{segment}" if path else str(segment)
        previous = segment
    return path


def issue_from_error(error: ErrorDetails) -> ValidationIssue:
    return ValidationIssue(
        path=format_path(error["loc"]),
        message=error["msg"],
        code=map_error_code(error["type"]),
    )


def issues_from_errors(errors: Iterable[ErrorDetails]) -> list[ValidationIssue]:
    return [issue_from_error(e) for e in errors]


def collect_errors(
    model_cls: type[ModelT],
    candidate: Any,
) -> tuple[Optional[ModelT], list[ErrorDetails]]:
    """Parse ``candidate`` as ``model_cls`` and return the raw outcome.

    Returns:
        ``(model, [])`` on success, ``(None, errors)`` on failure. Every
        violation is reported, not just the first.
    """
    try:
        return model_cls.model_validate(candidate), []
    except PydanticValidationError as exc:
        errors = exc.errors(include_url=False)
        logger.debug("%s failed structural validation with %d error(s)", model_cls.__name__, len(errors))
        return None, errors


def parse_candidate(
    model_cls: type[ModelT],
    candidate: Any,
) -> tuple[Optional[ModelT], list[ValidationIssue]]:
    """Parse ``candidate`` and convert failures to ValidationIssue objects."""
    model, errors = collect_errors(model_cls, candidate)
    return model, issues_from_errors(errors)


__all__ = [
    "ERROR_CODE_MAP",
    "DISCRIMINATED_FIELDS",
    "map_error_code",
    "format_path",
    "issue_from_error",
    "issues_from_errors",
    "collect_errors",
    "parse_candidate",
]
