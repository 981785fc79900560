"""Validation result types.

Key Components:
    - IssueSeverity: error vs. warning
    - ValidationIssue: a blocking structural error (path, message, code)
    - ValidationWarning: a non-blocking consistency warning (path, message)
    - ValidationResult: aggregate outcome returned by every validator

Paths use dots for object keys and brackets for list positions, relative
to the validated candidate, e.g. ``skills[0].behavior.stages``.

Example:
    >>> result = ValidationResult(
    ...     valid=False,
    ...     errors=[ValidationIssue("name", "Field required", "missing_required_field")],
    ... )
    >>> result.to_dict()
    {'valid': False, 'errors': [{'path': 'name', 'message': 'Field required', 'code': 'missing_required_field'}], 'warnings': []}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class IssueSeverity(str, Enum):
    """Severity levels for validation findings.

    Attributes:
        ERROR: Structural failure that makes the candidate invalid
        WARNING: Advisory finding that never affects validity
    """

    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """Single structural validation error.

    Attributes:
        path: Location of the offending field (empty string for the root)
        message: Human-readable description of the failure
        code: Machine-checkable violation code (e.g. "too_small")
    """

    path: str
    message: str
    code: str

    @property
    def severity(self) -> IssueSeverity:
        return IssueSeverity.ERROR

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "message": self.message, "code": self.code}

    def __str__(self) -> str:
        location = self.path or "<root>"
        return f"[ERROR] {location}: {self.message} ({self.code})"


@dataclass
class ValidationWarning:
    """Single consistency warning.

    Attributes:
        path: Location the warning refers to
        message: Human-readable description
        rule: Identifier of the consistency rule that fired. Not part of
            the serialized form.
    """

    path: str
    message: str
    rule: Optional[str] = None

    @property
    def severity(self) -> IssueSeverity:
        return IssueSeverity.WARNING

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "message": self.message}

    def __str__(self) -> str:
        location = self.path or "<root>"
        return f"[WARNING] {location}: {self.message}"


@dataclass
class ValidationResult:
    """Aggregate validation outcome.

    Attributes:
        valid: True iff structural parsing succeeded (and, in strict mode,
            no warnings were produced)
        errors: Structural errors, populated only when parsing failed
        warnings: Consistency warnings, populated only when parsing succeeded
        data: The parsed model when parsing succeeded
    """

    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)
    data: Optional[Any] = field(default=None, repr=False, compare=False)

    def get_error_summary(self) -> str:
        """Get a summary of all errors.

        Returns:
            Human-readable summary of validation errors.
        """
        if not self.errors:
            return "No errors"

        lines = [f"Found {len(self.errors)} validation error(s):"]
        for i, error in enumerate(self.errors, 1):
            lines.append(f"  {i}. {error}")

        return "\n".join(lines)

    def get_warning_summary(self) -> str:
        if not self.warnings:
            return "No warnings"

        lines = [f"Found {len(self.warnings)} warning(s):"]
        for i, warning in enumerate(self.warnings, 1):
            lines.append(f"  {i}. {warning}")

        return "\n".join(lines)

    def get_failed_paths(self) -> list[str]:
        """Get the distinct error paths, in first-seen order."""
        return list(dict.fromkeys(error.path for error in self.errors))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{valid, errors[], warnings[]}``."""
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


__all__ = [
    "IssueSeverity",
    "ValidationIssue",
    "ValidationWarning",
    "ValidationResult",
]
