"""Shared base model for Agent Story schemas.

Every schema in this package derives from StoryModel, which fixes the wire
conventions once:

- Fields are snake_case in Python and camelCase on the wire
  (``autonomy_level`` <-> ``autonomyLevel``). Both spellings are accepted
  on input.
- Unknown fields are ignored rather than rejected, so documents written by
  older or newer editors still parse.
- Validation is strict: a quoted number or a "yes" for a boolean is a type
  error. Enum and timestamp fields opt back into coercion with ``LAX`` so
  wire strings still parse.
- ``to_dict()`` produces the camelCase wire form with unset optionals
  omitted.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Strict
from pydantic.alias_generators import to_camel


SLUG_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"
"""Lowercase alphanumeric words separated by single hyphens."""

IDENTIFIER_PATTERN = r"^[a-z][a-z0-9-]*$"
"""Story identifiers start with a letter and use lowercase, digits and hyphens."""

SLUG_MAX_LENGTH = 64

_SLUG_RE = re.compile(SLUG_PATTERN)

LAX = Strict(False)
"""Field metadata that accepts wire strings for enum and datetime fields."""


class StoryModel(BaseModel):
    """Base class for all Agent Story schema models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        strict=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire format, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def generate_slug(text: str) -> str:
    """Derive a URL/file-safe slug from free text.

    Lowercases, collapses every run of non-alphanumeric characters into a
    single hyphen, strips leading/trailing hyphens and truncates to 64
    characters.

    Example:
        >>> generate_slug("  Triage Incoming Tickets! ")
        'triage-incoming-tickets'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower().strip())
    slug = slug.strip("-")
    return slug[:SLUG_MAX_LENGTH].rstrip("-")


def is_valid_slug(text: str) -> bool:
    """Return True if ``text`` is a non-empty slug of at most 64 characters."""
    return bool(text) and len(text) <= SLUG_MAX_LENGTH and bool(_SLUG_RE.match(text))


__all__ = [
    "StoryModel",
    "LAX",
    "SLUG_PATTERN",
    "IDENTIFIER_PATTERN",
    "SLUG_MAX_LENGTH",
    "generate_slug",
    "is_valid_slug",
]
