"""Organization schemas: BusinessDomain -> Department -> Role -> Person.

These are simple records with client-generated identifiers and
timestamps. References between them (a department's ``domain_id``, a
person's ``department_id`` ...) are checked at the application layer by
``agentstory.validation.organization.check_organization_integrity``.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Optional

from pydantic import Field

from agentstory.schemas.base import LAX, StoryModel


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RoleLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    MANAGER = "manager"
    DIRECTOR = "director"
    EXECUTIVE = "executive"


class PersonStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ONBOARDING = "onboarding"
    OFFBOARDING = "offboarding"


class OrganizationRecord(StoryModel):
    """Common identity and timestamp fields of organization records."""

    id: str = Field(default_factory=_new_id, min_length=1)
    created_at: Annotated[datetime, LAX] = Field(default_factory=_now)
    updated_at: Annotated[datetime, LAX] = Field(default_factory=_now)

    def touch(self) -> None:
        """Refresh ``updated_at`` after a partial update."""
        self.updated_at = _now()


class BusinessDomain(OrganizationRecord):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class Department(OrganizationRecord):
    domain_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    manager_id: Optional[str] = None


class Responsibility(StoryModel):
    """A responsibility within a role, possibly a candidate for AI help."""

    id: str = Field(default_factory=_new_id, min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    ai_candidate: bool = False
    required_skill_domains: list[str] = Field(default_factory=list)


class Role(OrganizationRecord):
    department_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    responsibilities: list[Responsibility] = Field(default_factory=list)
    required_skill_domains: Optional[list[str]] = None
    level: Optional[Annotated[RoleLevel, LAX]] = None


class RoleAssignment(StoryModel):
    """Links a person to a role with a share of their time."""

    role_id: str = Field(..., min_length=1)
    allocation: float = Field(default=100, ge=0, le=100)
    start_date: Optional[Annotated[datetime, LAX]] = None
    is_primary: bool = False


class Person(OrganizationRecord):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    title: Optional[str] = Field(default=None, max_length=100)
    department_id: str = Field(..., min_length=1)
    role_assignments: list[RoleAssignment] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    status: Annotated[PersonStatus, LAX] = PersonStatus.ACTIVE

    @property
    def primary_role_id(self) -> Optional[str]:
        for assignment in self.role_assignments:
            if assignment.is_primary:
                return assignment.role_id
        return None


# =============================================================================
# Factories
# =============================================================================


def create_domain(name: str, description: Optional[str] = None) -> BusinessDomain:
    """Create a new business domain with a fresh id and timestamps."""
    return BusinessDomain(name=name, description=description)


def create_department(domain_id: str, name: str, description: Optional[str] = None) -> Department:
    """Create a new department inside ``domain_id``."""
    return Department(domain_id=domain_id, name=name, description=description)


def create_role(department_id: str, name: str, level: Optional[RoleLevel] = None) -> Role:
    """Create a new role inside ``department_id``."""
    return Role(department_id=department_id, name=name, level=level)


def create_person(department_id: str, name: str, email: str) -> Person:
    """Create a new active person in ``department_id`` with no roles."""
    return Person(department_id=department_id, name=name, email=email)


def create_role_assignment(role_id: str, is_primary: bool = False) -> RoleAssignment:
    """Create a full-time assignment to ``role_id``."""
    return RoleAssignment(role_id=role_id, allocation=100, is_primary=is_primary)


__all__ = [
    "RoleLevel",
    "PersonStatus",
    "OrganizationRecord",
    "BusinessDomain",
    "Department",
    "Responsibility",
    "Role",
    "RoleAssignment",
    "Person",
    "create_domain",
    "create_department",
    "create_role",
    "create_person",
    "create_role_assignment",
]
