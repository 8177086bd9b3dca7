"""User Schemas: Pydantic models for user registration, profile updates, and responses.

Invariants:
    - UserUpdate rejects unknown keys (email included): the email only
      changes through UserEmailUpdate
    - Enum fields accept exactly the persisted string values

Design Decisions:
    - Email format is checked by the domain (one EMAIL_PATTERN for the whole
      system) rather than pydantic's EmailStr
    - UserUpdate is applied with exclude_unset so "absent" and "null" differ:
      null clears a nullable field, absent keeps it
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from metrics_api.core.domain_types import AppAccessRole, OrgFunction, Role, RoleType
from metrics_api.core.user import User


class UserCreate(BaseModel):
    """User registration: email and name required, everything else optional."""
    email: str = Field(max_length=320)
    name: str = Field(max_length=255)
    company: str | None = Field(None, max_length=255)
    role: Role = Role.PRODUCT_ENGINEER
    role_type: RoleType = RoleType.IC
    growth_level: str | None = Field(None, max_length=50)
    org_function: OrgFunction | None = None
    pillar: str | None = Field(None, max_length=255)
    tribe: str | None = Field(None, max_length=255)
    squad: str | None = Field(None, max_length=255)
    job_title: str | None = Field(None, max_length=255)
    manager_id: UUID | None = None
    app_access_role: AppAccessRole = AppAccessRole.IC

    @field_validator("email", "name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return v.strip()


class UserUpdate(BaseModel):
    """Profile update. Only fields present in the body are applied."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=255)
    role: Role | None = None
    role_type: RoleType | None = None
    growth_level: str | None = Field(None, max_length=50)
    org_function: OrgFunction | None = None
    pillar: str | None = Field(None, max_length=255)
    tribe: str | None = Field(None, max_length=255)
    squad: str | None = Field(None, max_length=255)
    job_title: str | None = Field(None, max_length=255)
    manager_id: UUID | None = None
    app_access_role: AppAccessRole | None = None


class UserEmailUpdate(BaseModel):
    email: str = Field(max_length=320)


class UserResponse(BaseModel):
    """Public user data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    company: str | None
    role: Role
    role_type: RoleType
    growth_level: str | None
    org_function: OrgFunction | None
    pillar: str | None
    tribe: str | None
    squad: str | None
    job_title: str | None
    manager_id: UUID | None
    app_access_role: AppAccessRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls.model_validate(user)
