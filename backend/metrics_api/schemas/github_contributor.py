"""GitHubContributor Schemas: registration, identity changes, alias merges, and links.

Invariants:
    - Alias lists are accepted in any order and returned in first-seen order
    - ContributorStatus accepts exactly "active" | "inactive"

Design Decisions:
    - One small body per state transition (status, link, last-active) over a
      generic PATCH: each maps to exactly one service operation
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from metrics_api.core.domain_types import ContributorStatus
from metrics_api.core.github_contributor import GitHubContributor


class ContributorCreate(BaseModel):
    current_username: str = Field(max_length=255)
    current_email: str = Field(max_length=320)
    current_name: str = Field(max_length=255)
    user_id: UUID | None = None
    all_known_usernames: list[str] = Field(default_factory=list)
    all_known_emails: list[str] = Field(default_factory=list)
    all_known_names: list[str] = Field(default_factory=list)
    last_active_date: datetime | None = None
    status: ContributorStatus = ContributorStatus.ACTIVE

    @field_validator("current_username", "current_email", "current_name")
    @classmethod
    def strip_current(cls, v: str) -> str:
        return v.strip()


class ContributorIdentityUpdate(BaseModel):
    """New current identity. Omitted fields keep their current value."""
    current_username: str | None = Field(None, max_length=255)
    current_email: str | None = Field(None, max_length=320)
    current_name: str | None = Field(None, max_length=255)


class ContributorAliases(BaseModel):
    usernames: list[str] = Field(default_factory=list)
    emails: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)


class ContributorUserLink(BaseModel):
    user_id: UUID


class ContributorStatusUpdate(BaseModel):
    status: ContributorStatus


class ContributorLastActiveUpdate(BaseModel):
    last_active_date: datetime


class ContributorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    current_username: str
    current_email: str
    current_name: str
    all_known_usernames: list[str]
    all_known_emails: list[str]
    all_known_names: list[str]
    user_id: UUID | None
    last_active_date: datetime | None
    status: ContributorStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, contributor: GitHubContributor) -> "ContributorResponse":
        return cls.model_validate(contributor)


class ContributorListResponse(BaseModel):
    """Page of contributors plus the pagination echo."""
    data: list[ContributorResponse]
    total: int
    limit: int
    offset: int
