"""GitHubOrganization Schemas: create/update bodies and the public organization shape.

Invariants:
    - access_token is accepted on create only and never echoed back
    - Name emptiness and expiry-in-the-future are enforced by the service,
      so the client sees the same message regardless of entry point
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from metrics_api.core.github_organization import GitHubOrganization


class OrganizationCreate(BaseModel):
    name: str = Field(max_length=255)
    access_token: str
    token_expires_at: datetime

    @field_validator("name", "access_token")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class OrganizationUpdate(BaseModel):
    """Partial update: omitted fields are left unchanged."""
    name: str | None = Field(None, max_length=255)
    token_expires_at: datetime | None = None


class OrganizationResponse(BaseModel):
    id: UUID
    name: str
    token_expires_at: datetime
    token_expired: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, organization: GitHubOrganization) -> "OrganizationResponse":
        return cls(
            id=organization.id,
            name=organization.name,
            token_expires_at=organization.token_expires_at,
            token_expired=organization.is_token_expired(),
            created_at=organization.created_at,
            updated_at=organization.updated_at,
        )
