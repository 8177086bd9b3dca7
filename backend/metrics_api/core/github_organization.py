"""GitHubOrganization Aggregate: a registered organization and its token expiry.

Invariants:
    - name is non-empty and stored uppercase (case-insensitive uniqueness by
      storing the canonical form)
    - The access token is NOT an attribute: it lives only in the persistence
      layer and in create calls, so it cannot reach a response schema
    - is_token_expired() is True iff token_expires_at < now

Design Decisions:
    - "Expiry must be in the future" is a service rule, not a factory rule:
      rows read back from the store may legitimately carry past expiries
"""

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from metrics_api.core.domain_types import OrganizationId
from metrics_api.core.normalize import ensure_utc, require_text, utc_now


def canonical_name(name: str) -> str:
    return require_text(name, "Organization name cannot be empty", "name").upper()


@dataclass(frozen=True)
class GitHubOrganization:
    id: OrganizationId
    name: str
    token_expires_at: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        id: UUID,
        name: str,
        token_expires_at: datetime,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "GitHubOrganization":
        now = utc_now()
        return cls(
            id=OrganizationId(id),
            name=canonical_name(name),
            token_expires_at=ensure_utc(token_expires_at),
            created_at=ensure_utc(created_at) if created_at else now,
            updated_at=ensure_utc(updated_at) if updated_at else now,
        )

    def is_token_expired(self, now: datetime | None = None) -> bool:
        return self.token_expires_at < (ensure_utc(now) if now else utc_now())

    def update_token(self, token_expires_at: datetime) -> "GitHubOrganization":
        return replace(
            self, token_expires_at=ensure_utc(token_expires_at), updated_at=utc_now(),
        )

    def rename(self, name: str) -> "GitHubOrganization":
        return replace(self, name=canonical_name(name), updated_at=utc_now())
