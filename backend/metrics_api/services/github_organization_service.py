"""GitHubOrganization Service: registration and token-expiry lifecycle of organizations.

Invariants:
    - Name and access token are non-empty; expiry is strictly in the future
      at creation and at any update
    - Name uniqueness is checked before insert/rename; a unique-constraint
      rejection from the store is still reported as a duplicate
    - Returns Result; never raises for expected failures

Design Decisions:
    - Check-then-insert is advisory: two concurrent creates can both pass the
      pre-check, and the loser is rejected by the unique index on name
"""

import logging
import uuid
from datetime import datetime

from metrics_api.core.domain_types import OrganizationId
from metrics_api.core.errors import (
    ConstraintKind, DatabaseError, IntegrityViolationError, NotFoundError, ValidationError,
)
from metrics_api.core.github_organization import GitHubOrganization, canonical_name
from metrics_api.core.normalize import ensure_utc, utc_now
from metrics_api.core.repository_protocols import GitHubOrganizationRepository
from metrics_api.core.result import Err, Ok, Result

logger = logging.getLogger(__name__)

ServiceError = ValidationError | NotFoundError | DatabaseError


def _check_future(token_expires_at: datetime) -> ValidationError | None:
    if ensure_utc(token_expires_at) <= utc_now():
        return ValidationError(
            "Token expiration date must be in the future", field="token_expires_at",
        )
    return None


class GitHubOrganizationService:
    """Organization use cases over a GitHubOrganizationRepository."""

    def __init__(self, repository: GitHubOrganizationRepository):
        self.repository = repository

    async def create_organization(
        self, name: str, access_token: str, token_expires_at: datetime,
    ) -> Result[GitHubOrganization, ServiceError]:
        if not (name or "").strip():
            return Err(ValidationError("Organization name cannot be empty", field="name"))
        if not (access_token or "").strip():
            return Err(ValidationError("Access token cannot be empty", field="access_token"))
        error = _check_future(token_expires_at)
        if error:
            return Err(error)

        existing = await self.repository.find_by_name(name)
        if existing.is_err():
            return existing
        if existing.value is not None:
            return Err(ValidationError(
                f"Organization '{canonical_name(name)}' already exists", field="name",
            ))

        organization = GitHubOrganization.create(uuid.uuid4(), name, token_expires_at)
        saved = await self.repository.create(organization, access_token.strip())
        if saved.is_err():
            return _duplicate_or(saved.error, organization.name)

        logger.info(
            f"Organization {organization.name} registered",
            extra={"entity_id": organization.id, "operation": "create_organization"},
        )
        return saved

    async def list_organizations(
        self, limit: int | None = None, offset: int = 0,
    ) -> Result[list[GitHubOrganization], DatabaseError]:
        return await self.repository.find_all(limit=limit, offset=offset)

    async def get_organization_by_id(
        self, organization_id: OrganizationId,
    ) -> Result[GitHubOrganization, ServiceError]:
        found = await self.repository.find_by_id(organization_id)
        if found.is_err():
            return found
        if found.value is None:
            return Err(NotFoundError.for_resource("Organization", "ID", organization_id))
        return Ok(found.value)

    async def get_organization_by_name(
        self, name: str,
    ) -> Result[GitHubOrganization, ServiceError]:
        if not (name or "").strip():
            return Err(ValidationError("Organization name cannot be empty", field="name"))
        found = await self.repository.find_by_name(name)
        if found.is_err():
            return found
        if found.value is None:
            return Err(NotFoundError.for_resource("Organization", "name", canonical_name(name)))
        return Ok(found.value)

    async def update_organization(
        self,
        organization_id: OrganizationId,
        name: str | None = None,
        token_expires_at: datetime | None = None,
    ) -> Result[GitHubOrganization, ServiceError]:
        """Rename and/or move the token expiry. Other fields are immutable here."""
        if token_expires_at is not None:
            error = _check_future(token_expires_at)
            if error:
                return Err(error)

        current = await self.get_organization_by_id(organization_id)
        if current.is_err():
            return current
        organization = current.value

        try:
            if name is not None:
                organization = organization.rename(name)
            if token_expires_at is not None:
                organization = organization.update_token(token_expires_at)
        except ValidationError as e:
            return Err(e)

        if organization.name != current.value.name:
            clash = await self.repository.find_by_name(organization.name)
            if clash.is_err():
                return clash
            if clash.value is not None and clash.value.id != organization_id:
                return Err(ValidationError(
                    f"Organization '{organization.name}' already exists", field="name",
                ))

        updated = await self.repository.update(organization)
        if updated.is_err():
            return _duplicate_or(updated.error, organization.name)
        return updated

    async def delete_organization(
        self, organization_id: OrganizationId,
    ) -> Result[None, ServiceError]:
        deleted = await self.repository.delete(organization_id)
        if deleted.is_ok():
            logger.info(
                "Organization deleted",
                extra={"entity_id": organization_id, "operation": "delete_organization"},
            )
        return deleted


def _duplicate_or(error: ServiceError, name: str) -> Err:
    """Unique-name backstop: report a constraint rejection as a duplicate."""
    if (
        isinstance(error, IntegrityViolationError)
        and error.constraint is ConstraintKind.UNIQUE
    ):
        return Err(ValidationError(f"Organization '{name}' already exists", field="name"))
    return Err(error)
