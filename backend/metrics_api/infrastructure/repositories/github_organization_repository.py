"""GitHubOrganization Repository: SQLAlchemy adapter for GitHubOrganizationRepository.

Invariants:
    - find_by_name compares against the canonical uppercase form
    - The access token is written on create and never read back into the domain
"""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from metrics_api.core.domain_types import OrganizationId
from metrics_api.core.errors import NotFoundError
from metrics_api.core.github_organization import GitHubOrganization
from metrics_api.core.result import Err, Ok
from metrics_api.infrastructure.repositories.base import SqlAlchemyRepository
from metrics_api.models.github_organization import GitHubOrganizationRecord


def _to_domain(record: GitHubOrganizationRecord) -> GitHubOrganization:
    return GitHubOrganization.create(
        record.id,
        record.name,
        record.token_expires_at,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SqlAlchemyGitHubOrganizationRepository(SqlAlchemyRepository):
    resource = "organization"

    async def create(self, organization: GitHubOrganization, access_token: str):
        record = GitHubOrganizationRecord(
            id=organization.id,
            name=organization.name,
            access_token=access_token,
            token_expires_at=organization.token_expires_at,
            created_at=organization.created_at,
            updated_at=organization.updated_at,
        )
        try:
            self.db.add(record)
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "create")
        return Ok(_to_domain(record))

    async def find_all(self, limit: int | None = None, offset: int = 0):
        query = (
            select(GitHubOrganizationRecord)
            .order_by(GitHubOrganizationRecord.created_at)
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            return await self._fail(e, "find_all")
        return Ok([_to_domain(r) for r in result.scalars().all()])

    async def find_by_id(self, organization_id: OrganizationId):
        try:
            record = await self.db.get(GitHubOrganizationRecord, organization_id)
        except SQLAlchemyError as e:
            return await self._fail(e, "find_by_id")
        return Ok(_to_domain(record) if record else None)

    async def find_by_name(self, name: str):
        try:
            result = await self.db.execute(
                select(GitHubOrganizationRecord).where(
                    GitHubOrganizationRecord.name == name.strip().upper(),
                ),
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            return await self._fail(e, "find_by_name")
        return Ok(_to_domain(record) if record else None)

    async def update(self, organization: GitHubOrganization):
        try:
            record = await self.db.get(GitHubOrganizationRecord, organization.id)
            if record is None:
                return Err(NotFoundError.for_resource(
                    "Organization", "ID", organization.id,
                ))
            record.name = organization.name
            record.token_expires_at = organization.token_expires_at
            record.updated_at = organization.updated_at
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "update")
        return Ok(_to_domain(record))

    async def delete(self, organization_id: OrganizationId):
        try:
            result = await self.db.execute(
                delete(GitHubOrganizationRecord).where(
                    GitHubOrganizationRecord.id == organization_id,
                ),
            )
            if result.rowcount == 0:
                await self.db.rollback()
                return Err(NotFoundError.for_resource(
                    "Organization", "ID", organization_id,
                ))
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "delete")
        return Ok(None)
