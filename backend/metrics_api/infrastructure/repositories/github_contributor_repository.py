"""GitHubContributor Repository: SQLAlchemy adapter for GitHubContributorRepository.

Invariants:
    - find_by_any_* match the current value OR any known alias
    - current_email may be shared; find_by_current_email returns the
      earliest created contributor using it
    - Alias tuples are stored as plain lists and read back as tuples

Design Decisions:
    - PostgreSQL uses `value = ANY(column)`; other dialects (SQLite in tests)
      filter the current-or-known match in Python
"""

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError

from metrics_api.core.domain_types import ContributorId, ContributorStatus, UserId
from metrics_api.core.errors import NotFoundError
from metrics_api.core.github_contributor import GitHubContributor
from metrics_api.core.normalize import ensure_utc, normalize_email
from metrics_api.core.result import Err, Ok
from metrics_api.infrastructure.repositories.base import SqlAlchemyRepository
from metrics_api.models.github_contributor import GitHubContributorRecord as Record


def _to_domain(record: Record) -> GitHubContributor:
    return GitHubContributor(
        id=ContributorId(record.id),
        current_username=record.current_username,
        current_email=record.current_email,
        current_name=record.current_name,
        all_known_usernames=tuple(record.all_known_usernames or ()),
        all_known_emails=tuple(record.all_known_emails or ()),
        all_known_names=tuple(record.all_known_names or ()),
        user_id=UserId(record.user_id) if record.user_id else None,
        last_active_date=(
            ensure_utc(record.last_active_date) if record.last_active_date else None
        ),
        status=ContributorStatus(record.status),
        created_at=ensure_utc(record.created_at),
        updated_at=ensure_utc(record.updated_at),
    )


def _apply(record: Record, contributor: GitHubContributor) -> Record:
    record.current_username = contributor.current_username
    record.current_email = contributor.current_email
    record.current_name = contributor.current_name
    record.all_known_usernames = list(contributor.all_known_usernames)
    record.all_known_emails = list(contributor.all_known_emails)
    record.all_known_names = list(contributor.all_known_names)
    record.user_id = contributor.user_id
    record.last_active_date = contributor.last_active_date
    record.status = contributor.status.value
    record.created_at = contributor.created_at
    record.updated_at = contributor.updated_at
    return record


class SqlAlchemyGitHubContributorRepository(SqlAlchemyRepository):
    resource = "contributor"

    async def create(self, contributor: GitHubContributor):
        record = _apply(Record(id=contributor.id), contributor)
        try:
            self.db.add(record)
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "create")
        return Ok(_to_domain(record))

    async def find_all(self, limit: int | None = None, offset: int = 0):
        query = select(Record).order_by(Record.created_at).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return await self._many(query, "find_all")

    async def find_by_id(self, contributor_id: ContributorId):
        try:
            record = await self.db.get(Record, contributor_id)
        except SQLAlchemyError as e:
            return await self._fail(e, "find_by_id")
        return Ok(_to_domain(record) if record else None)

    async def find_by_user_id(self, user_id: UserId):
        query = (
            select(Record).where(Record.user_id == user_id).order_by(Record.created_at)
        )
        return await self._many(query, "find_by_user_id")

    async def find_by_current_username(self, username: str):
        return await self._one(
            select(Record).where(Record.current_username == username.strip()),
            "find_by_current_username",
        )

    async def find_by_current_email(self, email: str):
        """current_email is not unique: return the earliest registered match."""
        return await self._one(
            select(Record)
            .where(Record.current_email == normalize_email(email))
            .order_by(Record.created_at)
            .limit(1),
            "find_by_current_email",
        )

    async def find_by_any_username(self, username: str):
        value = username.strip()
        return await self._current_or_known(
            Record.current_username, Record.all_known_usernames, value,
            lambda c: c.has_used_username(value), "find_by_any_username",
        )

    async def find_by_any_email(self, email: str):
        value = normalize_email(email)
        return await self._current_or_known(
            Record.current_email, Record.all_known_emails, value,
            lambda c: c.has_used_email(value), "find_by_any_email",
        )

    async def update(self, contributor: GitHubContributor):
        try:
            record = await self.db.get(Record, contributor.id)
            if record is None:
                return Err(NotFoundError.for_resource(
                    "GitHub contributor", "ID", contributor.id,
                ))
            _apply(record, contributor)
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "update")
        return Ok(_to_domain(record))

    async def delete(self, contributor_id: ContributorId):
        try:
            result = await self.db.execute(
                delete(Record).where(Record.id == contributor_id),
            )
            if result.rowcount == 0:
                await self.db.rollback()
                return Err(NotFoundError.for_resource(
                    "GitHub contributor", "ID", contributor_id,
                ))
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "delete")
        return Ok(None)

    # ─── Query helpers ───────────────────────────────────────────

    async def _one(self, query, operation: str):
        try:
            result = await self.db.execute(query)
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            return await self._fail(e, operation)
        return Ok(_to_domain(record) if record else None)

    async def _many(self, query, operation: str):
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            return await self._fail(e, operation)
        return Ok([_to_domain(r) for r in result.scalars().all()])

    async def _current_or_known(self, current_col, known_col, value, matches, operation):
        if self.dialect == "postgresql":
            query = (
                select(Record)
                .where(or_(current_col == value, known_col.any(value)))
                .order_by(Record.created_at)
            )
            return await self._many(query, operation)

        result = await self._many(select(Record).order_by(Record.created_at), operation)
        if result.is_err():
            return result
        return Ok([c for c in result.value if matches(c)])
