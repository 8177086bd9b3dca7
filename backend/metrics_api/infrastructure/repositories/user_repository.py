"""User Repository: SQLAlchemy adapter for UserRepository."""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from metrics_api.core.domain_types import (
    AppAccessRole, OrgFunction, Role, RoleType, UserId,
)
from metrics_api.core.errors import NotFoundError
from metrics_api.core.normalize import ensure_utc, normalize_email
from metrics_api.core.result import Err, Ok
from metrics_api.core.user import User
from metrics_api.infrastructure.repositories.base import SqlAlchemyRepository
from metrics_api.models.user import UserRecord

_COPIED_FIELDS = (
    "email", "name", "company", "growth_level", "pillar", "tribe", "squad",
    "job_title", "manager_id", "created_at", "updated_at",
)


def _to_domain(record: UserRecord) -> User:
    return User(
        id=UserId(record.id),
        email=record.email,
        name=record.name,
        company=record.company,
        role=Role(record.role),
        role_type=RoleType(record.role_type),
        growth_level=record.growth_level,
        org_function=OrgFunction(record.org_function) if record.org_function else None,
        pillar=record.pillar,
        tribe=record.tribe,
        squad=record.squad,
        job_title=record.job_title,
        manager_id=UserId(record.manager_id) if record.manager_id else None,
        app_access_role=AppAccessRole(record.app_access_role),
        created_at=ensure_utc(record.created_at),
        updated_at=ensure_utc(record.updated_at),
    )


def _apply(record: UserRecord, user: User) -> UserRecord:
    for name in _COPIED_FIELDS:
        setattr(record, name, getattr(user, name))
    record.role = user.role.value
    record.role_type = user.role_type.value
    record.org_function = user.org_function.value if user.org_function else None
    record.app_access_role = user.app_access_role.value
    return record


class SqlAlchemyUserRepository(SqlAlchemyRepository):
    resource = "user"

    async def create(self, user: User):
        record = _apply(UserRecord(id=user.id), user)
        try:
            self.db.add(record)
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "create")
        return Ok(_to_domain(record))

    async def find_all(self, limit: int | None = None, offset: int = 0):
        query = select(UserRecord).order_by(UserRecord.created_at).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            return await self._fail(e, "find_all")
        return Ok([_to_domain(r) for r in result.scalars().all()])

    async def find_by_id(self, user_id: UserId):
        try:
            record = await self.db.get(UserRecord, user_id)
        except SQLAlchemyError as e:
            return await self._fail(e, "find_by_id")
        return Ok(_to_domain(record) if record else None)

    async def find_by_email(self, email: str):
        try:
            result = await self.db.execute(
                select(UserRecord).where(UserRecord.email == normalize_email(email)),
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            return await self._fail(e, "find_by_email")
        return Ok(_to_domain(record) if record else None)

    async def find_by_manager_id(self, manager_id: UserId):
        try:
            result = await self.db.execute(
                select(UserRecord)
                .where(UserRecord.manager_id == manager_id)
                .order_by(UserRecord.created_at),
            )
        except SQLAlchemyError as e:
            return await self._fail(e, "find_by_manager_id")
        return Ok([_to_domain(r) for r in result.scalars().all()])

    async def update(self, user: User):
        try:
            record = await self.db.get(UserRecord, user.id)
            if record is None:
                return Err(NotFoundError.for_resource("User", "ID", user.id))
            _apply(record, user)
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "update")
        return Ok(_to_domain(record))

    async def delete(self, user_id: UserId):
        try:
            result = await self.db.execute(
                delete(UserRecord).where(UserRecord.id == user_id),
            )
            if result.rowcount == 0:
                await self.db.rollback()
                return Err(NotFoundError.for_resource("User", "ID", user_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._fail(e, "delete")
        return Ok(None)
