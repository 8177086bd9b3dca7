"""User Service: email uniqueness, manager references, profile vs email updates."""

from uuid import uuid4

from metrics_api.core.domain_types import Role
from metrics_api.core.errors import (
    ConstraintKind, IntegrityViolationError, NotFoundError, ValidationError,
)
from metrics_api.core.result import Err, Ok
from metrics_api.core.user import User
from metrics_api.services.user_service import UserService


async def test_create_user_with_profile(user_service):
    result = await user_service.create_user(
        "Dev@Example.com", "Dev", role=Role.DATA_ENGINEER, squad="Core",
    )
    assert result.is_ok()
    assert result.value.email == "dev@example.com"
    assert result.value.role is Role.DATA_ENGINEER
    assert result.value.squad == "Core"


async def test_create_requires_email_and_name(user_service):
    assert (await user_service.create_user("  ", "Dev")).error.message == "Email is required"
    assert (await user_service.create_user("a@b.co", "")).error.message == "Name is required"


async def test_create_rejects_bad_email_format(user_service):
    result = await user_service.create_user("not-an-email", "Dev")
    assert result.error.message == "Invalid email format"


async def test_create_duplicate_email_case_insensitive(user_service):
    await user_service.create_user("dev@example.com", "Dev")
    result = await user_service.create_user("DEV@example.com", "Other")
    assert isinstance(result.error, ValidationError)
    assert "already exists" in result.error.message


async def test_create_requires_existing_manager(user_service):
    result = await user_service.create_user("dev@example.com", "Dev", manager_id=uuid4())
    assert result.error.message == "Manager not found"


async def test_get_user_by_email_normalizes(user_service):
    created = (await user_service.create_user("dev@example.com", "Dev")).value
    found = await user_service.get_user_by_email("  DEV@Example.com")
    assert found.value.id == created.id


async def test_get_missing_user_is_not_found(user_service):
    assert isinstance((await user_service.get_user_by_id(uuid4())).error, NotFoundError)
    missing = await user_service.get_user_by_email("ghost@example.com")
    assert missing.error.message == "User with email 'ghost@example.com' not found"


async def test_update_user_profile(user_service):
    boss = (await user_service.create_user("boss@example.com", "Boss")).value
    dev = (await user_service.create_user("dev@example.com", "Dev")).value

    updated = await user_service.update_user(dev.id, manager_id=boss.id, job_title="SWE")
    assert updated.value.manager_id == boss.id
    assert updated.value.job_title == "SWE"
    assert updated.value.email == "dev@example.com"


async def test_update_user_rejects_self_management(user_service):
    dev = (await user_service.create_user("dev@example.com", "Dev")).value
    result = await user_service.update_user(dev.id, manager_id=dev.id)
    assert result.error.message == "User cannot be their own manager"


async def test_update_user_rejects_email_key(user_service):
    dev = (await user_service.create_user("dev@example.com", "Dev")).value
    result = await user_service.update_user(dev.id, email="x@example.com")
    assert isinstance(result.error, ValidationError)


async def test_update_user_email(user_service):
    dev = (await user_service.create_user("dev@example.com", "Dev")).value
    result = await user_service.update_user_email(dev.id, "New@Example.com")
    assert result.value.email == "new@example.com"


async def test_update_user_email_to_own_email_is_allowed(user_service):
    dev = (await user_service.create_user("dev@example.com", "Dev")).value
    assert (await user_service.update_user_email(dev.id, "DEV@example.com")).is_ok()


async def test_update_user_email_rejects_taken_email(user_service):
    await user_service.create_user("taken@example.com", "Taken")
    dev = (await user_service.create_user("dev@example.com", "Dev")).value
    result = await user_service.update_user_email(dev.id, "taken@example.com")
    assert result.error.message == "User with email 'taken@example.com' already exists"


async def test_get_users_by_manager(user_service):
    boss = (await user_service.create_user("boss@example.com", "Boss", role_type="MG")).value
    await user_service.create_user("a@example.com", "A", manager_id=boss.id)
    await user_service.create_user("b@example.com", "B")

    reports = await user_service.get_users_by_manager(boss.id)
    assert [u.name for u in reports.value] == ["A"]
    assert isinstance((await user_service.get_users_by_manager(uuid4())).error, NotFoundError)


async def test_delete_user(user_service):
    dev = (await user_service.create_user("dev@example.com", "Dev")).value
    assert (await user_service.delete_user(dev.id)).is_ok()
    assert isinstance((await user_service.delete_user(dev.id)).error, NotFoundError)


async def test_list_users_paginates(user_service):
    for i in range(3):
        await user_service.create_user(f"u{i}@example.com", f"U{i}")
    assert len((await user_service.list_users(limit=2)).value) == 2
    assert len((await user_service.list_users()).value) == 3


class _RacingUserRepository:
    """Pre-checks pass against `users`, then every write is rejected by the store."""

    def __init__(self, write_error, users=()):
        self.write_error = write_error
        self.users = {user.id: user for user in users}

    async def find_by_email(self, email):
        return Ok(None)

    async def find_by_id(self, user_id):
        return Ok(self.users.get(user_id))

    async def create(self, user):
        return Err(self.write_error)

    async def update(self, user):
        return Err(self.write_error)


def _violation(constraint):
    return IntegrityViolationError("Integrity constraint violated", constraint=constraint)


async def test_unique_index_rejection_reported_as_duplicate():
    service = UserService(_RacingUserRepository(_violation(ConstraintKind.UNIQUE)))
    result = await service.create_user("dev@example.com", "Dev")
    assert result.error.message == "User with email 'dev@example.com' already exists"


async def test_manager_foreign_key_rejection_is_manager_not_found():
    user = User.create(uuid4(), "dev@example.com", "Dev")
    manager = User.create(uuid4(), "boss@example.com", "Boss")
    repository = _RacingUserRepository(
        _violation(ConstraintKind.FOREIGN_KEY), users=[user, manager],
    )

    result = await UserService(repository).update_user(user.id, manager_id=manager.id)
    assert isinstance(result.error, ValidationError)
    assert result.error.message == "Manager not found"
    assert result.error.field == "manager_id"


async def test_unclassified_integrity_violation_is_not_a_duplicate():
    failure = IntegrityViolationError("Integrity constraint violated")
    result = await UserService(_RacingUserRepository(failure)).create_user(
        "dev@example.com", "Dev",
    )
    assert result.error is failure
