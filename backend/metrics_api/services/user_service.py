"""User Service: employee registration, profile maintenance, and manager hierarchy.

Invariants:
    - Email is unique (checked case-insensitively before create and email change)
    - A referenced manager must exist
    - Profile updates never change email; update_user_email is the only path
    - Domain ValidationErrors are returned as Err, never raised

Design Decisions:
    - get_users_by_manager verifies the manager exists so an unknown id is a 404,
      not an empty list
"""

import logging
import uuid

from metrics_api.core.domain_types import UserId
from metrics_api.core.errors import (
    ConstraintKind, DatabaseError, IntegrityViolationError, NotFoundError, ValidationError,
)
from metrics_api.core.normalize import normalize_email
from metrics_api.core.repository_protocols import UserRepository
from metrics_api.core.result import Err, Ok, Result
from metrics_api.core.user import User

logger = logging.getLogger(__name__)

ServiceError = ValidationError | NotFoundError | DatabaseError


class UserService:
    """User use cases over a UserRepository."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def create_user(
        self, email: str, name: str, **profile,
    ) -> Result[User, ServiceError]:
        """Create a user. `profile` carries the optional User.create keywords."""
        if not (email or "").strip():
            return Err(ValidationError("Email is required", field="email"))
        if not (name or "").strip():
            return Err(ValidationError("Name is required", field="name"))

        taken = await self._ensure_email_free(email)
        if taken is not None:
            return taken

        manager_check = await self._ensure_manager_exists(profile.get("manager_id"))
        if manager_check is not None:
            return manager_check

        try:
            user = User.create(uuid.uuid4(), email, name, **profile)
        except ValidationError as e:
            return Err(e)

        saved = await self.repository.create(user)
        if saved.is_err():
            return _constraint_error_or(saved.error, user.email)
        logger.info(
            "User created", extra={"entity_id": user.id, "operation": "create_user"},
        )
        return saved

    async def list_users(
        self, limit: int | None = None, offset: int = 0,
    ) -> Result[list[User], DatabaseError]:
        return await self.repository.find_all(limit=limit, offset=offset)

    async def get_user_by_id(self, user_id: UserId) -> Result[User, ServiceError]:
        found = await self.repository.find_by_id(user_id)
        if found.is_err():
            return found
        if found.value is None:
            return Err(NotFoundError.for_resource("User", "ID", user_id))
        return Ok(found.value)

    async def get_user_by_email(self, email: str) -> Result[User, ServiceError]:
        if not (email or "").strip():
            return Err(ValidationError("Email cannot be empty", field="email"))
        found = await self.repository.find_by_email(email)
        if found.is_err():
            return found
        if found.value is None:
            return Err(NotFoundError.for_resource("User", "email", normalize_email(email)))
        return Ok(found.value)

    async def update_user(
        self, user_id: UserId, **updates,
    ) -> Result[User, ServiceError]:
        """Apply a partial profile update."""
        current = await self.get_user_by_id(user_id)
        if current.is_err():
            return current

        manager_check = await self._ensure_manager_exists(updates.get("manager_id"))
        if manager_check is not None:
            return manager_check

        try:
            user = current.value.update_profile(**updates)
        except ValidationError as e:
            return Err(e)

        updated = await self.repository.update(user)
        if updated.is_err():
            return _constraint_error_or(updated.error, user.email)
        return updated

    async def update_user_email(
        self, user_id: UserId, new_email: str,
    ) -> Result[User, ServiceError]:
        if not (new_email or "").strip():
            return Err(ValidationError("Email cannot be empty", field="email"))

        current = await self.get_user_by_id(user_id)
        if current.is_err():
            return current

        taken = await self._ensure_email_free(new_email, allow_id=user_id)
        if taken is not None:
            return taken

        try:
            user = current.value.update_email(new_email)
        except ValidationError as e:
            return Err(e)

        updated = await self.repository.update(user)
        if updated.is_err():
            return _constraint_error_or(updated.error, user.email)
        return updated

    async def delete_user(self, user_id: UserId) -> Result[None, ServiceError]:
        return await self.repository.delete(user_id)

    async def get_users_by_manager(
        self, manager_id: UserId,
    ) -> Result[list[User], ServiceError]:
        manager = await self.get_user_by_id(manager_id)
        if manager.is_err():
            return manager
        return await self.repository.find_by_manager_id(manager_id)

    # ─── Pre-condition checks (None = passed) ────────────────────

    async def _ensure_email_free(
        self, email: str, allow_id: UserId | None = None,
    ) -> Err | None:
        existing = await self.repository.find_by_email(email)
        if existing.is_err():
            return existing
        if existing.value is not None and existing.value.id != allow_id:
            return Err(ValidationError(
                f"User with email '{normalize_email(email)}' already exists", field="email",
            ))
        return None

    async def _ensure_manager_exists(self, manager_id: UserId | None) -> Err | None:
        if manager_id is None:
            return None
        manager = await self.repository.find_by_id(manager_id)
        if manager.is_err():
            return manager
        if manager.value is None:
            return Err(ValidationError("Manager not found", field="manager_id"))
        return None


def _constraint_error_or(error: ServiceError, email: str) -> Err:
    """Unique-email and manager foreign-key backstop for concurrent writes."""
    if isinstance(error, IntegrityViolationError):
        if error.constraint is ConstraintKind.UNIQUE:
            return Err(ValidationError(
                f"User with email '{email}' already exists", field="email",
            ))
        if error.constraint is ConstraintKind.FOREIGN_KEY:
            return Err(ValidationError("Manager not found", field="manager_id"))
    return Err(error)
