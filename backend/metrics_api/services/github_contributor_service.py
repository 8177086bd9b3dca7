"""GitHubContributor Service: contributor registration, identity changes, and user links.

Invariants:
    - current_username is unique across contributors (checked before create and
      rename; unique index is the backstop)
    - A contributor can only be linked to an existing User
    - Identity changes go through GitHubContributor.update_current_info, so a
      superseded username/email/name always lands in the known-alias history
    - Domain ValidationErrors are returned as Err, never raised

Design Decisions:
    - Load, transform, save: every mutation reads the current aggregate, applies
      one pure domain method, and persists the returned instance
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, Iterable

from metrics_api.core.domain_types import ContributorId, ContributorStatus, UserId
from metrics_api.core.errors import (
    ConstraintKind, DatabaseError, IntegrityViolationError, NotFoundError, ValidationError,
)
from metrics_api.core.github_contributor import GitHubContributor
from metrics_api.core.normalize import normalize_email
from metrics_api.core.repository_protocols import (
    GitHubContributorRepository, UserRepository,
)
from metrics_api.core.result import Err, Ok, Result

logger = logging.getLogger(__name__)

ServiceError = ValidationError | NotFoundError | DatabaseError


class GitHubContributorService:
    """Contributor use cases over contributor and user repositories."""

    def __init__(
        self,
        repository: GitHubContributorRepository,
        user_repository: UserRepository,
    ):
        self.repository = repository
        self.user_repository = user_repository

    async def create_contributor(
        self,
        current_username: str,
        current_email: str,
        current_name: str,
        user_id: UserId | None = None,
        all_known_usernames: Iterable[str] = (),
        all_known_emails: Iterable[str] = (),
        all_known_names: Iterable[str] = (),
        last_active_date: datetime | None = None,
        status: ContributorStatus = ContributorStatus.ACTIVE,
    ) -> Result[GitHubContributor, ServiceError]:
        try:
            contributor = GitHubContributor.create(
                uuid.uuid4(),
                current_username,
                current_email,
                current_name,
                user_id=user_id,
                all_known_usernames=all_known_usernames,
                all_known_emails=all_known_emails,
                all_known_names=all_known_names,
                last_active_date=last_active_date,
                status=status,
            )
        except ValidationError as e:
            return Err(e)

        taken = await self._ensure_username_free(contributor.current_username)
        if taken is not None:
            return taken
        if user_id is not None:
            missing = await self._ensure_user_exists(user_id)
            if missing is not None:
                return missing

        saved = await self.repository.create(contributor)
        if saved.is_err():
            return _constraint_error_or(saved.error, contributor.current_username)
        logger.info(
            f"Contributor {contributor.current_username} registered",
            extra={"entity_id": contributor.id, "operation": "create_contributor"},
        )
        return saved

    async def list_contributors(
        self,
        limit: int = 10,
        offset: int = 0,
        user_id: UserId | None = None,
        username: str | None = None,
        email: str | None = None,
    ) -> Result[list[GitHubContributor], DatabaseError]:
        """List contributors, optionally filtered. Username/email match aliases too."""
        if user_id is not None:
            found = await self.repository.find_by_user_id(user_id)
        elif username:
            found = await self.repository.find_by_any_username(username)
        elif email:
            found = await self.repository.find_by_any_email(email)
        else:
            return await self.repository.find_all(limit=limit, offset=offset)
        if found.is_err():
            return found

        matches = found.value
        if username and user_id is not None:
            matches = [c for c in matches if c.has_used_username(username)]
        if email and (user_id is not None or username):
            matches = [c for c in matches if c.has_used_email(email)]
        return Ok(matches[offset:offset + limit])

    async def get_contributor_by_id(
        self, contributor_id: ContributorId,
    ) -> Result[GitHubContributor, ServiceError]:
        found = await self.repository.find_by_id(contributor_id)
        if found.is_err():
            return found
        if found.value is None:
            return Err(NotFoundError.for_resource("GitHub contributor", "ID", contributor_id))
        return Ok(found.value)

    async def get_contributor_by_username(
        self, username: str,
    ) -> Result[GitHubContributor, ServiceError]:
        if not (username or "").strip():
            return Err(ValidationError("Username cannot be empty", field="username"))
        found = await self.repository.find_by_current_username(username)
        if found.is_err():
            return found
        if found.value is None:
            return Err(NotFoundError.for_resource(
                "GitHub contributor", "username", username.strip(),
            ))
        return Ok(found.value)

    async def get_contributor_by_email(
        self, email: str,
    ) -> Result[GitHubContributor, ServiceError]:
        if not (email or "").strip():
            return Err(ValidationError("Email cannot be empty", field="email"))
        found = await self.repository.find_by_current_email(email)
        if found.is_err():
            return found
        if found.value is None:
            return Err(NotFoundError.for_resource(
                "GitHub contributor", "email", normalize_email(email),
            ))
        return Ok(found.value)

    async def update_current_info(
        self,
        contributor_id: ContributorId,
        username: str | None = None,
        email: str | None = None,
        name: str | None = None,
    ) -> Result[GitHubContributor, ServiceError]:
        """Change current identity. Omitted fields keep their current value."""
        current = await self.get_contributor_by_id(contributor_id)
        if current.is_err():
            return current
        contributor = current.value

        try:
            updated = contributor.update_current_info(
                username if username is not None else contributor.current_username,
                email if email is not None else contributor.current_email,
                name if name is not None else contributor.current_name,
            )
        except ValidationError as e:
            return Err(e)

        if updated.current_username != contributor.current_username:
            taken = await self._ensure_username_free(
                updated.current_username, allow_id=contributor.id,
            )
            if taken is not None:
                return taken
        return await self._save(updated)

    async def add_known_aliases(
        self,
        contributor_id: ContributorId,
        usernames: Iterable[str] = (),
        emails: Iterable[str] = (),
        names: Iterable[str] = (),
    ) -> Result[GitHubContributor, ServiceError]:
        return await self._mutate(
            contributor_id,
            lambda c: c.add_all_known_data(usernames=usernames, emails=emails, names=names),
        )

    async def link_to_user(
        self, contributor_id: ContributorId, user_id: UserId,
    ) -> Result[GitHubContributor, ServiceError]:
        missing = await self._ensure_user_exists(user_id)
        if missing is not None:
            return missing
        return await self._mutate(contributor_id, lambda c: c.link_to_user(user_id))

    async def unlink_from_user(
        self, contributor_id: ContributorId,
    ) -> Result[GitHubContributor, ServiceError]:
        return await self._mutate(contributor_id, lambda c: c.unlink_from_user())

    async def update_status(
        self, contributor_id: ContributorId, status: ContributorStatus | str,
    ) -> Result[GitHubContributor, ServiceError]:
        return await self._mutate(contributor_id, lambda c: c.update_status(status))

    async def update_last_active_date(
        self, contributor_id: ContributorId, when: datetime,
    ) -> Result[GitHubContributor, ServiceError]:
        return await self._mutate(
            contributor_id, lambda c: c.update_last_active_date(when),
        )

    async def delete_contributor(
        self, contributor_id: ContributorId,
    ) -> Result[None, ServiceError]:
        return await self.repository.delete(contributor_id)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _mutate(
        self,
        contributor_id: ContributorId,
        change: Callable[[GitHubContributor], GitHubContributor],
    ) -> Result[GitHubContributor, ServiceError]:
        current = await self.get_contributor_by_id(contributor_id)
        if current.is_err():
            return current
        try:
            updated = change(current.value)
        except ValidationError as e:
            return Err(e)
        return await self._save(updated)

    async def _save(
        self, contributor: GitHubContributor,
    ) -> Result[GitHubContributor, ServiceError]:
        saved = await self.repository.update(contributor)
        if saved.is_err():
            return _constraint_error_or(saved.error, contributor.current_username)
        return saved

    async def _ensure_username_free(
        self, username: str, allow_id: ContributorId | None = None,
    ) -> Err | None:
        existing = await self.repository.find_by_current_username(username)
        if existing.is_err():
            return existing
        if existing.value is not None and existing.value.id != allow_id:
            return Err(ValidationError(
                f"GitHub contributor with username '{username}' already exists",
                field="current_username",
            ))
        return None

    async def _ensure_user_exists(self, user_id: UserId) -> Err | None:
        user = await self.user_repository.find_by_id(user_id)
        if user.is_err():
            return user
        if user.value is None:
            return Err(ValidationError("User not found", field="user_id"))
        return None


def _constraint_error_or(error: ServiceError, username: str) -> Err:
    """Report constraint rejections in domain terms; anything else passes through.

    Unique index on current_username: duplicate. Foreign key on user_id: the
    linked user vanished between the pre-check and the write.
    """
    if isinstance(error, IntegrityViolationError):
        if error.constraint is ConstraintKind.UNIQUE:
            return Err(ValidationError(
                f"GitHub contributor with username '{username}' already exists",
                field="current_username",
            ))
        if error.constraint is ConstraintKind.FOREIGN_KEY:
            return Err(ValidationError("User not found", field="user_id"))
    return Err(error)
