"""Boundary Protocols: persistence contracts between core/services and infrastructure.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - Every method returns Result: Ok(value) or Err(DatabaseError | NotFoundError)
    - Single lookups return Ok(None) when absent; update/delete return
      Err(NotFoundError) when the row is absent
    - Contributor current_email is not unique: find_by_current_email returns
      the earliest created match

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO; domain logic stays sync
"""

from typing import Protocol

from metrics_api.core.domain_types import ContributorId, OrganizationId, UserId
from metrics_api.core.errors import DatabaseError, NotFoundError
from metrics_api.core.github_contributor import GitHubContributor
from metrics_api.core.github_organization import GitHubOrganization
from metrics_api.core.result import Result
from metrics_api.core.user import User

RepoError = DatabaseError | NotFoundError


class GitHubOrganizationRepository(Protocol):
    """Contract for organization persistence. The token is write-only."""
    async def create(
        self, organization: GitHubOrganization, access_token: str,
    ) -> Result[GitHubOrganization, DatabaseError]: ...
    async def find_all(
        self, limit: int | None = None, offset: int = 0,
    ) -> Result[list[GitHubOrganization], DatabaseError]: ...
    async def find_by_id(
        self, organization_id: OrganizationId,
    ) -> Result[GitHubOrganization | None, DatabaseError]: ...
    async def find_by_name(
        self, name: str,
    ) -> Result[GitHubOrganization | None, DatabaseError]: ...
    async def update(
        self, organization: GitHubOrganization,
    ) -> Result[GitHubOrganization, RepoError]: ...
    async def delete(
        self, organization_id: OrganizationId,
    ) -> Result[None, RepoError]: ...


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def create(self, user: User) -> Result[User, DatabaseError]: ...
    async def find_all(
        self, limit: int | None = None, offset: int = 0,
    ) -> Result[list[User], DatabaseError]: ...
    async def find_by_id(self, user_id: UserId) -> Result[User | None, DatabaseError]: ...
    async def find_by_email(self, email: str) -> Result[User | None, DatabaseError]: ...
    async def find_by_manager_id(
        self, manager_id: UserId,
    ) -> Result[list[User], DatabaseError]: ...
    async def update(self, user: User) -> Result[User, RepoError]: ...
    async def delete(self, user_id: UserId) -> Result[None, RepoError]: ...


class GitHubContributorRepository(Protocol):
    """Contract for contributor persistence."""
    async def create(
        self, contributor: GitHubContributor,
    ) -> Result[GitHubContributor, DatabaseError]: ...
    async def find_all(
        self, limit: int | None = None, offset: int = 0,
    ) -> Result[list[GitHubContributor], DatabaseError]: ...
    async def find_by_id(
        self, contributor_id: ContributorId,
    ) -> Result[GitHubContributor | None, DatabaseError]: ...
    async def find_by_user_id(
        self, user_id: UserId,
    ) -> Result[list[GitHubContributor], DatabaseError]: ...
    async def find_by_current_username(
        self, username: str,
    ) -> Result[GitHubContributor | None, DatabaseError]: ...
    async def find_by_current_email(
        self, email: str,
    ) -> Result[GitHubContributor | None, DatabaseError]: ...
    async def find_by_any_username(
        self, username: str,
    ) -> Result[list[GitHubContributor], DatabaseError]: ...
    async def find_by_any_email(
        self, email: str,
    ) -> Result[list[GitHubContributor], DatabaseError]: ...
    async def update(
        self, contributor: GitHubContributor,
    ) -> Result[GitHubContributor, RepoError]: ...
    async def delete(
        self, contributor_id: ContributorId,
    ) -> Result[None, RepoError]: ...
