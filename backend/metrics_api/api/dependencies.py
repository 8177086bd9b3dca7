"""Service Dependencies: per-request wiring of repositories into services.

Invariants:
    - One AsyncSession per request (get_db); every repository in a request shares it
    - Routes depend on services, never on repositories or sessions directly
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from metrics_api.infrastructure.database import get_db
from metrics_api.infrastructure.repositories import (
    SqlAlchemyGitHubContributorRepository,
    SqlAlchemyGitHubOrganizationRepository,
    SqlAlchemyUserRepository,
)
from metrics_api.services.github_contributor_service import GitHubContributorService
from metrics_api.services.github_organization_service import GitHubOrganizationService
from metrics_api.services.user_service import UserService


def get_organization_service(
    db: AsyncSession = Depends(get_db),
) -> GitHubOrganizationService:
    return GitHubOrganizationService(SqlAlchemyGitHubOrganizationRepository(db))


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlAlchemyUserRepository(db))


def get_contributor_service(
    db: AsyncSession = Depends(get_db),
) -> GitHubContributorService:
    return GitHubContributorService(
        SqlAlchemyGitHubContributorRepository(db), SqlAlchemyUserRepository(db),
    )
