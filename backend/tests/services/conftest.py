"""Service test fixtures: services wired to SQLAlchemy repositories on in-memory SQLite.

Invariants:
    - Every service in a test shares the same test_db session
"""

import pytest

from metrics_api.infrastructure.repositories import (
    SqlAlchemyGitHubContributorRepository,
    SqlAlchemyGitHubOrganizationRepository,
    SqlAlchemyUserRepository,
)
from metrics_api.services.github_contributor_service import GitHubContributorService
from metrics_api.services.github_organization_service import GitHubOrganizationService
from metrics_api.services.user_service import UserService


@pytest.fixture
def organization_service(test_db):
    return GitHubOrganizationService(SqlAlchemyGitHubOrganizationRepository(test_db))


@pytest.fixture
def user_service(test_db):
    return UserService(SqlAlchemyUserRepository(test_db))


@pytest.fixture
def contributor_service(test_db):
    return GitHubContributorService(
        SqlAlchemyGitHubContributorRepository(test_db), SqlAlchemyUserRepository(test_db),
    )
