"""Repository Adapters: SQLAlchemy implementations of the core repository protocols.

Invariants:
    - One adapter per aggregate, constructed with a request-scoped AsyncSession
    - Adapters return Result; no SQLAlchemy exception crosses this package
"""

from metrics_api.infrastructure.repositories.github_contributor_repository import (  # noqa: F401
    SqlAlchemyGitHubContributorRepository,
)
from metrics_api.infrastructure.repositories.github_organization_repository import (  # noqa: F401
    SqlAlchemyGitHubOrganizationRepository,
)
from metrics_api.infrastructure.repositories.user_repository import (  # noqa: F401
    SqlAlchemyUserRepository,
)
