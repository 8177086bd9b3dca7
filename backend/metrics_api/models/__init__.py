"""ORM Models: SQLAlchemy declarative records, one per persisted aggregate.

Invariants:
    - All models inherit from Base (db/base.py)
    - Records are persistence shapes only; repositories map them to core entities

Design Decisions:
    - One file per entity for locality
    - All models imported here so metadata is complete before create_all/autogenerate
"""

from metrics_api.models.user import UserRecord  # noqa: F401
from metrics_api.models.github_organization import GitHubOrganizationRecord  # noqa: F401
from metrics_api.models.github_contributor import GitHubContributorRecord  # noqa: F401
