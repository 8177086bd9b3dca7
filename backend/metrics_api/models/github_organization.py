"""GitHubOrganization ORM: persists registered organizations and their access tokens.

Invariants:
    - name is unique and stored uppercase
    - access_token exists only here; it is never mapped back onto the domain object
"""

from datetime import datetime

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from metrics_api.db.base import Base, TimestampedRecord


class GitHubOrganizationRecord(TimestampedRecord, Base):
    """Row in the github_organizations table."""
    __tablename__ = "github_organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    access_token: Mapped[str] = mapped_column(Text, nullable=False)
    token_expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
