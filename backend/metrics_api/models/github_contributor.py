"""GitHubContributor ORM: persists contributor identities and their alias history.

Invariants:
    - current_username is unique
    - all_known_* columns hold string arrays (TEXT[] on PostgreSQL, JSON on SQLite)
    - user_id optionally links to users.id; deleting the user unlinks the contributor

Design Decisions:
    - ARRAY with a SQLite JSON variant: PostgreSQL gets ANY() lookups,
      the in-memory test database still stores the lists
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from metrics_api.db.base import Base, TimestampedRecord

StringList = ARRAY(Text).with_variant(JSON(), "sqlite")


class GitHubContributorRecord(TimestampedRecord, Base):
    """Row in the github_contributors table."""
    __tablename__ = "github_contributors"

    current_username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    current_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    current_name: Mapped[str] = mapped_column(String(255), nullable=False)
    all_known_usernames: Mapped[list[str]] = mapped_column(
        StringList, nullable=False, default=list,
    )
    all_known_emails: Mapped[list[str]] = mapped_column(
        StringList, nullable=False, default=list,
    )
    all_known_names: Mapped[list[str]] = mapped_column(
        StringList, nullable=False, default=list,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    last_active_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
