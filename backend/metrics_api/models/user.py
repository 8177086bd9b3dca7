"""User ORM: persists internal employees and their manager hierarchy.

Invariants:
    - email is unique and stored lowercase (domain guarantees the form)
    - manager_id self-references users.id; deleting a manager nulls the link
    - Enum columns store the enum's string value

Design Decisions:
    - String columns over native ENUM types: adding a role needs no migration
"""

import uuid

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from metrics_api.db.base import Base, TimestampedRecord


class UserRecord(TimestampedRecord, Base):
    """Row in the users table."""
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(
        String(50), nullable=False, default="Product Engineer",
    )
    role_type: Mapped[str] = mapped_column(String(10), nullable=False, default="IC")
    growth_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    org_function: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pillar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tribe: Mapped[str | None] = mapped_column(String(255), nullable=True)
    squad: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    manager_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    app_access_role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="IC",
    )
