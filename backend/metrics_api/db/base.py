"""SQLAlchemy Declarative Base: shared base class and columns for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - Every table carries id (UUID), created_at, updated_at (timezone-aware)

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - Timestamps set from the domain object, not server defaults, so the
      value returned to the client is the value stored
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all metrics ORM models."""
    pass


class TimestampedRecord:
    """Mixin: UUID primary key plus created/updated timestamps."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
