"""Database Session Manager: async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions map to DatabaseError subclasses (core/errors.py)
      through to_database_error(); raw driver text goes to the log only
    - get_db raises ServiceUnavailableError (503) when no manager is initialized

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: entities are mapped after commit without lazy loads
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, InterfaceError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from metrics_api.core.errors import (
    ConstraintKind, DatabaseError, IntegrityViolationError, ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

# SQLSTATE (PostgreSQL / asyncpg) and extended result names (sqlite3)
_UNIQUE_CODES = {"23505", "SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}
_FOREIGN_KEY_CODES = {"23503", "SQLITE_CONSTRAINT_FOREIGNKEY"}


def constraint_kind(exc: IntegrityError) -> ConstraintKind:
    """Classify an IntegrityError by the constraint that rejected the write."""
    orig = exc.orig
    code = (
        getattr(orig, "sqlstate", None)
        or getattr(orig, "pgcode", None)
        or getattr(orig, "sqlite_errorname", None)
    )
    if code in _UNIQUE_CODES:
        return ConstraintKind.UNIQUE
    if code in _FOREIGN_KEY_CODES:
        return ConstraintKind.FOREIGN_KEY

    message = str(orig).lower()
    if "unique" in message or "duplicate key" in message:
        return ConstraintKind.UNIQUE
    if "foreign key" in message:
        return ConstraintKind.FOREIGN_KEY
    return ConstraintKind.OTHER


def to_database_error(exc: SQLAlchemyError, operation: str) -> DatabaseError:
    """Map a SQLAlchemy exception to a DatabaseError with a generic message."""
    if isinstance(exc, IntegrityError):
        return IntegrityViolationError(
            "Integrity constraint violated", operation, constraint=constraint_kind(exc),
        )
    if isinstance(exc, (OperationalError, InterfaceError)):
        return ServiceUnavailableError("Database is not available", operation)
    if isinstance(exc, DBAPIError):
        return DatabaseError("Database driver error", operation)
    return DatabaseError("Database operation failed", operation)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"DB error escaped repository: {e}")
            raise to_database_error(e, "session") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (used by the readiness check)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise ServiceUnavailableError("Service is not available", "connect")
    async with db_manager.session() as session:
        yield session
