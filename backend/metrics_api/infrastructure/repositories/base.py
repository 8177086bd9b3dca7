"""Repository Base: shared session handling and error mapping for SQLAlchemy adapters.

Invariants:
    - A failed operation is rolled back before its Err is returned
    - The raw exception is logged; callers only see the mapped DatabaseError
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from metrics_api.core.errors import DatabaseError
from metrics_api.core.result import Err
from metrics_api.infrastructure.database import to_database_error

logger = logging.getLogger(__name__)


class SqlAlchemyRepository:
    """Holds the request-scoped AsyncSession."""

    resource: str = "record"

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def dialect(self) -> str:
        return self.db.get_bind().dialect.name

    async def _fail(self, exc: SQLAlchemyError, operation: str) -> Err[DatabaseError]:
        await self.db.rollback()
        error = to_database_error(exc, f"{self.resource}.{operation}")
        logger.error(
            f"Failed to {operation} {self.resource}: {exc}",
            extra={"error_code": error.code, "operation": error.operation},
        )
        return Err(error)
