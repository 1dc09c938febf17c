"""Shared plumbing for repositories."""

from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import BackendError

logger = structlog.get_logger(__name__)


class BaseRepository:
    """Wraps session calls so database failures surface as BackendError."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _execute(self, statement: Any):
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("database_query_failed", error=str(exc))
            raise BackendError("Database query failed") from exc

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("database_commit_failed", error=str(exc))
            raise BackendError("Database operation failed") from exc
