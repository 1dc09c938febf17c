"""Database initialization and dependency injection."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

import fastapi
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.config import get_settings
from components.core.database import DatabaseManager
# Import all models to ensure they're registered
import components.user.models
import components.goal.models
import components.transaction.models

logger = structlog.get_logger(__name__)

# Create a single instance of DatabaseManager
db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    async with db_manager.get_db() as session:
        yield session


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI) -> AsyncIterator[None]:
    """Create the schema on startup and release the pool on shutdown."""
    if get_settings().AUTO_CREATE_TABLES:
        await db_manager.create_tables()
        logger.info("database_tables_ready")
    yield
    await db_manager.dispose()
