"""Shared helpers for the test suite."""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from components.core.database import Base
from components.goal.models import Goal
from components.transaction.models import Transaction
import components.user.models  # noqa: F401

CENTS = Decimal("0.01")


async def make_engine() -> AsyncEngine:
    """In-memory SQLite shared by every connection of the engine."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


async def linked_sum(session: AsyncSession, goal_id: int) -> Decimal:
    result = await session.execute(
        select(func.coalesce(func.sum(Transaction.value), 0)).where(Transaction.goal_id == goal_id)
    )
    return Decimal(str(result.scalar())).quantize(CENTS)


async def goal_current(session: AsyncSession, goal_id: int) -> Decimal:
    """Read current straight from the database."""
    result = await session.execute(select(Goal.current).where(Goal.id == goal_id))
    return Decimal(str(result.scalar_one())).quantize(CENTS)


async def assert_ledger_consistent(session: AsyncSession, user_id: int) -> None:
    """Every goal's current equals the sum of its linked transaction values."""
    result = await session.execute(select(Goal.id).where(Goal.user_id == user_id))
    for goal_id in result.scalars().all():
        assert await goal_current(session, goal_id) == await linked_sum(session, goal_id)
