"""Script to seed demo data into the database."""

from datetime import date, timedelta
import asyncio

import structlog

from components.core.config import get_settings
from components.core.init_db import db_manager, get_db
from components.core.logging import configure_logging
from components.goal.repository import GoalRepository
from components.goal.schemas import GoalCreate
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import TransactionCreate
from components.user.repository import UserRepository
from components.user.schemas import UserCreate

logger = structlog.get_logger(__name__)

DEMO_EMAIL = "demo@example.com"


async def seed_data():
    """Seed a demo user with goals and transactions."""
    await db_manager.create_tables()

    async for db in get_db():
        users = UserRepository(db)
        if await users.exists(DEMO_EMAIL):
            logger.info("seed_skipped", email=DEMO_EMAIL)
            break

        user = await users.create(UserCreate(email=DEMO_EMAIL, password="password123"))

        goal_repo = GoalRepository(db)
        goals = [
            await goal_repo.create(user.id, GoalCreate(name="Viagem", target=10000, color="#FF6600")),
            await goal_repo.create(user.id, GoalCreate(name="Reserva", target=30000, color="#FF8533")),
            await goal_repo.create(user.id, GoalCreate(name="Carro Novo", target=50000, color="#FFB380")),
        ]

        today = date.today()
        transactions = [
            TransactionCreate(description="Salário", category="Receita", value=8500, date=today.replace(day=1)),
            TransactionCreate(description="Supermercado Extra", category="Alimentação", value=-245.80, date=today),
            TransactionCreate(description="Uber", category="Transporte", value=-32.50, date=today - timedelta(days=1)),
            TransactionCreate(description="Netflix", category="Lazer", value=-55.90, date=today - timedelta(days=2)),
            TransactionCreate(description="Farmácia", category="Saúde", value=-89.90, date=today - timedelta(days=3)),
            TransactionCreate(description="Aporte viagem", category="Investimento", value=4500, date=today, goal_id=goals[0].id),
            TransactionCreate(description="Aporte reserva", category="Investimento", value=15000, date=today, goal_id=goals[1].id),
            TransactionCreate(description="Aporte carro", category="Investimento", value=8000, date=today, goal_id=goals[2].id),
        ]
        transaction_repo = TransactionRepository(db)
        for transaction in transactions:
            await transaction_repo.create(user.id, transaction)

        logger.info("seed_finished", user_id=user.id, goals=len(goals), transactions=len(transactions))
        break


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, debug=settings.DEBUG)
    asyncio.run(seed_data())
