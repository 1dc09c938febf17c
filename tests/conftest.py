"""Fixtures: in-memory SQLite database, repositories and an API client."""

import os

os.environ["DB_URL"] = "sqlite+aiosqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

import httpx
import pytest_asyncio

from components.core.database import DatabaseManager
from components.core.init_db import get_db
from components.goal.repository import GoalRepository
from components.transaction.repository import TransactionRepository
from components.user.repository import UserRepository
from components.user.schemas import UserCreate
from restapi.router import create_app
from tests.helpers import make_engine


@pytest_asyncio.fixture
async def engine():
    engine = await make_engine()
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_manager(engine):
    return DatabaseManager(engine=engine)


@pytest_asyncio.fixture
async def session(db_manager):
    async with db_manager.get_db() as session:
        yield session


@pytest_asyncio.fixture
async def user(session):
    return await UserRepository(session).create(
        UserCreate(email="ana@example.com", password="secret123")
    )


@pytest_asyncio.fixture
async def other_user(session):
    return await UserRepository(session).create(
        UserCreate(email="bruno@example.com", password="secret123")
    )


@pytest_asyncio.fixture
async def goals(session):
    return GoalRepository(session)


@pytest_asyncio.fixture
async def transactions(session):
    return TransactionRepository(session)


@pytest_asyncio.fixture
async def app(db_manager):
    app = create_app()

    async def override_get_db():
        async with db_manager.get_db() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def auth_client(client):
    response = await client.post(
        "/auth/register",
        json={"email": "ana@example.com", "password": "secret123"},
    )
    client.headers["Authorization"] = f"Bearer {response.json()['access_token']}"
    return client
