"""
Pytest fixtures for the finance tracker tests.

Provides an in-memory SQLite database per test, an HTTP client bound to the
app with the database dependency overridden, and users/categories to work with.
"""

import os

os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("CREATE_TABLES", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import date
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from components.core.database import Base
from components.core.init_db import get_db
from components.core.security import create_access_token, get_password_hash
from components.category.models import Category
from components.category.repository import CategoryRepository
from components.expense.models import Expense, Importance
from components.user.models import User
from restapi.router import create_app

TEST_PASSWORD = "testpassword123"


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests share the test's database session."""
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


async def make_user(db_session: AsyncSession, username: str, email: str, **fields) -> User:
    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(TEST_PASSWORD),
        full_name=fields.pop("full_name", "Test User"),
        monthly_salary=fields.pop("monthly_salary", 0),
        monthly_budget=fields.pop("monthly_budget", 0),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def login_as(client: AsyncClient, user: User) -> None:
    """Put a valid session cookie for ``user`` on the client."""
    client.cookies.set("session", create_access_token({"sub": str(user.id)}))


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await make_user(db_session, "testuser", "test@example.com")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await make_user(db_session, "otheruser", "other@example.com")


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient, test_user: User) -> AsyncClient:
    """Client logged in as ``test_user``."""
    login_as(client, test_user)
    return client


@pytest_asyncio.fixture
async def categories(db_session: AsyncSession) -> List[Category]:
    """The default categories; the first one has id 1."""
    repo = CategoryRepository(db_session)
    await repo.seed_defaults()
    return await repo.get_all()


@pytest_asyncio.fixture
async def test_expense(db_session: AsyncSession, test_user: User, categories: List[Category]) -> Expense:
    expense = Expense(
        title="Test expense",
        amount=100.00,
        category_id=categories[0].id,
        date=date.today(),
        notes="Test expense",
        importance=Importance.NORMAL.value,
        user_id=test_user.id,
    )
    db_session.add(expense)
    await db_session.commit()
    await db_session.refresh(expense)
    return expense


@pytest.fixture
def today() -> date:
    return date.today()
