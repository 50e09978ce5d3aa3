"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

# Set test environment before importing the package
os.environ["ENVIRONMENT"] = "test"

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from authstore.config import settings
from authstore.database import create_engine, create_tables, drop_tables
from authstore.schemas import AdapterAccount, AdapterUser, AdapterUserCreate
from authstore.services import PostgresAdapter


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine with all tables.

    The default test URL is an in-memory SQLite database, so every test
    starts from an empty schema.
    """
    engine = create_engine(settings.database_url_test)
    await create_tables(engine)

    yield engine

    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture
def adapter(engine: AsyncEngine) -> PostgresAdapter:
    """Adapter bound to the test engine."""
    return PostgresAdapter(engine)


@pytest.fixture
def expires() -> datetime:
    """A session/token expiry 30 days out, truncated to whole seconds."""
    return (datetime.now(UTC) + timedelta(days=30)).replace(microsecond=0)


@pytest.fixture
async def user(adapter: PostgresAdapter) -> AdapterUser:
    """Create a test user."""
    return await adapter.create_user(AdapterUserCreate(name="Test User", email="test@example.com"))


@pytest.fixture
async def github_account(adapter: PostgresAdapter, user: AdapterUser) -> AdapterAccount:
    """Link a GitHub account to the test user."""
    return await adapter.link_account(
        AdapterAccount(
            user_id=user.id,
            type="oauth",
            provider="github",
            provider_account_id="gh-1234",
            access_token="gho_access",
            expires_at=1_700_000_000,
            token_type="bearer",
            scope="read:user user:email",
        )
    )


async def count_rows(engine: AsyncEngine, model, *criteria) -> int:
    """Count rows of a table model, bypassing the adapter."""
    async with AsyncSession(engine) as session:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        result = await session.execute(stmt)
        return result.scalar_one()
