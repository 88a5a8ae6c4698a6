"""
Cash Card API: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine: fresh in-memory SQLite engine with the cash_card table
    ├── empty_engine: in-memory SQLite engine without any table
    ├── session_factory: session factory over db_engine, seeded with (99, 123.45)
    ├── repository: SQLAlchemyCashCardRepository over session_factory
    ├── mock_db_session: AsyncMock session for driver-failure tests
    ├── mock_repository: AsyncMock standing in for CashCardRepository
    ├── client_for: builds a client for an app wired with any repository
    └── test_client: HTTPX AsyncClient for an app wired with `repository`
                     and `db_engine`
"""

import os

# Settings are read at import time: configure the environment first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from decimal import Decimal
from typing import Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine

from cashcard.database import build_engine, build_session_factory, create_schema
from cashcard.models.cash_card import CashCard
from cashcard.services import CashCardRepository, SQLAlchemyCashCardRepository

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"

SEED_CARD = {"id": 99, "amount": Decimal("123.45")}


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Provides a private in-memory database with the schema created.

    Every test gets its own engine, so rows never leak between tests.
    """
    engine = build_engine(IN_MEMORY_URL)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def empty_engine():
    """An in-memory database with NO schema, for missing-table scenarios."""
    engine = build_engine(IN_MEMORY_URL)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    """Session factory over `db_engine`, seeded with the card (99, 123.45)."""
    factory = build_session_factory(db_engine)
    async with factory() as session:
        session.add(CashCard(**SEED_CARD))
        await session.commit()
    return factory


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usable as `async with factory() as session` when a MagicMock factory
    returns it.

    Usage:
        mock_db_session.get.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.get = AsyncMock()
    session.close = AsyncMock()
    session.__aenter__.return_value = session
    return session


@pytest.fixture
def repository(session_factory):
    return SQLAlchemyCashCardRepository(session_factory)


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_repository():
    """
    A CashCardRepository stand-in.

    Usage:
        mock_repository.find_by_id.return_value = CashCard(id=7, amount=Decimal("1"))
    """
    repo = AsyncMock(spec=CashCardRepository)
    repo.find_by_id.return_value = None
    return repo


def make_client(
    repository: CashCardRepository, engine: Optional[AsyncEngine] = None
) -> AsyncClient:
    from cashcard.main import create_app

    transport = ASGITransport(app=create_app(engine=engine, repository=repository))
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def client_for():
    """
    Builds an HTTPX AsyncClient for an app wired with a given repository
    (and optionally the engine behind /health).

    Usage:
        async with client_for(mock_repository) as client:
            response = await client.get("/cashcards/7")
    """
    return make_client


@pytest_asyncio.fixture
async def test_client(repository, db_engine):
    """
    Provides an async HTTP client for the app backed by the seeded database.

    Usage:
        async def test_get(test_client):
            response = await test_client.get("/cashcards/99")
            assert response.status_code == 200
    """
    async with make_client(repository, engine=db_engine) as client:
        yield client
