"""
Cash Card API: Database Engine and Session Management
=====================================================

What:  Async SQLAlchemy engine, session factory, declarative base and
       schema bootstrap.
How:   `build_engine()` picks pool settings for the configured backend;
       the module-level `engine` is the default `main.create_app()` wires
       into the repository, the health check and the lifespan.
Who:   Used by the repository, the health check and the app lifespan.
When:  Engine is created at module import; sessions are opened per lookup.

Connection Pooling Strategy:
    In-memory SQLite:  StaticPool, one shared connection. Every session must
                       see the same database, and an in-memory database lives
                       only as long as its connection.
    File SQLite:       driver default pool.
    Server databases:  pool_size / max_overflow / pre_ping from settings,
                       connections recycled hourly.
"""

from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from cashcard.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine with pool settings suited to the backend.

    Args:
        database_url: Async SQLAlchemy URL (driver must be async).
        echo:         Log every SQL statement (noisy; DEBUG only).
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            return create_async_engine(
                url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=echo,
            )
        return create_async_engine(url, echo=echo)

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned rows stay readable after the session closes
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.database_url, echo=settings.log_level == "DEBUG")


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Its metadata is the static schema definition: `create_schema()` emits
    CREATE TABLE for every model registered here.
    """
    pass


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema(bind: Optional[AsyncEngine] = None) -> None:
    """
    What:  Creates every table registered on `Base.metadata` (IF NOT EXISTS).
    When:  Called once during application startup, and by test fixtures.
    """
    # Models register themselves with Base on import
    from cashcard.models import cash_card  # noqa: F401

    target = bind if bind is not None else engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
