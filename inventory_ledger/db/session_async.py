# inventory_ledger/db/session_async.py
"""Async SQLAlchemy session utilities."""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from inventory_ledger.core.config import settings
from inventory_ledger.db.session import Base

T = TypeVar("T")


async_engine: AsyncEngine = create_async_engine(
    settings.ASYNC_DATABASE_URL,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an AsyncSession."""
    async with AsyncSessionLocal() as session:
        yield session


async def run_in_transaction(
    session: AsyncSession,
    operation: Callable[[AsyncSession], Awaitable[T]],
) -> T:
    """Run ``operation`` and commit, or roll back everything it wrote."""
    try:
        result = await operation(session)
        await session.commit()
        return result
    except Exception:
        if session.in_transaction():
            await session.rollback()
        raise


async def ping(session: AsyncSession) -> None:
    await session.execute(text("SELECT 1"))


async def create_all() -> None:
    """Create missing tables for every registered model."""
    async with async_engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
