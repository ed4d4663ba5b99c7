# inventory_ledger/db/operations.py
"""Common async session helpers."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession


async def commit_async(session: AsyncSession) -> None:
    """Commit and rollback on failure."""
    try:
        await session.commit()
    except Exception:
        await rollback_async(session)
        raise


async def rollback_async(session: AsyncSession) -> None:
    """Rollback active transaction if needed."""
    if session.in_transaction():
        await session.rollback()


async def flush_async(session: AsyncSession) -> None:
    """Flush all pending changes in the session."""
    await session.flush()


async def refresh_async(session: AsyncSession, *instances: Any, attribute_names: list[str] | None = None) -> None:
    for instance in instances:
        if attribute_names:
            await session.refresh(instance, attribute_names=attribute_names)
        else:
            await session.refresh(instance)
