from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_ledger.core.logging import get_logger
from inventory_ledger.db.operations import commit_async, rollback_async
from inventory_ledger.models.catalog import utcnow
from inventory_ledger.models.user import UserRole
from inventory_ledger.schemas.user import UserRoleUpsert
from inventory_ledger.services.exceptions import ResourceNotFoundError, StoreFailureError

logger = get_logger(__name__)


async def _get_by_user_id(db: AsyncSession, user_id: str) -> UserRole | None:
    result = await db.execute(select(UserRole).where(UserRole.user_id == user_id))
    return result.scalar_one_or_none()


async def _update_role(db: AsyncSession, user: UserRole, role: str) -> UserRole:
    # Only the role moves; email and name keep their first values.
    user.role = role
    user.updated_at = utcnow()
    await commit_async(db)
    return user


async def upsert_role(db: AsyncSession, payload: UserRoleUpsert) -> tuple[UserRole, bool]:
    """Create the user or overwrite its role. Returns ``(user, created)``."""
    try:
        existing = await _get_by_user_id(db, payload.user_id)
        if existing is not None:
            return await _update_role(db, existing, payload.role), False

        now = utcnow()
        user = UserRole(
            user_id=payload.user_id,
            role=payload.role,
            email=payload.email,
            name=payload.name,
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        try:
            await commit_async(db)
        except IntegrityError:
            # Another request inserted the same user_id first.
            existing = await _get_by_user_id(db, payload.user_id)
            if existing is None:
                raise
            return await _update_role(db, existing, payload.role), False
        logger.info("User created", extra={"user_id": payload.user_id, "role": payload.role})
        return user, True
    except SQLAlchemyError as exc:
        await rollback_async(db)
        logger.exception("Failed to save user", extra={"user_id": payload.user_id})
        raise StoreFailureError("Failed to save user") from exc


async def get_role(db: AsyncSession, user_id: str) -> str:
    try:
        user = await _get_by_user_id(db, user_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch user", extra={"user_id": user_id})
        raise StoreFailureError("Failed to fetch user") from exc
    if user is None:
        raise ResourceNotFoundError("User not found")
    return user.role
