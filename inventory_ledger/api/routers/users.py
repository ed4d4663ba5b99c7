from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_ledger.db.session_async import get_async_db
from inventory_ledger.schemas.common import ErrorResponse
from inventory_ledger.schemas.user import UserRoleRead, UserRoleUpsert, UserRoleUpsertResult
from inventory_ledger.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserRoleUpsertResult,
    response_model_exclude_none=True,
    responses={201: {"model": UserRoleUpsertResult}, 500: {"model": ErrorResponse}},
)
async def upsert_user(
    payload: UserRoleUpsert,
    response: Response,
    db: AsyncSession = Depends(get_async_db),
):
    user, created = await user_service.upsert_role(db, payload)
    if created:
        response.status_code = status.HTTP_201_CREATED
        return UserRoleUpsertResult(message="User created", role=user.role, id=user.id)
    return UserRoleUpsertResult(message="User role updated", role=user.role)


@router.get(
    "/{user_id}",
    response_model=UserRoleRead,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_user_role(user_id: str = Path(...), db: AsyncSession = Depends(get_async_db)):
    role = await user_service.get_role(db, user_id)
    return UserRoleRead(role=role)
