from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_ledger.db.session_async import get_async_db
from inventory_ledger.models.ledger import LedgerKind
from inventory_ledger.schemas.common import ErrorResponse, InsertAck
from inventory_ledger.schemas.ledger import LedgerEntryCreate, LedgerRecordRead
from inventory_ledger.services import ledger_service


def _build_router(kind: LedgerKind, prefix: str, responses: dict) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])

    @router.post(
        "",
        response_model=InsertAck,
        status_code=status.HTTP_201_CREATED,
        responses=responses,
        name=f"create_{kind.value}",
    )
    async def create_entry(payload: LedgerEntryCreate, db: AsyncSession = Depends(get_async_db)):
        record = await ledger_service.record_transaction(db, kind, payload)
        return InsertAck(inserted_id=record.id)

    @router.get("", response_model=list[LedgerRecordRead], name=f"list_{kind.value}s")
    async def list_entries(
        user_id: str = Query(..., alias="userId", min_length=1),
        db: AsyncSession = Depends(get_async_db),
    ):
        records = await ledger_service.list_records(db, kind, user_id)
        return [LedgerRecordRead.from_record(r) for r in records]

    return router


imports_router = _build_router(
    LedgerKind.IMPORT,
    "/imports",
    {404: {"model": ErrorResponse}, 400: {"model": ErrorResponse, "description": "Insufficient stock"}},
)
exports_router = _build_router(
    LedgerKind.EXPORT,
    "/exports",
    {404: {"model": ErrorResponse}},
)
