from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_ledger.db.session_async import get_async_db
from inventory_ledger.schemas.catalog import CatalogItemCreate, CatalogItemRead, CatalogItemUpdate
from inventory_ledger.schemas.common import DeleteAck, ErrorResponse, InsertAck, UpdateAck
from inventory_ledger.services import catalog_service

router = APIRouter(prefix="/models", tags=["models"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("", response_model=list[CatalogItemRead], summary="List catalog items")
async def list_models(db: AsyncSession = Depends(get_async_db)):
    items = await catalog_service.list_items(db)
    return [CatalogItemRead.from_item(item) for item in items]


@router.get("/{model_id}", response_model=CatalogItemRead, responses=_NOT_FOUND)
async def get_model(model_id: str = Path(...), db: AsyncSession = Depends(get_async_db)):
    item = await catalog_service.get_item(db, model_id)
    return CatalogItemRead.from_item(item)


@router.post("", response_model=InsertAck, status_code=status.HTTP_201_CREATED)
async def create_model(payload: CatalogItemCreate, db: AsyncSession = Depends(get_async_db)):
    item = await catalog_service.create_item(db, payload)
    return InsertAck(inserted_id=item.id)


@router.put(
    "/{model_id}",
    response_model=UpdateAck,
    responses={**_NOT_FOUND, 500: {"model": ErrorResponse}},
)
async def update_model(
    model_id: str = Path(...),
    payload: CatalogItemUpdate = ...,
    db: AsyncSession = Depends(get_async_db),
):
    matched, modified = await catalog_service.update_item(db, model_id, payload)
    return UpdateAck(matched_count=matched, modified_count=modified)


@router.delete(
    "/{model_id}",
    response_model=DeleteAck,
    responses={**_NOT_FOUND, 500: {"model": ErrorResponse}},
)
async def delete_model(model_id: str = Path(...), db: AsyncSession = Depends(get_async_db)):
    deleted = await catalog_service.delete_item(db, model_id)
    return DeleteAck(deleted_count=deleted)
