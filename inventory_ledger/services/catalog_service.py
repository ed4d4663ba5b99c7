from __future__ import annotations

import re

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_ledger.core.logging import get_logger
from inventory_ledger.db.operations import commit_async, flush_async, refresh_async, rollback_async
from inventory_ledger.models.catalog import CatalogItem
from inventory_ledger.schemas.catalog import CatalogItemCreate, CatalogItemUpdate, split_loose_fields
from inventory_ledger.services.exceptions import ResourceNotFoundError, StoreFailureError

logger = get_logger(__name__)

_OBJECT_ID_RE = re.compile(r"^[0-9a-f]{24}$")

MODEL_NOT_FOUND = "Model not found"


def is_object_id(value: str) -> bool:
    return bool(_OBJECT_ID_RE.match(value or ""))


async def find_item(db: AsyncSession, item_id: str) -> CatalogItem | None:
    """Return the item or None; malformed ids simply match nothing."""
    if not is_object_id(item_id):
        return None
    return await db.get(CatalogItem, item_id)


async def list_items(db: AsyncSession) -> list[CatalogItem]:
    stmt = select(CatalogItem).order_by(CatalogItem.created_at.asc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_item(db: AsyncSession, item_id: str) -> CatalogItem:
    item = await find_item(db, item_id)
    if item is None:
        raise ResourceNotFoundError(MODEL_NOT_FOUND)
    return item


async def create_item(db: AsyncSession, payload: CatalogItemCreate) -> CatalogItem:
    columns, kept = split_loose_fields(payload.loose_fields())
    item = CatalogItem(
        **columns,
        available_quantity=payload.available_quantity,
        attributes={**payload.extra_fields(), **kept},
    )
    db.add(item)
    await flush_async(db)
    await commit_async(db)
    logger.info("Catalog item created", extra={"product_id": item.id})
    return item


async def update_item(db: AsyncSession, item_id: str, changes: CatalogItemUpdate) -> tuple[int, int]:
    """Merge ``changes`` into the item. Returns ``(matched, modified)``."""
    try:
        item = await find_item(db, item_id)
        if item is None:
            raise ResourceNotFoundError(MODEL_NOT_FOUND)

        loose = changes.loose_fields()
        columns, kept = split_loose_fields(loose)
        quantity = changes.quantity_change()
        if quantity is not None:
            columns["available_quantity"] = quantity

        modified = False
        for key, value in columns.items():
            if getattr(item, key) != value:
                setattr(item, key, value)
                modified = True

        merged = {**(item.attributes or {}), **changes.extra_fields()}
        for key in loose:
            if key in kept:
                merged[key] = kept[key]
            else:
                merged.pop(key, None)
        if merged != (item.attributes or {}):
            # Reassign so the JSON column is flagged dirty.
            item.attributes = merged
            modified = True

        if modified:
            await flush_async(db)
            await commit_async(db)
            await refresh_async(db, item)
        return 1, int(modified)
    except ResourceNotFoundError:
        raise
    except Exception as exc:
        await rollback_async(db)
        logger.exception("Failed to update catalog item", extra={"product_id": item_id})
        raise StoreFailureError("Failed to update model") from exc


async def delete_item(db: AsyncSession, item_id: str) -> int:
    """Delete the item. Ledger records that reference it are left untouched."""
    try:
        item = await find_item(db, item_id)
        if item is None:
            raise ResourceNotFoundError(MODEL_NOT_FOUND)
        await db.delete(item)
        await commit_async(db)
    except ResourceNotFoundError:
        raise
    except Exception as exc:
        await rollback_async(db)
        logger.exception("Failed to delete catalog item", extra={"product_id": item_id})
        raise StoreFailureError("Failed to delete model") from exc
    logger.info("Catalog item deleted", extra={"product_id": item_id})
    return 1
