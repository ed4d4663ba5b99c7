"""Import/export ledger.

An import takes units out of a catalog item, an export puts them back. The
stock change and the ledger row are written in a single transaction, and the
decrement is a conditional ``UPDATE`` so two concurrent imports cannot both
spend the same units.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_ledger.core.logging import get_logger
from inventory_ledger.core.metrics import record_ledger_transaction
from inventory_ledger.db.operations import flush_async, refresh_async
from inventory_ledger.db.session_async import run_in_transaction
from inventory_ledger.models.catalog import CatalogItem, utcnow
from inventory_ledger.models.ledger import LEDGER_MODELS, LedgerKind
from inventory_ledger.schemas.ledger import LedgerEntryCreate
from inventory_ledger.services.catalog_service import find_item
from inventory_ledger.services.exceptions import InsufficientStockError, ResourceNotFoundError

logger = get_logger(__name__)

PRODUCT_NOT_FOUND = "Product not found"
INSUFFICIENT_STOCK = "Insufficient stock"


async def _adjust_stock(db: AsyncSession, item_id: str, kind: LedgerKind, quantity: int) -> bool:
    """Apply the stock change atomically. False when no row qualified."""
    stmt = update(CatalogItem).where(CatalogItem.id == item_id)
    if kind is LedgerKind.IMPORT:
        stmt = stmt.where(CatalogItem.available_quantity >= quantity).values(
            available_quantity=CatalogItem.available_quantity - quantity,
            updated_at=utcnow(),
        )
    else:
        stmt = stmt.values(
            available_quantity=CatalogItem.available_quantity + quantity,
            updated_at=utcnow(),
        )
    result = await db.execute(stmt.execution_options(synchronize_session=False))
    return result.rowcount == 1


async def _record(db: AsyncSession, kind: LedgerKind, payload: LedgerEntryCreate):
    item = await find_item(db, payload.product_id)
    if item is None:
        raise ResourceNotFoundError(PRODUCT_NOT_FOUND)

    # Snapshot taken before the update; later catalog edits do not touch it.
    product_name, price = item.name, item.price

    if not await _adjust_stock(db, item.id, kind, payload.quantity):
        still_there = await db.scalar(select(CatalogItem.id).where(CatalogItem.id == item.id))
        if still_there is None:
            raise ResourceNotFoundError(PRODUCT_NOT_FOUND)
        raise InsufficientStockError(INSUFFICIENT_STOCK)
    await refresh_async(db, item, attribute_names=["available_quantity", "updated_at"])

    record = LEDGER_MODELS[kind](
        user_id=payload.user_id,
        product_id=item.id,
        product_name=product_name,
        price=price,
        quantity=payload.quantity,
    )
    db.add(record)
    await flush_async(db)
    return record


async def record_transaction(db: AsyncSession, kind: LedgerKind, payload: LedgerEntryCreate):
    log_extra = {
        "kind": kind.value,
        "user_id": payload.user_id,
        "product_id": payload.product_id,
        "quantity": payload.quantity,
    }
    try:
        record = await run_in_transaction(db, lambda session: _record(session, kind, payload))
    except InsufficientStockError:
        record_ledger_transaction(kind.value, "insufficient_stock")
        logger.warning("Ledger transaction rejected: insufficient stock", extra=log_extra)
        raise
    except ResourceNotFoundError:
        record_ledger_transaction(kind.value, "not_found")
        raise

    record_ledger_transaction(kind.value, "recorded")
    logger.info("Ledger transaction recorded", extra={**log_extra, "record_id": record.id})
    return record


async def list_records(db: AsyncSession, kind: LedgerKind, user_id: str) -> list:
    model = LEDGER_MODELS[kind]
    stmt = (
        select(model)
        .where(model.user_id == user_id)
        .order_by(model.created_at.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())
