# tests/test_ledger_service.py
import pytest
from sqlalchemy import BigInteger, func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_ledger.models.catalog import CatalogItem
from inventory_ledger.models.ledger import ExportRecord, ImportRecord, LedgerKind
from inventory_ledger.schemas.catalog import CatalogItemCreate
from inventory_ledger.schemas.ledger import LedgerEntryCreate
from inventory_ledger.services import catalog_service, ledger_service
from inventory_ledger.services.exceptions import InsufficientStockError, ResourceNotFoundError


# ---------- helpers ----------

async def _mk_item(db: AsyncSession, *, available: int = 10, price: float = 5) -> CatalogItem:
    payload = CatalogItemCreate(name="Widget", price=price, availableQuantity=available)
    return await catalog_service.create_item(db, payload)


def _entry(product_id: str, quantity: int, user_id: str = "u-1") -> LedgerEntryCreate:
    return LedgerEntryCreate(userId=user_id, productId=product_id, quantity=quantity)


async def _count(db: AsyncSession, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


# ---------- tests ----------

@pytest.mark.asyncio
async def test_import_updates_item_in_session(async_db_session: AsyncSession):
    item = await _mk_item(async_db_session)

    record = await ledger_service.record_transaction(async_db_session, LedgerKind.IMPORT, _entry(item.id, 4))
    assert isinstance(record, ImportRecord)
    assert record.quantity == 4
    assert record.product_name == "Widget"
    assert record.price == 5

    refreshed = await catalog_service.get_item(async_db_session, item.id)
    assert refreshed.available_quantity == 6


@pytest.mark.asyncio
async def test_export_has_no_upper_bound(async_db_session: AsyncSession):
    item = await _mk_item(async_db_session, available=0)

    record = await ledger_service.record_transaction(async_db_session, LedgerKind.EXPORT, _entry(item.id, 3_000_000_000))
    assert isinstance(record, ExportRecord)

    refreshed = await catalog_service.get_item(async_db_session, item.id)
    assert refreshed.available_quantity == 3_000_000_000


@pytest.mark.asyncio
async def test_insufficient_stock_raises_and_leaves_no_trace(async_db_session: AsyncSession):
    item = await _mk_item(async_db_session, available=2)
    item_id = item.id

    with pytest.raises(InsufficientStockError) as exc:
        await ledger_service.record_transaction(async_db_session, LedgerKind.IMPORT, _entry(item_id, 3))
    assert exc.value.detail == "Insufficient stock"

    assert await _count(async_db_session, ImportRecord) == 0
    refreshed = await catalog_service.get_item(async_db_session, item_id)
    assert refreshed.available_quantity == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", [LedgerKind.IMPORT, LedgerKind.EXPORT])
async def test_unknown_product_raises_not_found(async_db_session: AsyncSession, kind: LedgerKind):
    with pytest.raises(ResourceNotFoundError):
        await ledger_service.record_transaction(async_db_session, kind, _entry("b" * 24, 1))


@pytest.mark.asyncio
async def test_failed_ledger_insert_rolls_back_stock_change(
    async_db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
):
    item = await _mk_item(async_db_session, available=10)
    item_id = item.id

    async def _boom(*_args, **_kwargs):
        raise OperationalError("INSERT INTO imports", {}, Exception("disk full"))

    monkeypatch.setattr(ledger_service, "flush_async", _boom)

    with pytest.raises(OperationalError):
        await ledger_service.record_transaction(async_db_session, LedgerKind.IMPORT, _entry(item_id, 4))

    assert await _count(async_db_session, ImportRecord) == 0
    quantity = await async_db_session.scalar(
        select(CatalogItem.available_quantity).where(CatalogItem.id == item_id)
    )
    assert quantity == 10


@pytest.mark.asyncio
async def test_list_records_newest_first(async_db_session: AsyncSession):
    item = await _mk_item(async_db_session, available=10)
    await ledger_service.record_transaction(async_db_session, LedgerKind.IMPORT, _entry(item.id, 1))
    await ledger_service.record_transaction(async_db_session, LedgerKind.IMPORT, _entry(item.id, 2))
    await ledger_service.record_transaction(async_db_session, LedgerKind.IMPORT, _entry(item.id, 3, user_id="other"))

    rows = await ledger_service.list_records(async_db_session, LedgerKind.IMPORT, "u-1")
    assert [r.quantity for r in rows] == [2, 1]


def test_stock_columns_hold_64_bit_values():
    assert isinstance(CatalogItem.__table__.c.available_quantity.type, BigInteger)
    assert isinstance(ImportRecord.__table__.c.quantity.type, BigInteger)
    assert isinstance(ExportRecord.__table__.c.quantity.type, BigInteger)
