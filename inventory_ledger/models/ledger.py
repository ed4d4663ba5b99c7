from datetime import datetime
from enum import Enum

from sqlalchemy import BigInteger, DateTime, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_ledger.db.session import Base
from inventory_ledger.models.catalog import utcnow, new_object_id


class LedgerKind(str, Enum):
    IMPORT = "import"
    EXPORT = "export"


class _LedgerColumns:
    """Columns shared by both ledger collections.

    ``product_id`` is a plain reference: deleting a catalog item leaves its
    ledger rows in place.
    """

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    product_id: Mapped[str] = mapped_column(String(24), nullable=False)
    product_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class ImportRecord(_LedgerColumns, Base):
    __tablename__ = "imports"
    __table_args__ = (Index("ix_imports_user_created", "user_id", "created_at"),)


class ExportRecord(_LedgerColumns, Base):
    __tablename__ = "exports"
    __table_args__ = (Index("ix_exports_user_created", "user_id", "created_at"),)


LEDGER_MODELS: dict[LedgerKind, type[ImportRecord] | type[ExportRecord]] = {
    LedgerKind.IMPORT: ImportRecord,
    LedgerKind.EXPORT: ExportRecord,
}
