import secrets
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_ledger.db.session import Base


def new_object_id() -> str:
    """24-character hex identifier, the same shape as a document-store id."""
    return secrets.token_hex(12)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CatalogItem(Base):
    __tablename__ = "models"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    available_quantity: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    # Free-form fields sent by clients that have no column of their own.
    attributes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<CatalogItem id={self.id} name={self.name!r} available={self.available_quantity}>"
