from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LedgerEntryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(..., gt=0)


class LedgerRecordRead(BaseModel):
    """An import or export record as stored in the ledger."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    user_id: str = Field(..., alias="userId")
    product_id: str = Field(..., alias="productId")
    product_name: str | None = Field(None, alias="productName")
    price: float | None = None
    quantity: int
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_record(cls, record) -> "LedgerRecordRead":
        return cls(
            id=record.id,
            user_id=record.user_id,
            product_id=record.product_id,
            product_name=record.product_name,
            price=record.price,
            quantity=record.quantity,
            created_at=record.created_at,
        )
