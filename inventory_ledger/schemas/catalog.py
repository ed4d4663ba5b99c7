from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Keys managed by the store; never accepted as free-form fields.
RESERVED_KEYS = frozenset({"_id", "id", "createdAt", "updatedAt", "created_at", "updated_at"})

# Known fields accepted with any JSON value. Values that do not fit the
# column are kept in ``attributes`` and returned unchanged.
LOOSE_FIELDS = ("name", "price")
NAME_MAX_LENGTH = 255


def _fits_column(key: str, value: Any) -> bool:
    if value is None:
        return True
    if key == "name":
        return isinstance(value, str) and len(value) <= NAME_MAX_LENGTH
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def split_loose_fields(values: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return ``(column_values, kept_as_sent)`` for the loose known fields."""
    columns: dict[str, Any] = {}
    kept: dict[str, Any] = {}
    for key, value in values.items():
        if _fits_column(key, value):
            columns[key] = value
        else:
            columns[key] = None
            kept[key] = value
    return columns, kept


class CatalogItemCreate(BaseModel):
    """A new catalog item. Unknown fields are kept and returned as sent."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Any = None
    price: Any = None
    available_quantity: int = Field(0, alias="availableQuantity")

    def loose_fields(self) -> dict[str, Any]:
        return {"name": self.name, "price": self.price}

    def extra_fields(self) -> dict[str, Any]:
        return {k: v for k, v in (self.model_extra or {}).items() if k not in RESERVED_KEYS}


class CatalogItemUpdate(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Any = None
    price: Any = None
    available_quantity: int | None = Field(None, alias="availableQuantity")

    @field_validator("available_quantity")
    @classmethod
    def _quantity_not_null(cls, value: int | None) -> int:
        # Only runs for values that were sent; an omitted field keeps the stock.
        if value is None:
            raise ValueError("availableQuantity cannot be null")
        return value

    def loose_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, include=set(LOOSE_FIELDS))

    def quantity_change(self) -> int | None:
        if "available_quantity" not in self.model_fields_set:
            return None
        return self.available_quantity

    def extra_fields(self) -> dict[str, Any]:
        return {k: v for k, v in (self.model_extra or {}).items() if k not in RESERVED_KEYS}


class CatalogItemRead(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: Any = None
    price: Any = None
    available_quantity: int = Field(..., alias="availableQuantity")
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")

    @classmethod
    def from_item(cls, item) -> "CatalogItemRead":
        extras = {k: v for k, v in (item.attributes or {}).items() if k not in RESERVED_KEYS}
        return cls.model_validate(
            {
                **extras,
                "_id": item.id,
                "name": extras.get("name", item.name),
                "price": extras.get("price", item.price),
                "availableQuantity": item.available_quantity,
                "createdAt": item.created_at,
                "updatedAt": item.updated_at,
            }
        )
