"""Pricing Schemas — admin request bodies for pricing_items CRUD.

Invariants:
    - Create requires non-empty title, description and price
    - Update/Delete require a numeric id
    - Update.changes() holds only the columns the caller actually set;
      absent or null fields are left alone, except price_robux where an
      explicit null clears the column
"""

from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from app.core.content_fields import (
    coerce_row_id, coerce_features, coerce_sort_order, coerce_text, optional_text,
)

_REQUIRED_MESSAGE = "Title, description, and price are required"
_ID_MESSAGE = "Pricing item ID is required"


def _require_id(data: Any) -> Any:
    row_id = coerce_row_id(data.get("id")) if isinstance(data, dict) else None
    if row_id is None:
        raise ValueError(_ID_MESSAGE)
    return {**data, "id": row_id}


class PricingItemCreate(BaseModel):
    """Body of POST /api/admin/pricing."""
    title: str
    description: str
    price: str
    price_robux: str | None = None
    features: list = []
    is_popular: bool = False
    is_active: bool = True
    sort_order: int = 0

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError(_REQUIRED_MESSAGE)
        for name in ("title", "description", "price"):
            if coerce_text(data.get(name)) in (None, ""):
                raise ValueError(_REQUIRED_MESSAGE)
        return data

    @field_validator("title", "description", "price", mode="before")
    @classmethod
    def trim_text(cls, v: Any) -> Any:
        return coerce_text(v)

    @field_validator("price_robux", mode="before")
    @classmethod
    def trim_optional(cls, v: Any) -> str | None:
        return optional_text(v)

    @field_validator("features", mode="before")
    @classmethod
    def features_list(cls, v: Any) -> list:
        return coerce_features(v)

    @field_validator("is_popular", mode="before")
    @classmethod
    def popular_default(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("is_active", mode="before")
    @classmethod
    def active_default(cls, v: Any) -> Any:
        return True if v is None else v

    @field_validator("sort_order", mode="before")
    @classmethod
    def sort_order_int(cls, v: Any) -> int:
        return coerce_sort_order(v)


class PricingItemUpdate(BaseModel):
    """Body of PUT /api/admin/pricing — partial patch keyed by id."""
    id: int
    title: str | None = None
    description: str | None = None
    price: str | None = None
    price_robux: str | None = None
    features: list | None = None
    is_popular: bool | None = None
    is_active: bool | None = None
    sort_order: int | None = None

    @model_validator(mode="before")
    @classmethod
    def check_id(cls, data: Any) -> Any:
        return _require_id(data)

    @field_validator("title", "description", "price", mode="before")
    @classmethod
    def trim_text(cls, v: Any) -> Any:
        return None if v is None else coerce_text(v)

    @field_validator("price_robux", mode="before")
    @classmethod
    def trim_optional(cls, v: Any) -> str | None:
        return optional_text(v)

    @field_validator("features", mode="before")
    @classmethod
    def features_list(cls, v: Any) -> list | None:
        return None if v is None else coerce_features(v)

    @field_validator("sort_order", mode="before")
    @classmethod
    def sort_order_int(cls, v: Any) -> int | None:
        return None if v is None else coerce_sort_order(v)

    def changes(self) -> dict[str, Any]:
        values = {
            name: getattr(self, name)
            for name in (
                "title", "description", "price", "features",
                "is_popular", "is_active", "sort_order",
            )
            if getattr(self, name) is not None
        }
        if "price_robux" in self.model_fields_set:
            values["price_robux"] = self.price_robux
        return values


class PricingItemDelete(BaseModel):
    """Body of DELETE /api/admin/pricing."""
    id: int

    @model_validator(mode="before")
    @classmethod
    def check_id(cls, data: Any) -> Any:
        return _require_id(data)
