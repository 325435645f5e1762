"""Review Schemas — admin request bodies for reviews CRUD.

Invariants:
    - Create requires non-empty author and text, and a rating
    - rating is floored and clamped to [1, 5]
    - image_url: explicit null or empty on update clears the column
"""

from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from app.core.content_fields import (
    coerce_row_id, clamp_rating, coerce_sort_order, coerce_text, optional_text,
)

_REQUIRED_MESSAGE = "Author, rating, and text are required"
_ID_MESSAGE = "Review ID is required"


def _require_id(data: Any) -> Any:
    row_id = coerce_row_id(data.get("id")) if isinstance(data, dict) else None
    if row_id is None:
        raise ValueError(_ID_MESSAGE)
    return {**data, "id": row_id}


class ReviewCreate(BaseModel):
    """Body of POST /api/admin/reviews."""
    author: str
    rating: int
    text: str
    image_url: str | None = None
    is_active: bool = True
    sort_order: int = 0

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("rating") is None:
            raise ValueError(_REQUIRED_MESSAGE)
        for name in ("author", "text"):
            if coerce_text(data.get(name)) in (None, ""):
                raise ValueError(_REQUIRED_MESSAGE)
        return data

    @field_validator("author", "text", mode="before")
    @classmethod
    def trim_text(cls, v: Any) -> Any:
        return coerce_text(v)

    @field_validator("rating", mode="before")
    @classmethod
    def rating_range(cls, v: Any) -> int:
        return clamp_rating(v)

    @field_validator("image_url", mode="before")
    @classmethod
    def trim_optional(cls, v: Any) -> str | None:
        return optional_text(v)

    @field_validator("is_active", mode="before")
    @classmethod
    def active_default(cls, v: Any) -> Any:
        return True if v is None else v

    @field_validator("sort_order", mode="before")
    @classmethod
    def sort_order_int(cls, v: Any) -> int:
        return coerce_sort_order(v)


class ReviewUpdate(BaseModel):
    """Body of PUT /api/admin/reviews — partial patch keyed by id."""
    id: int
    author: str | None = None
    rating: int | None = None
    text: str | None = None
    image_url: str | None = None
    is_active: bool | None = None
    sort_order: int | None = None

    @model_validator(mode="before")
    @classmethod
    def check_id(cls, data: Any) -> Any:
        return _require_id(data)

    @field_validator("author", "text", mode="before")
    @classmethod
    def trim_text(cls, v: Any) -> Any:
        return None if v is None else coerce_text(v)

    @field_validator("rating", mode="before")
    @classmethod
    def rating_range(cls, v: Any) -> int | None:
        return None if v is None else clamp_rating(v)

    @field_validator("image_url", mode="before")
    @classmethod
    def trim_optional(cls, v: Any) -> str | None:
        return optional_text(v)

    @field_validator("sort_order", mode="before")
    @classmethod
    def sort_order_int(cls, v: Any) -> int | None:
        return None if v is None else coerce_sort_order(v)

    def changes(self) -> dict[str, Any]:
        values = {
            name: getattr(self, name)
            for name in ("author", "rating", "text", "is_active", "sort_order")
            if getattr(self, name) is not None
        }
        if "image_url" in self.model_fields_set:
            values["image_url"] = self.image_url
        return values


class ReviewDelete(BaseModel):
    """Body of DELETE /api/admin/reviews."""
    id: int

    @model_validator(mode="before")
    @classmethod
    def check_id(cls, data: Any) -> Any:
        return _require_id(data)
