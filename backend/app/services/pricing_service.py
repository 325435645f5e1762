"""Pricing Service — reads and writes for pricing_items.

Invariants:
    - Public listing returns active rows only, camelCase keys
    - Admin listing returns every row, column-named keys
    - Ordering: sort_order ASC, created_at ASC (id breaks ties)
    - update/delete raise ResourceNotFoundError when no row matched
    - Each write is a single statement; no cross-row transactions
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.content_fields import parse_features
from app.core.errors import RequestValidationFailed, ResourceNotFoundError
from app.models.pricing_item import PricingItem
from app.schemas.pricing import PricingItemCreate, PricingItemUpdate

logger = logging.getLogger(__name__)

_ORDERING = (
    PricingItem.sort_order.asc(),
    PricingItem.created_at.asc(),
    PricingItem.id.asc(),
)


def to_public(item: PricingItem) -> dict:
    return {
        "id": item.id,
        "title": item.title,
        "description": item.description,
        "price": item.price,
        "priceRobux": item.price_robux,
        "features": parse_features(item.features),
        "isPopular": bool(item.is_popular),
        "createdAt": item.created_at.isoformat(),
    }


def to_admin(item: PricingItem) -> dict:
    row = {
        column.key: getattr(item, column.key)
        for column in PricingItem.__table__.columns
    }
    row["features"] = parse_features(item.features)
    row["created_at"] = item.created_at.isoformat()
    row["updated_at"] = item.updated_at.isoformat()
    return row


class PricingService:
    """pricing_items persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_public(self) -> list[dict]:
        result = await self.db.execute(
            select(PricingItem)
            .where(PricingItem.is_active.is_(True))
            .order_by(*_ORDERING),
        )
        return [to_public(item) for item in result.scalars().all()]

    async def list_all(self) -> list[dict]:
        result = await self.db.execute(select(PricingItem).order_by(*_ORDERING))
        return [to_admin(item) for item in result.scalars().all()]

    async def create(self, body: PricingItemCreate) -> int:
        item = PricingItem(**body.model_dump())
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        logger.info(f"Pricing item {item.id} created", extra={"resource": "pricing"})
        return item.id

    async def update(self, body: PricingItemUpdate) -> None:
        changes = body.changes()
        if not changes:
            raise RequestValidationFailed("No fields to update")
        result = await self.db.execute(
            update(PricingItem)
            .where(PricingItem.id == body.id)
            .values(**changes),
        )
        await self.db.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("Pricing item")
        logger.info(f"Pricing item {body.id} updated", extra={"resource": "pricing"})

    async def delete(self, item_id: int) -> None:
        result = await self.db.execute(
            delete(PricingItem).where(PricingItem.id == item_id),
        )
        await self.db.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("Pricing item")
        logger.info(f"Pricing item {item_id} deleted", extra={"resource": "pricing"})
