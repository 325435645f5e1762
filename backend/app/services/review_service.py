"""Review Service — reads and writes for reviews.

Invariants:
    - Public listing returns active rows only, camelCase keys
    - Ordering: sort_order ASC, created_at DESC (newest first within a slot)
    - update/delete raise ResourceNotFoundError when no row matched
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import RequestValidationFailed, ResourceNotFoundError
from app.models.review import Review
from app.schemas.reviews import ReviewCreate, ReviewUpdate

logger = logging.getLogger(__name__)

_ORDERING = (
    Review.sort_order.asc(),
    Review.created_at.desc(),
    Review.id.desc(),
)


def to_public(review: Review) -> dict:
    return {
        "id": review.id,
        "author": review.author,
        "rating": review.rating,
        "text": review.text,
        "imageUrl": review.image_url,
        "createdAt": review.created_at.isoformat(),
    }


def to_admin(review: Review) -> dict:
    row = {
        column.key: getattr(review, column.key)
        for column in Review.__table__.columns
    }
    row["created_at"] = review.created_at.isoformat()
    row["updated_at"] = review.updated_at.isoformat()
    return row


class ReviewService:
    """reviews persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_public(self) -> list[dict]:
        result = await self.db.execute(
            select(Review).where(Review.is_active.is_(True)).order_by(*_ORDERING),
        )
        return [to_public(r) for r in result.scalars().all()]

    async def list_all(self) -> list[dict]:
        result = await self.db.execute(select(Review).order_by(*_ORDERING))
        return [to_admin(r) for r in result.scalars().all()]

    async def create(self, body: ReviewCreate) -> int:
        review = Review(**body.model_dump())
        self.db.add(review)
        await self.db.commit()
        await self.db.refresh(review)
        logger.info(f"Review {review.id} created", extra={"resource": "reviews"})
        return review.id

    async def update(self, body: ReviewUpdate) -> None:
        changes = body.changes()
        if not changes:
            raise RequestValidationFailed("No fields to update")
        result = await self.db.execute(
            update(Review).where(Review.id == body.id).values(**changes),
        )
        await self.db.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("Review")
        logger.info(f"Review {body.id} updated", extra={"resource": "reviews"})

    async def delete(self, review_id: int) -> None:
        result = await self.db.execute(delete(Review).where(Review.id == review_id))
        await self.db.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("Review")
        logger.info(f"Review {review_id} deleted", extra={"resource": "reviews"})
