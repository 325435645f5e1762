"""Public Content Routes — read-only pricing and reviews for the site.

Invariants:
    - Only active rows are returned
    - Responses are publicly cacheable for 5 minutes
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import OperationFailedError
from app.infrastructure.database import get_db
from app.services.pricing_service import PricingService
from app.services.review_service import ReviewService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["content"])

CACHE_CONTROL = "public, max-age=300"


@router.get("/pricing")
async def list_pricing(response: Response, db: AsyncSession = Depends(get_db)):
    try:
        data = await PricingService(db).list_public()
    except SQLAlchemyError as e:
        logger.error(f"Pricing query failed: {e}")
        raise OperationFailedError("Failed to fetch pricing")
    response.headers["Cache-Control"] = CACHE_CONTROL
    return {"ok": True, "data": data, "count": len(data)}


@router.get("/reviews")
async def list_reviews(response: Response, db: AsyncSession = Depends(get_db)):
    try:
        data = await ReviewService(db).list_public()
    except SQLAlchemyError as e:
        logger.error(f"Reviews query failed: {e}")
        raise OperationFailedError("Failed to fetch reviews")
    response.headers["Cache-Control"] = CACHE_CONTROL
    return {"ok": True, "data": data, "count": len(data)}
