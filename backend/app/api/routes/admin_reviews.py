"""Admin Reviews Routes — gated CRUD over reviews."""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import FALLBACK_METHODS, parse_body, require_admin
from app.core.errors import MethodNotAllowedError
from app.infrastructure.database import get_db
from app.schemas.reviews import ReviewCreate, ReviewDelete, ReviewUpdate
from app.services.review_service import ReviewService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin/reviews", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def list_reviews_admin(db: AsyncSession = Depends(get_db)):
    data = await ReviewService(db).list_all()
    return {"ok": True, "data": data, "count": len(data)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(request: Request, db: AsyncSession = Depends(get_db)):
    body = await parse_body(request, ReviewCreate)
    review_id = await ReviewService(db).create(body)
    return {"ok": True, "message": "Review created successfully", "id": review_id}


@router.put("")
async def update_review(request: Request, db: AsyncSession = Depends(get_db)):
    body = await parse_body(request, ReviewUpdate)
    await ReviewService(db).update(body)
    return {"ok": True, "message": "Review updated successfully"}


@router.delete("")
async def delete_review(request: Request, db: AsyncSession = Depends(get_db)):
    body = await parse_body(request, ReviewDelete)
    await ReviewService(db).delete(body.id)
    return {"ok": True, "message": "Review deleted successfully"}


@router.api_route("", methods=FALLBACK_METHODS, include_in_schema=False)
async def reviews_method_not_allowed():
    raise MethodNotAllowedError()
