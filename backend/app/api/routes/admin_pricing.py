"""Admin Pricing Routes — gated CRUD over pricing_items.

Invariants:
    - Every method passes require_admin first (stealth 404 otherwise),
      including methods the resource does not support
    - Bodies are parsed only after the gate
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import FALLBACK_METHODS, parse_body, require_admin
from app.core.errors import MethodNotAllowedError
from app.infrastructure.database import get_db
from app.schemas.pricing import PricingItemCreate, PricingItemDelete, PricingItemUpdate
from app.services.pricing_service import PricingService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin/pricing", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("")
async def list_pricing_items(db: AsyncSession = Depends(get_db)):
    data = await PricingService(db).list_all()
    return {"ok": True, "data": data, "count": len(data)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pricing_item(request: Request, db: AsyncSession = Depends(get_db)):
    body = await parse_body(request, PricingItemCreate)
    item_id = await PricingService(db).create(body)
    return {"ok": True, "message": "Pricing item created successfully", "id": item_id}


@router.put("")
async def update_pricing_item(request: Request, db: AsyncSession = Depends(get_db)):
    body = await parse_body(request, PricingItemUpdate)
    await PricingService(db).update(body)
    return {"ok": True, "message": "Pricing item updated successfully"}


@router.delete("")
async def delete_pricing_item(request: Request, db: AsyncSession = Depends(get_db)):
    body = await parse_body(request, PricingItemDelete)
    await PricingService(db).delete(body.id)
    return {"ok": True, "message": "Pricing item deleted successfully"}


@router.api_route("", methods=FALLBACK_METHODS, include_in_schema=False)
async def pricing_method_not_allowed():
    raise MethodNotAllowedError()
