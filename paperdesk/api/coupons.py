"""
Coupon API routes.

- GET    /coupons: List coupons (single page of 100)
- POST   /coupons: Create domain coupon
- POST   /manual-override-coupons: Create single-use email coupon
- DELETE /coupons/{couponId}: Delete coupon
- POST   /coupons/bulk: Bulk import with per-row errors
- POST   /discounts: Discount preview for an email
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from paperdesk.api.schemas import RequesterEmail
from paperdesk.context import AppContext, get_context
from paperdesk.features.billing.provider import BillingProviderError
from paperdesk.features.coupons import service
from paperdesk.features.coupons.models import DomainCouponSpec, EmailCouponSpec
from paperdesk.features.coupons.resolver import DiscountPreview

logger = logging.getLogger("paperdesk")

router = APIRouter(tags=["coupons"])


class BulkCouponRequest(BaseModel):
    """Rows are validated one by one during the import, not here."""
    coupons: Any = None


class DiscountRequest(BaseModel):
    email: RequesterEmail


class DiscountResponse(BaseModel):
    discount: Optional[DiscountPreview]


class MessageResponse(BaseModel):
    message: str


@router.get("/coupons")
def get_coupons(ctx: AppContext = Depends(get_context)):
    try:
        coupons = service.list_coupons(ctx.billing)
    except BillingProviderError as e:
        logger.error("Error fetching coupons", exc_info=e)
        return JSONResponse(status_code=500, content=[])
    return [c.model_dump(exclude_unset=True) for c in coupons]


@router.post("/coupons", status_code=201)
def create_coupon(body: DomainCouponSpec, ctx: AppContext = Depends(get_context)):
    try:
        coupon = service.create_domain_coupon(ctx.billing, body)
    except BillingProviderError as e:
        logger.error("Error creating coupon", exc_info=e)
        raise HTTPException(status_code=500, detail=e.message)
    return coupon.model_dump(exclude_unset=True)


@router.post("/manual-override-coupons", status_code=201)
def create_manual_override_coupon(body: EmailCouponSpec, ctx: AppContext = Depends(get_context)):
    try:
        coupon = service.create_email_coupon(ctx.billing, body)
    except BillingProviderError as e:
        logger.error("Error creating manual override coupon", exc_info=e)
        raise HTTPException(status_code=500, detail=e.message)
    return coupon.model_dump(exclude_unset=True)


@router.delete("/coupons/{couponId}", response_model=MessageResponse)
def remove_coupon(couponId: str, ctx: AppContext = Depends(get_context)):
    try:
        service.delete_coupon(ctx.billing, couponId)
    except BillingProviderError as e:
        logger.error("Error deleting coupon", exc_info=e)
        raise HTTPException(status_code=500, detail=e.message)
    return {"message": "Coupon deleted successfully"}


@router.post("/coupons/bulk")
def bulk_create_coupons(body: BulkCouponRequest, ctx: AppContext = Depends(get_context)):
    """
    Create many coupons in one request.

    Each row carries "type": "domain" | "email" plus the fields of the
    matching single-create endpoint. Failed rows do not stop the import.

    Returns:
        {"created": int, "failed": int, "total": int,
         "errors": [{"row": int, "coupon": str, "error": str}]}  (errors only when any)

    Errors:
        400: coupons missing, not a list, or empty
    """
    result = service.bulk_import_coupons(ctx.billing, body.coupons)
    return result.as_response()


@router.post("/discounts", response_model=DiscountResponse)
def discounts(body: DiscountRequest, ctx: AppContext = Depends(get_context)):
    try:
        preview = service.discount_for_email(ctx.billing, body.email)
    except BillingProviderError as e:
        logger.error("Error resolving discount", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to resolve discount")
    return {"discount": preview}
