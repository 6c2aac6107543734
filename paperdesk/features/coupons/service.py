"""
Coupon administration and discount lookup.

Thin orchestration over the billing provider:
- create domain / email (manual override) coupons
- list and delete coupons
- bulk import with per-row failure reporting
- discount preview for a requester email
"""
import logging
from typing import Any, List, Optional

from paperdesk.core.errors import ValidationError
from paperdesk.features.billing.provider import BillingProvider
from paperdesk.features.coupons.bulk import BulkImportResult, fold_bulk_import
from paperdesk.features.coupons.models import Coupon, DomainCouponSpec, EmailCouponSpec
from paperdesk.features.coupons.resolver import DiscountPreview, preview_discount

logger = logging.getLogger("paperdesk")

# Single page; coupons beyond this are not considered
COUPON_PAGE_LIMIT = 100
EMPTY_BULK_MESSAGE = "Please provide an array of coupons"


def list_coupons(provider: BillingProvider) -> List[Coupon]:
    return provider.list_coupons(limit=COUPON_PAGE_LIMIT)


def create_domain_coupon(provider: BillingProvider, spec: DomainCouponSpec) -> Coupon:
    coupon = provider.create_coupon(spec.to_params())
    logger.info("coupon.created", extra={"coupon_id": coupon.id, "kind": "domain", "domain": spec.domain})
    return coupon


def create_email_coupon(provider: BillingProvider, spec: EmailCouponSpec) -> Coupon:
    coupon = provider.create_coupon(spec.to_params())
    logger.info("coupon.created", extra={"coupon_id": coupon.id, "kind": "email"})
    return coupon


def delete_coupon(provider: BillingProvider, coupon_id: str) -> None:
    provider.delete_coupon(coupon_id)
    logger.info("coupon.deleted", extra={"coupon_id": coupon_id})


def bulk_import_coupons(provider: BillingProvider, rows: Any) -> BulkImportResult:
    """
    Create coupons row by row.

    Raises:
        ValidationError: If rows is not a non-empty list (nothing is created)
    """
    if not isinstance(rows, list) or not rows:
        raise ValidationError(EMPTY_BULK_MESSAGE)

    result = fold_bulk_import(rows, provider.create_coupon)
    logger.info(
        "coupon.bulk_import",
        extra={"created_count": result.created, "failed_count": result.failed, "row_count": result.total},
    )
    return result


def discount_for_email(provider: BillingProvider, email: str) -> Optional[DiscountPreview]:
    return preview_discount(list_coupons(provider), email)
