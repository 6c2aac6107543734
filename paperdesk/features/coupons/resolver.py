"""
Discount resolution.

Given a requester's email and the coupons currently defined, pick the one
coupon that applies:

1. an email coupon whose allowed_email equals the address,
2. otherwise a domain coupon whose allowed_domain equals the address's domain,
3. otherwise nothing.

Within each tier the first match in provider order wins. Coupons that are
exhausted (times_redeemed reached max_redemptions) or no longer valid are
skipped, so resolution falls through to the next candidate.
"""
from typing import Iterable, Optional

from pydantic import BaseModel

from paperdesk.features.coupons.models import Coupon


class DiscountPreview(BaseModel):
    """Discount shown to the front-end before checkout."""
    discount: float  # fraction in [0, 1]
    domain: Optional[str] = None


def email_domain(email: str) -> str:
    """Return everything after the first '@'.

    Raises:
        ValueError: If the address has no '@'
    """
    _, sep, domain = email.partition("@")
    if not sep:
        raise ValueError(f"Invalid email address: {email!r}")
    return domain


def resolve_discount(coupons: Iterable[Coupon], email: str) -> Optional[Coupon]:
    domain = email_domain(email)
    candidates = [c for c in coupons if c.is_redeemable]

    for coupon in candidates:
        if coupon.allowed_email == email:
            return coupon

    for coupon in candidates:
        if coupon.allowed_domain == domain:
            return coupon

    return None


def preview_discount(coupons: Iterable[Coupon], email: str) -> Optional[DiscountPreview]:
    coupon = resolve_discount(coupons, email)
    if coupon is None:
        return None
    return DiscountPreview(
        discount=(coupon.percent_off or 0) / 100,
        domain=coupon.allowed_domain,
    )
