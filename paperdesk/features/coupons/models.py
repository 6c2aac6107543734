"""
Coupon models.

Coupons live in Stripe; these models are the provider-neutral view the rest
of the service works with. A coupon created here is either a domain coupon
(shared by every address at one email domain, capped by max_redemptions) or
an email coupon (one address, single redemption), never both.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALLOWED_DOMAIN_KEY = "allowed_domain"
ALLOWED_EMAIL_KEY = "allowed_email"


class Coupon(BaseModel):
    """A discount coupon as reported by the payments provider."""
    model_config = ConfigDict(extra="allow")

    id: str
    object: str = "coupon"
    name: Optional[str] = None
    percent_off: Optional[Union[int, float]] = None
    duration: Optional[str] = None
    max_redemptions: Optional[int] = None
    times_redeemed: int = 0
    redeem_by: Optional[int] = None
    valid: bool = True
    created: Optional[int] = None
    metadata: Dict[str, Optional[str]] = Field(default_factory=dict)

    @property
    def allowed_domain(self) -> Optional[str]:
        return self.metadata.get(ALLOWED_DOMAIN_KEY)

    @property
    def allowed_email(self) -> Optional[str]:
        return self.metadata.get(ALLOWED_EMAIL_KEY)

    @property
    def is_exhausted(self) -> bool:
        return self.max_redemptions is not None and self.times_redeemed >= self.max_redemptions

    @property
    def is_redeemable(self) -> bool:
        return self.valid and not self.is_exhausted


class CouponParams(BaseModel):
    """Creation parameters sent to the payments provider."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    percent_off: float
    duration: str = "forever"
    max_redemptions: int
    redeem_by: Optional[int] = None
    metadata: Dict[str, str]


def to_redeem_by(expires_at: Union[str, date, datetime, None]) -> Optional[int]:
    """
    Convert an expiry into a Unix-seconds redeem-by deadline.

    A bare date ("2026-12-31") is midnight UTC of that day; datetimes without
    an offset are taken as UTC. None or "" means no deadline.

    Raises:
        ValueError: If the string is not an ISO 8601 date or datetime
    """
    if expires_at is None or expires_at == "":
        return None
    if isinstance(expires_at, str):
        text = expires_at.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid expiresAt date: {expires_at}")
    elif isinstance(expires_at, datetime):
        parsed = expires_at
    else:
        parsed = datetime.combine(expires_at, time.min)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


class _CouponSpecBase(BaseModel):
    """Fields shared by both coupon kinds, named as the admin front-end sends them."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Optional[str] = None
    discount_percent: float = Field(alias="discountPercent", gt=0, le=100)
    expires_at: Optional[str] = Field(default=None, alias="expiresAt")

    @field_validator("expires_at")
    @classmethod
    def _check_expiry(cls, value: Optional[str]) -> Optional[str]:
        to_redeem_by(value)
        return value

    def redeem_by(self) -> Optional[int]:
        return to_redeem_by(self.expires_at)


class DomainCouponSpec(_CouponSpecBase):
    """A coupon shared by every requester at one email domain."""
    domain: str = Field(min_length=1)
    max_seats: int = Field(alias="maxSeats", ge=1)

    def to_params(self) -> CouponParams:
        return CouponParams(
            name=self.name,
            percent_off=self.discount_percent,
            max_redemptions=self.max_seats,
            redeem_by=self.redeem_by(),
            metadata={ALLOWED_DOMAIN_KEY: self.domain},
        )


class EmailCouponSpec(_CouponSpecBase):
    """A single-use coupon for one email address (manual override)."""
    email: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value

    def to_params(self) -> CouponParams:
        return CouponParams(
            name=self.name,
            percent_off=self.discount_percent,
            max_redemptions=1,
            redeem_by=self.redeem_by(),
            metadata={ALLOWED_EMAIL_KEY: self.email},
        )


def coupon_from_provider(data: Dict[str, Any]) -> Coupon:
    """Build a Coupon from a provider payload; fields the provider omitted stay unset."""
    if data.get("metadata") is None and "metadata" in data:
        data = {**data, "metadata": {}}
    return Coupon.model_validate(data)
