"""Tests for coupon specs and expiry conversion."""
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from paperdesk.features.coupons.models import (
    Coupon,
    DomainCouponSpec,
    EmailCouponSpec,
    coupon_from_provider,
    to_redeem_by,
)


def test_redeem_by_from_date_is_midnight_utc():
    assert to_redeem_by("2030-01-01") == 1893456000
    assert to_redeem_by(date(2030, 1, 1)) == 1893456000


def test_redeem_by_honors_offsets():
    assert to_redeem_by("2030-01-01T00:00:00Z") == 1893456000
    assert to_redeem_by("2030-01-01T01:00:00+01:00") == 1893456000
    assert to_redeem_by(datetime(2030, 1, 1, tzinfo=timezone.utc)) == 1893456000


def test_redeem_by_absent():
    assert to_redeem_by(None) is None
    assert to_redeem_by("") is None


def test_redeem_by_rejects_garbage():
    with pytest.raises(ValueError, match="Invalid expiresAt"):
        to_redeem_by("next tuesday")


def test_domain_spec_builds_forever_coupon_with_seat_cap():
    spec = DomainCouponSpec.model_validate(
        {"name": "Uni", "domain": "uni.edu", "discountPercent": "15", "maxSeats": "5"}
    )
    params = spec.to_params()
    assert params.percent_off == 15
    assert params.duration == "forever"
    assert params.max_redemptions == 5
    assert params.redeem_by is None
    assert params.metadata == {"allowed_domain": "uni.edu"}


def test_email_spec_is_single_use():
    spec = EmailCouponSpec.model_validate(
        {"name": "Override", "email": "a@x.com", "discountPercent": 100, "expiresAt": "2030-01-01"}
    )
    params = spec.to_params()
    assert params.max_redemptions == 1
    assert params.redeem_by == 1893456000
    assert params.metadata == {"allowed_email": "a@x.com"}


@pytest.mark.parametrize("percent", [0, -5, 101, "abc"])
def test_discount_percent_must_be_in_range(percent):
    with pytest.raises(ValidationError):
        DomainCouponSpec.model_validate(
            {"name": "Uni", "domain": "uni.edu", "discountPercent": percent, "maxSeats": 1}
        )


def test_max_seats_must_be_positive():
    with pytest.raises(ValidationError):
        DomainCouponSpec.model_validate({"domain": "uni.edu", "discountPercent": 10, "maxSeats": 0})


def test_coupon_from_provider_keeps_provider_shape():
    raw = {
        "id": "Z4OV52SU",
        "object": "coupon",
        "amount_off": None,
        "livemode": False,
        "percent_off": 25,
        "duration": "forever",
        "max_redemptions": 5,
        "times_redeemed": 0,
        "valid": True,
        "metadata": {"allowed_domain": "x.com", "note": None},
    }
    coupon = coupon_from_provider(raw)
    assert coupon.allowed_domain == "x.com"
    assert coupon.metadata == {"allowed_domain": "x.com", "note": None}
    dumped = coupon.model_dump(exclude_unset=True)
    assert dumped == raw
    assert isinstance(dumped["percent_off"], int)
    assert "created" not in dumped


def test_coupon_from_provider_null_metadata():
    coupon = coupon_from_provider({"id": "c", "metadata": None})
    assert coupon.metadata == {}
    assert coupon.allowed_domain is None


def test_exhaustion():
    assert Coupon(id="c", max_redemptions=2, times_redeemed=2).is_exhausted
    assert not Coupon(id="c", max_redemptions=2, times_redeemed=1).is_exhausted
    assert not Coupon(id="c", max_redemptions=None, times_redeemed=99).is_exhausted
