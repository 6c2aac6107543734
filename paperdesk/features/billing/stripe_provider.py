"""
Stripe billing provider implementation.

Implements BillingProvider protocol using the Stripe API.
"""
from typing import Any, Dict, List, Optional

import stripe

from paperdesk.features.billing.provider import (
    BillingProviderError,
    SubscriptionSummary,
)
from paperdesk.features.coupons.models import Coupon, CouponParams, coupon_from_provider


def _to_dict(obj: Any) -> Dict[str, Any]:
    """Plain-dict view of a StripeObject (recursive)."""
    if obj is None:
        return {}
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


def _field(obj: Any, name: str, default: Any = None) -> Any:
    return getattr(obj, name, default) if obj is not None else default


class StripeProvider:
    """Stripe implementation of BillingProvider protocol."""

    def __init__(self, secret_key: Optional[str]):
        """
        Initialize Stripe provider.

        Args:
            secret_key: Stripe secret key (STRIPE_SECRET_KEY)
        """
        if not secret_key:
            raise BillingProviderError("STRIPE_SECRET_KEY not configured")

        self.secret_key = secret_key
        stripe.api_key = self.secret_key

    def create_customer(self, email: str, auth_id: Optional[str] = None) -> str:
        """Create Stripe customer with the identity id in metadata."""
        try:
            customer = stripe.Customer.create(
                email=email,
                metadata={"user_auth_id": auth_id or ""},
            )
            return customer.id
        except stripe.StripeError as e:
            raise BillingProviderError(f"Stripe customer creation failed: {e.user_message or e}")

    def delete_customer(self, customer_id: str) -> None:
        try:
            stripe.Customer.delete(customer_id)
        except stripe.StripeError as e:
            raise BillingProviderError(f"Stripe customer deletion failed: {e.user_message or e}")

    def latest_subscription(self, customer_id: str) -> Optional[SubscriptionSummary]:
        """Most recent subscription of any status, or None."""
        try:
            subscriptions = stripe.Subscription.list(customer=customer_id, status="all", limit=1)
        except stripe.StripeError as e:
            raise BillingProviderError(f"Stripe subscription lookup failed: {e.user_message or e}")

        if not subscriptions.data:
            return None

        subscription = subscriptions.data[0]
        # "items" shadows dict.items on StripeObject, so subscript it
        items = _to_dict(subscription["items"]).get("data") or []
        first_item = items[0] if items else {}
        price_id = (first_item.get("price") or {}).get("id")

        # Newer API versions report the billing period per item
        period_end = first_item.get("current_period_end")
        if period_end is None:
            period_end = _to_dict(subscription).get("current_period_end")

        return SubscriptionSummary(
            subscription_id=subscription.id,
            status=subscription.status,
            current_period_end=period_end,
            price_id=price_id,
        )

    def product_name_for_price(self, price_id: str) -> Optional[str]:
        try:
            price = stripe.Price.retrieve(price_id)
            product_id = price.product if isinstance(price.product, str) else price.product.id
            product = stripe.Product.retrieve(product_id)
        except stripe.StripeError as e:
            raise BillingProviderError(f"Stripe plan lookup failed: {e.user_message or e}")
        return _field(product, "name")

    def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        coupon_id: Optional[str] = None,
    ) -> str:
        """Create Stripe checkout session."""
        params: Dict[str, Any] = {
            "payment_method_types": ["card"],
            "mode": "subscription",
            "line_items": [{"price": price_id, "quantity": 1}],
            "customer": customer_id,
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        if coupon_id:
            params["discounts"] = [{"coupon": coupon_id}]
        try:
            session = stripe.checkout.Session.create(**params)
            return session.url
        except stripe.StripeError as e:
            raise BillingProviderError(f"Stripe checkout session creation failed: {e.user_message or e}")

    def create_customer_session(self, customer_id: str) -> str:
        """Create Stripe customer session for the embedded pricing table."""
        try:
            session = stripe.CustomerSession.create(
                customer=customer_id,
                components={"pricing_table": {"enabled": True}},
            )
            return session.client_secret
        except stripe.StripeError as e:
            raise BillingProviderError(f"Stripe customer session creation failed: {e.user_message or e}")

    def list_coupons(self, limit: int = 100) -> List[Coupon]:
        try:
            coupons = stripe.Coupon.list(limit=limit)
        except stripe.StripeError as e:
            raise BillingProviderError(f"Stripe coupon listing failed: {e.user_message or e}")
        return [coupon_from_provider(_to_dict(c)) for c in coupons.data]

    def create_coupon(self, params: CouponParams) -> Coupon:
        payload = params.model_dump(exclude_none=True)
        try:
            coupon = stripe.Coupon.create(**payload)
        except stripe.StripeError as e:
            raise BillingProviderError(e.user_message or str(e))
        return coupon_from_provider(_to_dict(coupon))

    def delete_coupon(self, coupon_id: str) -> None:
        try:
            stripe.Coupon.delete(coupon_id)
        except stripe.StripeError as e:
            raise BillingProviderError(e.user_message or str(e))
