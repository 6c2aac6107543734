"""
Billing service orchestrator.

Coordinates, against the payments provider:
- Customer creation / deletion
- Subscription status lookup
- Checkout session creation (with the requester's discount, if any)
- Pricing table customer sessions

All Stripe-specific code is in stripe_provider.py.
"""
import logging
from typing import Any, Dict, Optional

from paperdesk.core.config import Settings
from paperdesk.features.billing.provider import BillingProvider, BillingProviderError
from paperdesk.features.coupons.resolver import resolve_discount
from paperdesk.features.coupons.service import list_coupons

logger = logging.getLogger("paperdesk")

UNKNOWN_PLAN_NAME = "Unknown Plan"


def create_customer(provider: BillingProvider, email: str, auth_id: Optional[str]) -> str:
    """
    Create a payments customer linked to the identity-provider user.

    Returns:
        Provider customer ID

    Raises:
        BillingProviderError: If customer creation fails
    """
    customer_id = provider.create_customer(email, auth_id)
    logger.info("billing.customer_created", extra={"customer_id": customer_id})
    return customer_id


def delete_customer(provider: BillingProvider, customer_id: str) -> None:
    provider.delete_customer(customer_id)
    logger.info("billing.customer_deleted", extra={"customer_id": customer_id})


def get_subscription_status(provider: BillingProvider, customer_id: str) -> Dict[str, Any]:
    """
    Report the customer's most recent subscription.

    Returns:
        {
            "hasSubscription": bool,
            "status": str | None,
            "currentPeriodEnd": int | None (Unix seconds),
            "planName": str | None,
            "subscriptionId": str (only when hasSubscription)
        }

    Raises:
        BillingProviderError: If any provider lookup fails
    """
    subscription = provider.latest_subscription(customer_id)
    if subscription is None:
        return {
            "hasSubscription": False,
            "status": None,
            "currentPeriodEnd": None,
            "planName": None,
        }

    plan_name = None
    if subscription.price_id:
        plan_name = provider.product_name_for_price(subscription.price_id)

    return {
        "hasSubscription": True,
        "status": subscription.status,
        "currentPeriodEnd": subscription.current_period_end,
        "planName": plan_name or UNKNOWN_PLAN_NAME,
        "subscriptionId": subscription.subscription_id,
    }


def start_checkout(
    provider: BillingProvider,
    settings: Settings,
    email: str,
    customer_id: str,
) -> str:
    """
    Create a subscription checkout session for the configured plan.

    The requester's discount (see coupons.resolver) is attached when one
    applies.

    Returns:
        Hosted checkout URL

    Raises:
        BillingProviderError: If coupon listing or session creation fails
    """
    price_id = settings.subscription_price_id
    if not price_id:
        raise BillingProviderError("No subscription price configured")

    discount = resolve_discount(list_coupons(provider), email)
    url = provider.create_checkout_session(
        customer_id=customer_id,
        price_id=price_id,
        success_url=settings.checkout_success_url,
        cancel_url=settings.checkout_cancel_url,
        coupon_id=discount.id if discount else None,
    )
    logger.info(
        "billing.checkout_created",
        extra={"customer_id": customer_id, "coupon_id": discount.id if discount else None},
    )
    return url


def start_customer_session(provider: BillingProvider, customer_id: str) -> str:
    """Create a pricing table session; returns its client secret."""
    return provider.create_customer_session(customer_id)
