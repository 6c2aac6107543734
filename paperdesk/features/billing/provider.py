"""
Billing provider protocol.

Defines the interface the service needs from the payments provider (Stripe).
Services depend on this protocol only, so tests can substitute an in-memory
fake and the Stripe SDK stays confined to stripe_provider.py.
"""
from typing import List, Optional, Protocol
from dataclasses import dataclass

from paperdesk.core.errors import ProviderError
from paperdesk.features.coupons.models import Coupon, CouponParams


@dataclass
class SubscriptionSummary:
    """The fields of a provider subscription this service reports on."""
    subscription_id: str
    status: str  # active, past_due, canceled, incomplete, ...
    current_period_end: Optional[int]  # Unix seconds
    price_id: Optional[str]


class BillingProvider(Protocol):
    """
    Protocol for billing providers.

    Implementations must handle:
    - Customer creation and deletion
    - Subscription lookup and plan naming
    - Checkout and customer (pricing table) session creation
    - Coupon creation, listing and deletion
    """

    def create_customer(self, email: str, auth_id: Optional[str] = None) -> str:
        """
        Create a billing customer tagged with the identity-provider user id.

        Returns:
            Provider customer ID (e.g., Stripe customer ID)

        Raises:
            BillingProviderError: If customer creation fails
        """
        ...

    def delete_customer(self, customer_id: str) -> None:
        """Delete a billing customer. Raises BillingProviderError."""
        ...

    def latest_subscription(self, customer_id: str) -> Optional[SubscriptionSummary]:
        """
        Fetch the most recent subscription of any status for a customer.

        Returns:
            SubscriptionSummary, or None if the customer never subscribed

        Raises:
            BillingProviderError: If the lookup fails
        """
        ...

    def product_name_for_price(self, price_id: str) -> Optional[str]:
        """Resolve a price to its parent product's display name. Raises BillingProviderError."""
        ...

    def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        coupon_id: Optional[str] = None,
    ) -> str:
        """
        Create a subscription checkout session with a single line item.

        Args:
            customer_id: Provider customer ID
            price_id: Provider price ID (e.g., Stripe price ID)
            success_url: URL to redirect on success
            cancel_url: URL to redirect on cancellation
            coupon_id: Coupon to attach as the session's only discount

        Returns:
            Checkout session URL

        Raises:
            BillingProviderError: If session creation fails
        """
        ...

    def create_customer_session(self, customer_id: str) -> str:
        """
        Create an embeddable session scoped to the pricing table component.

        Returns:
            The session's client secret

        Raises:
            BillingProviderError: If session creation fails
        """
        ...

    def list_coupons(self, limit: int = 100) -> List[Coupon]:
        """Return a single page of coupons in provider order. Raises BillingProviderError."""
        ...

    def create_coupon(self, params: CouponParams) -> Coupon:
        """Create a coupon. Raises BillingProviderError."""
        ...

    def delete_coupon(self, coupon_id: str) -> None:
        """Delete a coupon. Raises BillingProviderError, also for unknown ids."""
        ...


class BillingProviderError(ProviderError):
    """Base exception for billing provider errors."""
    code = "billing_provider_error"
