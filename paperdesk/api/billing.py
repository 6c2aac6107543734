"""
Billing API routes.

- POST /create-customer: Create Stripe customer for a signed-up user
- GET  /subscription-status/{customerId}: Latest subscription summary
- POST /create-checkout-session: Subscription checkout (discount applied)
- POST /create-customer-session: Pricing table client secret
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from paperdesk.api.schemas import NonEmptyStr, RequesterEmail
from paperdesk.context import AppContext, get_context
from paperdesk.features.billing import service
from paperdesk.features.billing.provider import BillingProviderError

logger = logging.getLogger("paperdesk")

router = APIRouter(tags=["billing"])


class CreateCustomerRequest(BaseModel):
    """Request to create a payments customer."""
    email: NonEmptyStr
    auth_id: Optional[str] = None


class CreateCustomerResponse(BaseModel):
    customerId: str


class SubscriptionStatusResponse(BaseModel):
    """Most recent subscription for a customer."""
    hasSubscription: bool
    status: Optional[str] = None
    currentPeriodEnd: Optional[int] = None  # Unix seconds
    planName: Optional[str] = None
    subscriptionId: Optional[str] = None


class CheckoutRequest(BaseModel):
    """Request to create checkout session."""
    email: RequesterEmail
    customerId: NonEmptyStr


class CheckoutResponse(BaseModel):
    """Response with checkout URL (null when the provider failed)."""
    sessionUrl: Optional[str]


class CustomerSessionRequest(BaseModel):
    customerId: NonEmptyStr


class CustomerSessionResponse(BaseModel):
    checkoutSessionSecret: str


@router.post("/create-customer", response_model=CreateCustomerResponse)
def create_customer(body: CreateCustomerRequest, ctx: AppContext = Depends(get_context)):
    try:
        customer_id = service.create_customer(ctx.billing, body.email, body.auth_id)
    except BillingProviderError as e:
        logger.error("Error creating customer", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to create customer")
    return {"customerId": customer_id}


@router.get(
    "/subscription-status/{customerId}",
    response_model=SubscriptionStatusResponse,
    response_model_exclude_unset=True,
)
def subscription_status(customerId: str, ctx: AppContext = Depends(get_context)):
    """
    Get a customer's subscription status.

    Returns:
        {"hasSubscription": false, "status": null, "currentPeriodEnd": null, "planName": null}
        or the full summary including subscriptionId.

    Errors:
        500: Stripe API error
    """
    try:
        return service.get_subscription_status(ctx.billing, customerId)
    except BillingProviderError as e:
        logger.error("Error fetching subscription status", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to fetch subscription status")


@router.post("/create-checkout-session", response_model=CheckoutResponse)
def create_checkout_session(body: CheckoutRequest, ctx: AppContext = Depends(get_context)):
    """
    Create Stripe checkout session for the subscription plan.

    Errors:
        400: Missing or malformed email / customerId
        500: Stripe API error, body {"sessionUrl": null}
    """
    try:
        url = service.start_checkout(ctx.billing, ctx.settings, body.email, body.customerId)
    except BillingProviderError as e:
        logger.error("Error creating checkout session", exc_info=e)
        return JSONResponse(status_code=500, content={"sessionUrl": None})
    return {"sessionUrl": url}


@router.post("/create-customer-session", response_model=CustomerSessionResponse)
def create_customer_session(body: CustomerSessionRequest, ctx: AppContext = Depends(get_context)):
    try:
        secret = service.start_customer_session(ctx.billing, body.customerId)
    except BillingProviderError as e:
        logger.error("Error creating customer session", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to create customer session")
    return {"checkoutSessionSecret": secret}
