"""
Account removal routes, mounted only in the identity variant.

- POST /delete-user: Delete the Firebase user
- POST /delete-stripe-customer: Delete the Stripe customer
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from paperdesk.api.schemas import NonEmptyStr
from paperdesk.context import AppContext, get_context
from paperdesk.features.billing import service as billing_service
from paperdesk.features.billing.provider import BillingProviderError
from paperdesk.features.identity import service as identity_service
from paperdesk.features.identity.provider import IdentityProviderError

logger = logging.getLogger("paperdesk")

router = APIRouter(tags=["identity"])


class DeleteUserRequest(BaseModel):
    userUid: NonEmptyStr


class DeleteCustomerRequest(BaseModel):
    customerId: NonEmptyStr


@router.post("/delete-user")
def delete_user(body: DeleteUserRequest, ctx: AppContext = Depends(get_context)):
    try:
        identity_service.delete_user(ctx.identity, body.userUid)
    except IdentityProviderError as e:
        logger.error("Error deleting user", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to delete user")
    return {"message": "User deleted successfully"}


@router.post("/delete-stripe-customer")
def delete_stripe_customer(body: DeleteCustomerRequest, ctx: AppContext = Depends(get_context)):
    try:
        billing_service.delete_customer(ctx.billing, body.customerId)
    except BillingProviderError as e:
        logger.error("Error deleting stripe customer", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to delete stripe customer")
    return {"message": "Stripe customer deleted successfully"}
