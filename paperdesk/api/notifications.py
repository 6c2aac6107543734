"""
Notification API routes.

- POST /send-email: Send co-author invitation emails in one batch
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from paperdesk.context import AppContext, get_context
from paperdesk.features.notifications.provider import EmailProviderError
from paperdesk.features.notifications.service import InvitationEmail, send_invitation_emails

logger = logging.getLogger("paperdesk")

router = APIRouter(tags=["notifications"])


class SendEmailRequest(BaseModel):
    emailObjects: Optional[List[InvitationEmail]] = None


@router.post("/send-email")
def send_email(body: SendEmailRequest, ctx: AppContext = Depends(get_context)):
    """
    Errors:
        400: emailObjects missing or empty
        500: email provider rejected the batch
    """
    try:
        send_invitation_emails(
            ctx.email,
            body.emailObjects or [],
            sender=ctx.settings.SENDER_EMAIL or "",
            status_url=ctx.settings.publication_status_url,
        )
    except EmailProviderError as e:
        logger.error("Error sending emails", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to send emails")
    return {"message": "Emails has been sent"}
