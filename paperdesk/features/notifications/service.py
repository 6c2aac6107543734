"""
Co-author invitation emails.

Builds one fixed-subject plain-text message per invitation and hands the
whole batch to the email provider in a single call. Per-recipient delivery
results are logged, never reported back to the caller.
"""
from typing import List, Sequence

from pydantic import BaseModel

from paperdesk.core.errors import ValidationError
from paperdesk.core.logging import log_event
from paperdesk.features.notifications.provider import EmailMessage, EmailProvider

INVITATION_SUBJECT = "Research Paper Invitation"
MAX_BATCH_SIZE = 100
EMPTY_BATCH_MESSAGE = "Please provide list of emails to send email to"


class InvitationEmail(BaseModel):
    """One invitation as sent by the front-end."""
    email: str
    invitedBy: str
    paper: str
    contributions: str


def invitation_text(invitation: InvitationEmail, status_url: str) -> str:
    return (
        f"{invitation.invitedBy} added you as a co-author of the work \"{invitation.paper}\" "
        f"with the following contribution: {invitation.contributions}. "
        f"If you want to check the status of the publication, please follow this link {status_url}"
    )


def build_invitation_messages(
    invitations: Sequence[InvitationEmail],
    sender: str,
    status_url: str,
) -> List[EmailMessage]:
    return [
        EmailMessage(
            sender=sender,
            to=invitation.email,
            subject=INVITATION_SUBJECT,
            text=invitation_text(invitation, status_url),
        )
        for invitation in invitations
    ]


def send_invitation_emails(
    provider: EmailProvider,
    invitations: Sequence[InvitationEmail],
    *,
    sender: str,
    status_url: str,
) -> int:
    """
    Send one invitation email per entry.

    Returns:
        Number of messages submitted

    Raises:
        ValidationError: If the list is empty or larger than one provider batch
        EmailProviderError: If the provider call fails
    """
    if not invitations:
        raise ValidationError(EMPTY_BATCH_MESSAGE)
    if len(invitations) > MAX_BATCH_SIZE:
        raise ValidationError(f"At most {MAX_BATCH_SIZE} emails can be sent at once")

    messages = build_invitation_messages(invitations, sender, status_url)
    response = provider.send_batch(messages)
    log_event("info", "email.batch_sent", extra={"count": len(messages), "provider_response": response})
    return len(messages)
