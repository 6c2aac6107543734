"""
Process-wide application context.

Built once at startup and stored on app.state; handlers receive it through
the get_context dependency instead of reaching for module-level clients.
Tests build their own context around fake providers.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from paperdesk.core.config import Settings
from paperdesk.features.billing.provider import BillingProvider
from paperdesk.features.billing.stripe_provider import StripeProvider
from paperdesk.features.identity.provider import IdentityProvider
from paperdesk.features.notifications.provider import EmailProvider
from paperdesk.features.notifications.resend_provider import ResendProvider


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    billing: BillingProvider
    email: EmailProvider
    identity: Optional[IdentityProvider] = None

    @property
    def identity_enabled(self) -> bool:
        return self.identity is not None


def build_context(settings: Settings) -> AppContext:
    """Construct the real provider clients from validated settings."""
    identity = None
    if settings.IDENTITY_ENABLED:
        from paperdesk.features.identity.firebase_provider import FirebaseIdentityProvider
        identity = FirebaseIdentityProvider(settings.firebase_credentials())

    return AppContext(
        settings=settings,
        billing=StripeProvider(settings.STRIPE_SECRET_KEY),
        email=ResendProvider(settings.RESEND_API_KEY, api_base=settings.RESEND_API_BASE),
        identity=identity,
    )


def get_context(request: Request) -> AppContext:
    return request.app.state.context
