import json
import logging

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Any, Dict, Optional

# Sandbox price used outside production when SUBSCRIPTION_PRICE_ID is unset
DEFAULT_SANDBOX_PRICE_ID = "price_1SVczaFG6H6jDaisbaA2rmbz"


class Settings(BaseSettings):
    # Environment
    ENV: str = "development"

    # Front-end (CORS origin, checkout redirects)
    FRONTEND_URL: Optional[str] = None
    PUBLICATION_STATUS_URL: Optional[str] = None

    # Resend
    RESEND_API_KEY: Optional[str] = None
    RESEND_API_BASE: str = "https://api.resend.com"
    SENDER_EMAIL: Optional[str] = None

    # Stripe
    STRIPE_SECRET_KEY: Optional[str] = None
    SUBSCRIPTION_PRICE_ID: Optional[str] = None

    # Firebase (identity variant)
    IDENTITY_ENABLED: bool = False
    FIREBASE_SERVICE_ACCOUNT: Optional[str] = None

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return (self.ENV or "").lower() == "production"

    @property
    def subscription_price_id(self) -> Optional[str]:
        """Price for the subscription plan; production never falls back to the sandbox price."""
        if self.is_production:
            return self.SUBSCRIPTION_PRICE_ID
        return self.SUBSCRIPTION_PRICE_ID or DEFAULT_SANDBOX_PRICE_ID

    @property
    def checkout_success_url(self) -> str:
        return self.FRONTEND_URL or ""

    @property
    def checkout_cancel_url(self) -> str:
        return f"{self.FRONTEND_URL or ''}/pricing?error=true"

    @property
    def publication_status_url(self) -> str:
        return self.PUBLICATION_STATUS_URL or self.FRONTEND_URL or ""

    def firebase_credentials(self) -> Dict[str, Any]:
        """Parse the service account blob. Raises ValueError on malformed JSON."""
        try:
            data = json.loads(self.FIREBASE_SERVICE_ACCOUNT or "")
        except json.JSONDecodeError as e:
            raise ValueError(f"FIREBASE_SERVICE_ACCOUNT is not valid JSON: {e.msg}")
        if not isinstance(data, dict):
            raise ValueError("FIREBASE_SERVICE_ACCOUNT must be a JSON object")
        return data


def get_settings() -> Settings:
    """Read the current environment into a fresh Settings instance."""
    return Settings()


def validate_config(settings_obj: Settings, logger: Optional[logging.Logger] = None) -> bool:
    """Warn about optional configuration that changes runtime behavior.

    Secrets are not logged, only key names.
    """
    log = logger or logging.getLogger("paperdesk")
    if not settings_obj.is_production and not settings_obj.SUBSCRIPTION_PRICE_ID:
        log.warning("SUBSCRIPTION_PRICE_ID not set, using sandbox price")
    if not settings_obj.PUBLICATION_STATUS_URL:
        log.info("PUBLICATION_STATUS_URL not set, invitation links point to FRONTEND_URL")
    return True
