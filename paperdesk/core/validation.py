"""
Environment validation utilities.

Ensures the backend fails fast on misconfiguration while
remaining bypassable for tests via SKIP_ENV_VALIDATION.
"""

import os
from typing import Iterable, List
from urllib.parse import urlparse

from paperdesk.core.config import Settings


class EnvValidationError(RuntimeError):
    """Raised when environment validation fails."""


REQUIRED_KEYS = [
    "FRONTEND_URL",
    "RESEND_API_KEY",
    "STRIPE_SECRET_KEY",
    "SENDER_EMAIL",
]

IDENTITY_REQUIRED_KEYS = [
    "FIREBASE_SERVICE_ACCOUNT",
]


def _is_valid_url(url: str) -> bool:
    """Basic URL validation using urlparse."""
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


def _missing(vars_required: Iterable[str], source: object) -> List[str]:
    return [var for var in vars_required if not getattr(source, var, None)]


def validate_env(settings_obj: Settings) -> bool:
    """Validate environment configuration.

    Args:
        settings_obj: Settings to validate

    Returns:
        True if validation passes.

    Raises:
        EnvValidationError when a rule is violated.
    """
    if os.getenv("SKIP_ENV_VALIDATION") == "1":
        return True

    cfg = settings_obj
    required = list(REQUIRED_KEYS)
    if cfg.IDENTITY_ENABLED:
        required.extend(IDENTITY_REQUIRED_KEYS)
    if cfg.is_production:
        required.append("SUBSCRIPTION_PRICE_ID")

    missing = _missing(required, cfg)
    if missing:
        raise EnvValidationError(f"Please define {', '.join(missing)} in .env")

    if not _is_valid_url(cfg.FRONTEND_URL):
        raise EnvValidationError("FRONTEND_URL must be a valid URL (e.g. https://app.example.com)")

    if cfg.PUBLICATION_STATUS_URL and not _is_valid_url(cfg.PUBLICATION_STATUS_URL):
        raise EnvValidationError("PUBLICATION_STATUS_URL must be a valid URL")

    if cfg.IDENTITY_ENABLED:
        try:
            cfg.firebase_credentials()
        except ValueError as e:
            raise EnvValidationError(str(e))

    return True
