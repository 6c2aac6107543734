"""
Resend email provider.

Talks to the Resend batch endpoint (POST /emails/batch), which accepts up to
100 messages per call and answers with one id per message.
"""
from typing import Any, Dict, List, Optional

import httpx

from paperdesk.features.notifications.provider import EmailMessage, EmailProviderError

RESEND_API_BASE = "https://api.resend.com"
RESEND_TIMEOUT_SECONDS = 10.0


class ResendProvider:
    """Resend implementation of EmailProvider protocol."""

    def __init__(
        self,
        api_key: Optional[str],
        api_base: str = RESEND_API_BASE,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not api_key:
            raise EmailProviderError("RESEND_API_KEY not configured")
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def send_batch(self, messages: List[EmailMessage]) -> Dict[str, Any]:
        payload = [m.to_payload() for m in messages]
        url = f"{self.api_base}/emails/batch"

        try:
            with httpx.Client(timeout=RESEND_TIMEOUT_SECONDS, transport=self._transport) as client:
                response = client.post(url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            raise EmailProviderError(f"Resend request failed: {e}")

        if response.status_code >= 300:
            raise EmailProviderError(f"Resend batch send failed: {response.status_code} {_error_message(response)}")
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return str(body.get("message") or body)
    return str(body)
