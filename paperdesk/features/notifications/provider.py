"""Email provider protocol."""
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Protocol

from paperdesk.core.errors import ProviderError


@dataclass(frozen=True)
class EmailMessage:
    """One outgoing plain-text message."""
    sender: str
    to: str
    subject: str
    text: str

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["from"] = payload.pop("sender")
        payload["to"] = [self.to]
        return payload


class EmailProvider(Protocol):
    def send_batch(self, messages: List[EmailMessage]) -> Dict[str, Any]:
        """
        Submit all messages in one provider call.

        Returns:
            The provider's batch response (per-message ids), for logging only

        Raises:
            EmailProviderError: If the provider rejects the batch or is unreachable
        """
        ...


class EmailProviderError(ProviderError):
    code = "email_provider_error"
