"""Identity provider protocol (identity variant only)."""
from typing import Protocol

from paperdesk.core.errors import ProviderError


class IdentityProvider(Protocol):
    def delete_user(self, user_uid: str) -> None:
        """
        Delete a user account.

        Raises:
            IdentityProviderError: If the user does not exist or the call fails
        """
        ...


class IdentityProviderError(ProviderError):
    code = "identity_provider_error"
