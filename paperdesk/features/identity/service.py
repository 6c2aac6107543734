"""Account deletion against the identity provider."""
import logging

from paperdesk.features.identity.provider import IdentityProvider

logger = logging.getLogger("paperdesk")


def delete_user(provider: IdentityProvider, user_uid: str) -> None:
    provider.delete_user(user_uid)
    logger.info("identity.user_deleted", extra={"user_uid": user_uid})
