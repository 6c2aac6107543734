"""
Firebase Authentication identity provider.

The service account arrives as a JSON blob in FIREBASE_SERVICE_ACCOUNT; the
Admin SDK app is initialized once under its own name so it never collides
with a default app created elsewhere in the process.
"""
from typing import Any, Dict

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from paperdesk.features.identity.provider import IdentityProviderError

FIREBASE_APP_NAME = "paperdesk"


class FirebaseIdentityProvider:
    """Firebase implementation of IdentityProvider protocol."""

    def __init__(self, service_account: Dict[str, Any], app_name: str = FIREBASE_APP_NAME):
        try:
            self.app = firebase_admin.get_app(app_name)
        except ValueError:
            try:
                cert = credentials.Certificate(service_account)
            except (ValueError, KeyError) as e:
                raise IdentityProviderError(f"Invalid Firebase service account: {e}")
            self.app = firebase_admin.initialize_app(cert, name=app_name)

    def delete_user(self, user_uid: str) -> None:
        try:
            auth.delete_user(user_uid, app=self.app)
        except ValueError as e:
            raise IdentityProviderError(f"Invalid user id: {e}")
        except FirebaseError as e:
            raise IdentityProviderError(f"Firebase user deletion failed: {e}")
