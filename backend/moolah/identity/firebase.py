"""
Firebase Authentication identity provider.
"""

import logging
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import auth, credentials

from moolah.config import Settings
from moolah.errors import Unauthenticated
from moolah.identity.base import Identity, IdentityProvider, roles_from_claims

logger = logging.getLogger(__name__)

# Keyword arguments of firebase_admin.auth.update_user we sync
SYNCED_FIELDS = ("display_name", "photo_url", "disabled")


def init_firebase_app(settings: Settings):
    """Return the default Firebase app, initializing it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if settings.firebase_credentials_path:
        cred = credentials.Certificate(settings.firebase_credentials_path)
    else:
        cred = credentials.ApplicationDefault()
    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    return firebase_admin.initialize_app(cred, options)


class FirebaseIdentityProvider(IdentityProvider):
    """Verifies Firebase ID tokens and syncs profile fields back to Firebase Auth."""

    def __init__(self, firebase_app=None):
        self._app = firebase_app

    def verify_token(self, token: str) -> Identity:
        try:
            claims = auth.verify_id_token(token, app=self._app, check_revoked=True)
        except (auth.InvalidIdTokenError, auth.UserDisabledError, ValueError) as e:
            logger.info(f"Rejected ID token: {e}")
            raise Unauthenticated("Invalid or expired token") from e

        return Identity(
            uid=claims["uid"],
            email=claims.get("email"),
            roles=roles_from_claims(claims),
        )

    def get_user(self, uid: str) -> Optional[Dict[str, Any]]:
        try:
            record = auth.get_user(uid, app=self._app)
        except auth.UserNotFoundError:
            return None
        return {
            "display_name": record.display_name,
            "email": record.email,
            "photo_url": record.photo_url,
            "disabled": record.disabled,
        }

    def update_user(self, uid: str, **fields: Any) -> None:
        kwargs = {name: value for name, value in fields.items() if name in SYNCED_FIELDS}
        if kwargs:
            auth.update_user(uid, app=self._app, **kwargs)

    def delete_user(self, uid: str) -> None:
        auth.delete_user(uid, app=self._app)
