"""
Identity provider package.
"""

from moolah.config import Settings
from moolah.identity.base import ADMIN_ROLE, Identity, IdentityProvider, roles_from_claims


def build_identity_provider(settings: Settings) -> IdentityProvider:
    """Construct the Firebase-backed provider for the configured project."""
    from moolah.identity.firebase import FirebaseIdentityProvider, init_firebase_app
    return FirebaseIdentityProvider(init_firebase_app(settings))


__all__ = [
    "ADMIN_ROLE",
    "Identity",
    "IdentityProvider",
    "build_identity_provider",
    "roles_from_claims",
]
