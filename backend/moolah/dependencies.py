"""
FastAPI dependencies.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from moolah.errors import Forbidden, Unauthenticated
from moolah.identity import Identity, IdentityProvider
from moolah.models.user import UserStatus
from moolah.services.market_service import MarketDataClient
from moolah.store import RecordStore

bearer_scheme = HTTPBearer(auto_error=False)

BLOCKED_STATUSES = (UserStatus.disabled, UserStatus.deleted)


def get_store(request: Request) -> RecordStore:
    """
    Dependency for the record store opened at startup.
    """
    return request.app.state.store


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def get_market_data(request: Request) -> MarketDataClient:
    return request.app.state.market_data


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
    store: RecordStore = Depends(get_store),
) -> Identity:
    """
    Resolve the caller from the bearer token.

    Roles granted on the stored profile are added to the token's roles. A
    profile that has been disabled or deleted is refused even with a valid
    token.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Missing bearer token")

    identity = identity_provider.verify_token(credentials.credentials)

    profile = store.get_user(identity.uid)
    if profile is not None:
        if profile.get("status") in BLOCKED_STATUSES:
            raise Forbidden("User account is not active")
        identity = identity.with_roles(profile.get("roles") or [])

    return identity


def require_admin(current_user: Identity = Depends(get_current_user)) -> Identity:
    if not current_user.is_admin:
        raise Forbidden("Admin role required")
    return current_user
