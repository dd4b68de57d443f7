"""User profiles: self-service and admin management, with identity provider sync."""

import logging
from typing import Any, Dict, Optional, Tuple

from moolah.config import settings
from moolah.errors import NotFound
from moolah.identity import IdentityProvider
from moolah.models.user import UserStatus
from moolah.schemas.user import UserAdminUpdate, UserSelfUpdate
from moolah.seed import seed_default_categories
from moolah.store import Record, RecordStore

logger = logging.getLogger(__name__)


def lookup_provider_user(identity: IdentityProvider, uid: str) -> Optional[Dict[str, Any]]:
    """Best-effort read of the provider-side account; failures are logged and ignored."""
    try:
        return identity.get_user(uid)
    except Exception:
        logger.warning(f"Could not read identity provider account for {uid}", exc_info=True)
        return None


def sync_identity(identity: IdentityProvider, uid: str, **fields: Any) -> None:
    """
    Push profile fields to the identity provider. Fire-and-forget: a failure
    here never fails the profile write that triggered it, it is only logged.
    A None value clears the field on the provider side.
    """
    if not fields:
        return
    try:
        identity.update_user(uid, **fields)
    except Exception:
        logger.warning(f"Identity provider sync failed for {uid} ({', '.join(fields)})", exc_info=True)


def remove_identity(identity: IdentityProvider, uid: str) -> None:
    try:
        identity.delete_user(uid)
    except Exception:
        logger.warning(f"Identity provider delete failed for {uid}", exc_info=True)


def get_profile(store: RecordStore, identity: IdentityProvider, uid: str) -> Dict[str, Any]:
    """Stored profile merged with the provider-side account. NotFound if neither exists."""
    record = store.get_user(uid)
    account = lookup_provider_user(identity, uid)
    if record is None and account is None:
        raise NotFound("User not found")

    record = record or {}
    account = account or {}
    if record.get("status"):
        status = record["status"]
    else:
        status = UserStatus.disabled if account.get("disabled") else UserStatus.active

    return {
        "id": uid,
        "display_name": record.get("display_name") or account.get("display_name"),
        "email": record.get("email") or account.get("email"),
        "photo_url": record.get("photo_url") or account.get("photo_url"),
        "locale": record.get("locale"),
        "timezone": record.get("timezone"),
        "currency": record.get("currency") or settings.default_currency,
        "roles": list(record.get("roles") or []),
        "status": status,
        "created_at": record.get("created_at"),
        "updated_at": record.get("updated_at"),
    }


def upsert_profile(
    store: RecordStore,
    uid: str,
    email: Optional[str],
    update: UserSelfUpdate,
) -> Tuple[Record, bool]:
    """
    Create or update the caller's own profile. The email always comes from
    the verified token. Returns (profile, created).
    """
    changes = update.changes()
    if email:
        changes["email"] = email

    created = store.get_user(uid) is None
    if created:
        changes.setdefault("currency", settings.default_currency)
        changes["roles"] = []
        changes["status"] = UserStatus.active

    profile = store.save_user(uid, changes)
    if created and settings.seed_default_categories:
        seed_default_categories(store, uid)
    return profile, created


def update_profile(store: RecordStore, uid: str, update: UserSelfUpdate) -> Record:
    return store.patch_user(uid, update.changes())


def admin_update_profile(store: RecordStore, uid: str, update: UserAdminUpdate) -> Record:
    changes = update.changes()
    if "roles" in changes:
        changes["roles"] = sorted(set(changes["roles"]))
    return store.patch_user(uid, changes)


def delete_profile(store: RecordStore, uid: str, hard: bool = False) -> None:
    """Hard delete removes the profile row; soft delete marks it deleted."""
    if hard:
        store.delete_user(uid)
    else:
        store.patch_user(uid, {"status": UserStatus.deleted})
