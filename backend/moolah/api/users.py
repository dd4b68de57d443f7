"""
User profile API endpoints.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Response
from typing import Optional

from moolah.dependencies import get_current_user, get_identity_provider, get_store, require_admin
from moolah.identity import Identity, IdentityProvider
from moolah.models.user import UserStatus
from moolah.schemas.user import UserAdminUpdate, UserResponse, UserSelfUpdate
from moolah.services import user_service
from moolah.store import RecordStore

router = APIRouter(prefix="/user", tags=["user"])


def schedule_sync(background_tasks: BackgroundTasks, identity: IdentityProvider, uid: str, changes: dict) -> None:
    """Queue a provider sync for the synced fields present in changes."""
    fields = {name: changes[name] for name in ("display_name", "photo_url") if name in changes}
    if "status" in changes:
        fields["disabled"] = changes["status"] != UserStatus.active
    if fields:
        background_tasks.add_task(user_service.sync_identity, identity, uid, **fields)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """The caller's profile, merged with their identity provider account."""
    return user_service.get_profile(store, identity, current_user.uid)


@router.post("", response_model=UserResponse)
def upsert_me(
    response: Response,
    background_tasks: BackgroundTasks,
    update: Optional[UserSelfUpdate] = None,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """Create the caller's profile, or update it if it already exists."""
    update = update or UserSelfUpdate()
    profile, created = user_service.upsert_profile(store, current_user.uid, current_user.email, update)
    response.status_code = 201 if created else 200
    schedule_sync(background_tasks, identity, current_user.uid, update.changes())
    return profile


@router.patch("/me", response_model=UserResponse)
@router.put("/me", response_model=UserResponse)
def update_me(
    update: UserSelfUpdate,
    background_tasks: BackgroundTasks,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """Update whitelisted fields of the caller's own profile."""
    profile = user_service.update_profile(store, current_user.uid, update)
    schedule_sync(background_tasks, identity, current_user.uid, update.changes())
    return profile


@router.get("/{uid}", response_model=UserResponse)
def get_user(
    uid: str,
    admin: Identity = Depends(require_admin),
    store: RecordStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    return user_service.get_profile(store, identity, uid)


@router.patch("/{uid}", response_model=UserResponse)
@router.put("/{uid}", response_model=UserResponse)
def update_user(
    uid: str,
    update: UserAdminUpdate,
    background_tasks: BackgroundTasks,
    admin: Identity = Depends(require_admin),
    store: RecordStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """Admin update, including roles and status. Disabling a user also disables their sign-in."""
    profile = user_service.admin_update_profile(store, uid, update)
    schedule_sync(background_tasks, identity, uid, update.changes())
    return profile


@router.delete("/{uid}", status_code=204)
def delete_user(
    uid: str,
    background_tasks: BackgroundTasks,
    hard: bool = False,
    admin: Identity = Depends(require_admin),
    store: RecordStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """
    Soft delete marks the profile deleted and disables sign-in.
    hard=true removes the profile and the identity provider account.
    """
    user_service.delete_profile(store, uid, hard=hard)
    if hard:
        background_tasks.add_task(user_service.remove_identity, identity, uid)
    else:
        background_tasks.add_task(user_service.sync_identity, identity, uid, disabled=True)
    return None
