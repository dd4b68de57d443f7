"""
Identity provider interface and the resolved caller identity.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Identity:
    """The verified caller. ``uid`` is the only key owned data is scoped by."""
    uid: str
    email: Optional[str] = None
    roles: FrozenSet[str] = frozenset()

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles

    def with_roles(self, roles: Iterable[str]) -> "Identity":
        return Identity(uid=self.uid, email=self.email, roles=self.roles | frozenset(roles))


def roles_from_claims(claims: Mapping[str, Any]) -> FrozenSet[str]:
    """Collect roles from the common custom-claim shapes: admin flag, role, roles."""
    roles = set()
    listed = claims.get("roles")
    if isinstance(listed, (list, tuple)):
        roles.update(str(role) for role in listed)
    if isinstance(claims.get("role"), str):
        roles.add(claims["role"])
    if claims.get("admin") is True:
        roles.add(ADMIN_ROLE)
    return frozenset(roles)


class IdentityProvider(ABC):
    """External identity provider: token verification plus account sync."""

    @abstractmethod
    def verify_token(self, token: str) -> Identity:
        """Return the identity behind a bearer token or raise Unauthenticated."""
        pass

    @abstractmethod
    def get_user(self, uid: str) -> Optional[Dict[str, Any]]:
        """Provider-side account (display_name, email, photo_url, disabled), or None."""
        pass

    @abstractmethod
    def update_user(self, uid: str, **fields: Any) -> None:
        """Push display_name, photo_url and/or disabled to the provider."""
        pass

    @abstractmethod
    def delete_user(self, uid: str) -> None:
        """Remove the provider-side account."""
        pass
