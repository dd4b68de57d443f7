"""
Record store interface shared by the SQL and Firestore backends.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

Record = Dict[str, Any]

COLLECTIONS = ("transactions", "budgets", "goals", "categories")

# Singular labels used in "not found" messages
LABELS = {
    "transactions": "Transaction",
    "budgets": "Budget",
    "goals": "Goal",
    "categories": "Category",
    "users": "User",
}

# Fields the store owns; callers cannot write them
PROTECTED_FIELDS = frozenset({"id", "owner_id", "created_at", "updated_at"})


@dataclass
class RangeFilter:
    """Inclusive bounds on one field. A None bound is open."""
    field: str
    lower: Any = None
    upper: Any = None


@dataclass
class ListQuery:
    """
    Filters, ordering and paging for ``RecordStore.list``.

    All filters are ANDed. ``equals`` values of None match null fields.
    ``search`` is a case-insensitive substring match as (field, term).
    ``order_by`` holds (field, descending) pairs. Paging is offset based, so
    concurrent inserts or deletes between two page requests can shift rows
    across pages.
    """
    equals: Dict[str, Any] = field(default_factory=dict)
    ranges: List[RangeFilter] = field(default_factory=list)
    search: Optional[Tuple[str, str]] = None
    order_by: List[Tuple[str, bool]] = field(default_factory=list)
    limit: Optional[int] = None
    offset: int = 0


@dataclass
class Page:
    """One page of records plus the total number of matches."""
    items: List[Record]
    total: int


class RecordStore(ABC):
    """
    Owner-scoped persistence for the finance collections and user profiles.

    Every owned operation takes the owner's uid. A record that exists but
    belongs to someone else is reported exactly like a missing one, by
    raising NotFound.
    """

    def open(self) -> None:
        """Acquire connections. Called once at application startup."""

    def close(self) -> None:
        """Release connections. Called once at application shutdown."""

    @abstractmethod
    def list(self, collection: str, owner_id: str, query: Optional[ListQuery] = None) -> Page:
        """Return the owner's matching records."""
        pass

    @abstractmethod
    def get(self, collection: str, owner_id: str, record_id: str) -> Record:
        """Return one record or raise NotFound."""
        pass

    @abstractmethod
    def create(self, collection: str, owner_id: str, data: Mapping[str, Any]) -> Record:
        """Insert a record, stamping id and timestamps."""
        pass

    @abstractmethod
    def patch(self, collection: str, owner_id: str, record_id: str, changes: Mapping[str, Any]) -> Record:
        """Overwrite only the given fields and refresh updated_at."""
        pass

    @abstractmethod
    def delete(self, collection: str, owner_id: str, record_id: str) -> None:
        """Delete one record or raise NotFound."""
        pass

    @abstractmethod
    def write_batch(
        self,
        collection: str,
        owner_id: str,
        deletes: Iterable[str] = (),
        updates: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        """
        Apply updates then deletes as one all-or-nothing unit.
        Deletes run in the given order. Raises NotFound before writing
        anything if any id is missing.
        """
        pass

    @abstractmethod
    def get_user(self, uid: str) -> Optional[Record]:
        """Return the profile for uid, or None."""
        pass

    @abstractmethod
    def save_user(self, uid: str, data: Mapping[str, Any]) -> Record:
        """Create or merge-update the profile for uid."""
        pass

    @abstractmethod
    def patch_user(self, uid: str, changes: Mapping[str, Any]) -> Record:
        """Update an existing profile or raise NotFound."""
        pass

    @abstractmethod
    def delete_user(self, uid: str) -> None:
        """Remove the profile or raise NotFound."""
        pass


def writable(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop store-owned fields from client data."""
    return {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
