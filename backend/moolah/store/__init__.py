"""
Record store package: the storage-agnostic interface and its backends.
"""

from moolah.config import Settings
from moolah.store.base import (
    COLLECTIONS,
    ListQuery,
    Page,
    RangeFilter,
    Record,
    RecordStore,
)


def build_store(settings: Settings) -> RecordStore:
    """Construct (but do not open) the store selected by ``store_backend``."""
    if settings.store_backend == "sql":
        from moolah.store.sql import SqlRecordStore
        return SqlRecordStore(database_url=settings.database_url)
    if settings.store_backend == "firestore":
        from moolah.identity.firebase import init_firebase_app
        from moolah.store.firestore import FirestoreRecordStore
        return FirestoreRecordStore(init_firebase_app(settings))
    raise ValueError(f"Unknown store_backend: {settings.store_backend}")


__all__ = [
    "COLLECTIONS",
    "ListQuery",
    "Page",
    "RangeFilter",
    "Record",
    "RecordStore",
    "build_store",
]
