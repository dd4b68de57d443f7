"""
Firestore record store.

Owned records live under ``users/{uid}/{collection}/{id}``; the profile is
the ``users/{uid}`` document itself. Dates are stored as ISO strings and
decimals as floats, since Firestore has no native type for either.
"""

import enum
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from moolah.errors import NotFound
from moolah.store.base import COLLECTIONS, LABELS, ListQuery, Page, Record, RecordStore, writable

logger = logging.getLogger(__name__)


def encode(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [encode(item) for item in value]
    return value


def encode_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: encode(value) for key, value in data.items()}


def to_record(snapshot) -> Record:
    record = snapshot.to_dict() or {}
    record["id"] = snapshot.id
    return record


class FirestoreRecordStore(RecordStore):
    """Record store backed by Cloud Firestore through firebase-admin."""

    def __init__(self, firebase_app=None):
        self._app = firebase_app
        self._client = None

    def open(self) -> None:
        self._client = firestore.client(app=self._app)
        logger.info(f"Firestore store opened for project {self._client.project}")

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        logger.info("Firestore store closed")

    @property
    def client(self):
        if self._client is None:
            raise RuntimeError("Store is not open")
        return self._client

    def _collection(self, collection: str, owner_id: str):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")
        return self.client.collection("users").document(owner_id).collection(collection)

    def _existing(self, collection: str, owner_id: str, record_id: str):
        ref = self._collection(collection, owner_id).document(str(record_id))
        snapshot = ref.get()
        if not snapshot.exists:
            raise NotFound(f"{LABELS[collection]} not found")
        return ref, snapshot

    def list(self, collection: str, owner_id: str, query: Optional[ListQuery] = None) -> Page:
        query = query or ListQuery()
        q = self._collection(collection, owner_id)

        for name, value in query.equals.items():
            q = q.where(filter=FieldFilter(name, "==", encode(value)))
        for bounds in query.ranges:
            if bounds.lower is not None:
                q = q.where(filter=FieldFilter(bounds.field, ">=", encode(bounds.lower)))
            if bounds.upper is not None:
                q = q.where(filter=FieldFilter(bounds.field, "<=", encode(bounds.upper)))
        for name, descending in query.order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            q = q.order_by(name, direction=direction)

        items = [to_record(snapshot) for snapshot in q.stream()]

        # Firestore has no substring operator, so search runs on the fetched rows
        if query.search:
            name, term = query.search
            term = term.lower()
            items = [item for item in items if term in str(item.get(name) or "").lower()]

        total = len(items)
        end = None if query.limit is None else query.offset + query.limit
        return Page(items=items[query.offset:end], total=total)

    def get(self, collection: str, owner_id: str, record_id: str) -> Record:
        _, snapshot = self._existing(collection, owner_id, record_id)
        return to_record(snapshot)

    def create(self, collection: str, owner_id: str, data: Mapping[str, Any]) -> Record:
        payload = encode_fields(writable(data))
        payload["owner_id"] = owner_id
        payload["created_at"] = firestore.SERVER_TIMESTAMP
        payload["updated_at"] = firestore.SERVER_TIMESTAMP

        ref = self._collection(collection, owner_id).document()
        ref.set(payload)
        return to_record(ref.get())

    def patch(self, collection: str, owner_id: str, record_id: str, changes: Mapping[str, Any]) -> Record:
        ref, _ = self._existing(collection, owner_id, record_id)
        payload = encode_fields(writable(changes))
        payload["updated_at"] = firestore.SERVER_TIMESTAMP
        ref.set(payload, merge=True)
        return to_record(ref.get())

    def delete(self, collection: str, owner_id: str, record_id: str) -> None:
        ref, _ = self._existing(collection, owner_id, record_id)
        ref.delete()

    def write_batch(
        self,
        collection: str,
        owner_id: str,
        deletes: Iterable[str] = (),
        updates: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        updates = updates or {}
        update_refs = [
            (self._existing(collection, owner_id, record_id)[0], changes)
            for record_id, changes in updates.items()
        ]
        delete_refs = [self._existing(collection, owner_id, record_id)[0] for record_id in deletes]

        batch = self.client.batch()
        for ref, changes in update_refs:
            payload = encode_fields(writable(changes))
            payload["updated_at"] = firestore.SERVER_TIMESTAMP
            batch.update(ref, payload)
        for ref in delete_refs:
            batch.delete(ref)
        batch.commit()

    def _user_ref(self, uid: str):
        return self.client.collection("users").document(uid)

    def get_user(self, uid: str) -> Optional[Record]:
        snapshot = self._user_ref(uid).get()
        return to_record(snapshot) if snapshot.exists else None

    def save_user(self, uid: str, data: Mapping[str, Any]) -> Record:
        ref = self._user_ref(uid)
        payload = encode_fields(writable(data))
        if not ref.get().exists:
            payload["created_at"] = firestore.SERVER_TIMESTAMP
        payload["updated_at"] = firestore.SERVER_TIMESTAMP
        ref.set(payload, merge=True)
        return to_record(ref.get())

    def patch_user(self, uid: str, changes: Mapping[str, Any]) -> Record:
        ref = self._user_ref(uid)
        if not ref.get().exists:
            raise NotFound("User not found")
        payload = encode_fields(writable(changes))
        payload["updated_at"] = firestore.SERVER_TIMESTAMP
        ref.set(payload, merge=True)
        return to_record(ref.get())

    def delete_user(self, uid: str) -> None:
        ref = self._user_ref(uid)
        if not ref.get().exists:
            raise NotFound("User not found")
        ref.delete()
