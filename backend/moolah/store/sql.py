"""
SQLAlchemy record store (SQLite, MySQL, PostgreSQL, ... via the database URL).
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from moolah.database import Base, create_db_engine, utcnow
from moolah.errors import NotFound
from moolah.models import Budget, Category, Goal, Transaction, User
from moolah.store.base import LABELS, ListQuery, Page, Record, RecordStore, writable

logger = logging.getLogger(__name__)

MODELS = {
    "transactions": Transaction,
    "budgets": Budget,
    "goals": Goal,
    "categories": Category,
}


def to_record(row) -> Record:
    """Plain dict of a row's column values."""
    return {column.name: getattr(row, column.name) for column in row.__table__.columns}


class SqlRecordStore(RecordStore):
    """
    Record store backed by a relational database.

    Each call runs in its own session and transaction, so a failure part way
    through a call (including write_batch) leaves nothing behind.
    """

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None):
        if database_url is None and engine is None:
            raise ValueError("SqlRecordStore needs a database_url or an engine")
        self._database_url = database_url
        self._engine = engine
        self._session_factory: Optional[sessionmaker] = None

    def open(self) -> None:
        if self._engine is None:
            self._engine = create_db_engine(self._database_url)
        Base.metadata.create_all(bind=self._engine)
        self._session_factory = sessionmaker(
            bind=self._engine, autoflush=False, expire_on_commit=False
        )
        logger.info(f"SQL store opened on {self._engine.url.render_as_string(hide_password=True)}")

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._session_factory = None
        logger.info("SQL store closed")

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise RuntimeError("Store is not open")
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @staticmethod
    def _model(collection: str):
        try:
            return MODELS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None

    @staticmethod
    def _column(model, name: str):
        if name not in model.__table__.columns:
            raise ValueError(f"Unknown field {name!r} on {model.__tablename__}")
        return getattr(model, name)

    def _owned(self, session: Session, collection: str, owner_id: str, record_id: str):
        model = self._model(collection)
        row = session.query(model).filter(
            model.id == record_id,
            model.owner_id == owner_id
        ).first()
        if row is None:
            raise NotFound(f"{LABELS[collection]} not found")
        return row

    def list(self, collection: str, owner_id: str, query: Optional[ListQuery] = None) -> Page:
        query = query or ListQuery()
        model = self._model(collection)

        with self._session() as session:
            q = session.query(model).filter(model.owner_id == owner_id)

            for name, value in query.equals.items():
                column = self._column(model, name)
                q = q.filter(column.is_(None) if value is None else column == value)

            for bounds in query.ranges:
                column = self._column(model, bounds.field)
                if bounds.lower is not None:
                    q = q.filter(column >= bounds.lower)
                if bounds.upper is not None:
                    q = q.filter(column <= bounds.upper)

            if query.search:
                name, term = query.search
                q = q.filter(self._column(model, name).ilike(f"%{term}%"))

            total = q.count()

            for name, descending in query.order_by:
                column = self._column(model, name)
                q = q.order_by(column.desc() if descending else column.asc())

            if query.offset:
                q = q.offset(query.offset)
            if query.limit is not None:
                q = q.limit(query.limit)

            return Page(items=[to_record(row) for row in q.all()], total=total)

    def get(self, collection: str, owner_id: str, record_id: str) -> Record:
        with self._session() as session:
            return to_record(self._owned(session, collection, owner_id, record_id))

    def create(self, collection: str, owner_id: str, data: Mapping[str, Any]) -> Record:
        model = self._model(collection)
        now = utcnow()

        with self._session() as session:
            row = model(**writable(data))
            row.owner_id = owner_id
            row.created_at = now
            row.updated_at = now
            session.add(row)
            session.flush()
            return to_record(row)

    def patch(self, collection: str, owner_id: str, record_id: str, changes: Mapping[str, Any]) -> Record:
        model = self._model(collection)

        with self._session() as session:
            row = self._owned(session, collection, owner_id, record_id)
            for name, value in writable(changes).items():
                self._column(model, name)
                setattr(row, name, value)
            row.updated_at = utcnow()
            session.flush()
            return to_record(row)

    def delete(self, collection: str, owner_id: str, record_id: str) -> None:
        with self._session() as session:
            session.delete(self._owned(session, collection, owner_id, record_id))

    def write_batch(
        self,
        collection: str,
        owner_id: str,
        deletes: Iterable[str] = (),
        updates: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        model = self._model(collection)
        deletes = list(deletes)
        updates = updates or {}

        with self._session() as session:
            to_update = [
                (self._owned(session, collection, owner_id, record_id), changes)
                for record_id, changes in updates.items()
            ]
            to_delete = [
                self._owned(session, collection, owner_id, record_id)
                for record_id in deletes
            ]

            now = utcnow()
            for row, changes in to_update:
                for name, value in writable(changes).items():
                    self._column(model, name)
                    setattr(row, name, value)
                row.updated_at = now
            session.flush()

            # Deletes apply in the order given
            for row in to_delete:
                session.delete(row)
                session.flush()

    def get_user(self, uid: str) -> Optional[Record]:
        with self._session() as session:
            row = session.get(User, uid)
            return to_record(row) if row is not None else None

    def save_user(self, uid: str, data: Mapping[str, Any]) -> Record:
        now = utcnow()

        with self._session() as session:
            row = session.get(User, uid)
            if row is None:
                row = User(id=uid, created_at=now)
                session.add(row)
            for name, value in writable(data).items():
                self._column(User, name)
                setattr(row, name, value)
            row.updated_at = now
            session.flush()
            return to_record(row)

    def patch_user(self, uid: str, changes: Mapping[str, Any]) -> Record:
        with self._session() as session:
            row = session.get(User, uid)
            if row is None:
                raise NotFound("User not found")
            for name, value in writable(changes).items():
                self._column(User, name)
                setattr(row, name, value)
            row.updated_at = utcnow()
            session.flush()
            return to_record(row)

    def delete_user(self, uid: str) -> None:
        with self._session() as session:
            row = session.get(User, uid)
            if row is None:
                raise NotFound("User not found")
            session.delete(row)
