"""Document store: JSON documents grouped in collections, keyed by id."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import JSON, String, create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Document(Base):
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON)


class DocumentNotFound(KeyError):
    """Raised when updating a document that does not exist."""


def create_database_engine(database_url: str) -> Engine:
    """Create an engine; SQLite gets thread-safe settings for the API threadpool."""
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees its own empty DB
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


class DocumentStore:
    """get / set / update / delete / query-by-equality over JSON documents."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        Base.metadata.create_all(bind=engine)

    @classmethod
    def from_url(cls, database_url: str) -> "DocumentStore":
        store = cls(create_database_engine(database_url))
        logger.info(f"Document store ready ({database_url.split('://')[0]})")
        return store

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get(self, collection: str, doc_id: str) -> dict | None:
        with self.session() as session:
            doc = session.get(Document, (collection, doc_id))
            return dict(doc.data) if doc is not None else None

    def exists(self, collection: str, doc_id: str) -> bool:
        return self.get(collection, doc_id) is not None

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        """Create or overwrite a document."""
        with self.session() as session:
            session.merge(Document(collection=collection, id=doc_id, data=dict(data)))

    def update(self, collection: str, doc_id: str, fields: dict) -> None:
        """Merge ``fields`` into an existing document."""
        with self.session() as session:
            doc = session.get(Document, (collection, doc_id))
            if doc is None:
                raise DocumentNotFound(f"{collection}/{doc_id}")
            # Reassign so the JSON column is flagged dirty
            doc.data = {**doc.data, **fields}

    def delete(self, collection: str, doc_id: str) -> bool:
        with self.session() as session:
            result = session.execute(
                delete(Document).where(Document.collection == collection, Document.id == doc_id)
            )
            return result.rowcount > 0

    def all(self, collection: str) -> list[dict]:
        with self.session() as session:
            docs = session.scalars(
                select(Document).where(Document.collection == collection).order_by(Document.id)
            )
            return [dict(doc.data) for doc in docs]

    def where(self, collection: str, **equals) -> list[dict]:
        """Documents whose fields equal every given value."""
        return [
            data
            for data in self.all(collection)
            if all(field in data and data[field] == value for field, value in equals.items())
        ]

    def delete_where(self, collection: str, **equals) -> int:
        """Delete every document matching :meth:`where`; returns the count."""
        with self.session() as session:
            docs = session.scalars(select(Document).where(Document.collection == collection))
            matched = [
                doc
                for doc in docs
                if all(field in doc.data and doc.data[field] == value for field, value in equals.items())
            ]
            for doc in matched:
                session.delete(doc)
            return len(matched)
