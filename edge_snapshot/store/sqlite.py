"""
SQLite metadata store

Reads the ``meta`` table written by the edge agent. The database is opened
read-only; this module never creates tables or writes rows.
"""

from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

import structlog
from sqlalchemy import Column, String, Text, create_engine, select, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ..exceptions import StoreError, StoreUnavailable
from ..models import MetaRecord
from .base import MetaStore

logger = structlog.get_logger(__name__)

Base = declarative_base()

META_TABLE_NAME = "meta"


class Meta(Base):
    """Row of the edge agent's metadata table"""

    __tablename__ = META_TABLE_NAME

    key = Column(String(256), primary_key=True)
    type = Column(String(32))
    value = Column(Text)

    def to_record(self) -> MetaRecord:
        return MetaRecord(type=self.type or "", key=self.key, value=self.value or "")


def database_url(path: str, read_only: bool = True) -> URL:
    """Build a SQLAlchemy URL for a database file

    Read-only URLs go through SQLite's URI filename parser, so the path is
    percent-encoded there and ``#``, ``?`` and ``%`` stay part of the name.
    """
    resolved = Path(path).expanduser().resolve()
    if read_only:
        return URL.create(
            "sqlite",
            database=f"file:{quote(str(resolved))}",
            query={"mode": "ro", "uri": "true"},
        )
    return URL.create("sqlite", database=str(resolved))


class SQLiteMetaStore(MetaStore):
    """Metadata store backed by the edge node SQLite database"""

    name = "sqlite"

    def __init__(self, path: str):
        self.path = path
        self._engine: Optional[Engine] = None
        self._session: Optional[Session] = None

    @classmethod
    def open(cls, path: str) -> "SQLiteMetaStore":
        """Open the database at path, verifying that it can be queried

        Raises:
            StoreUnavailable: If the file is missing or cannot be opened
        """
        if not Path(path).expanduser().exists():
            raise StoreUnavailable(path, "file does not exist")

        store = cls(path)
        try:
            store._engine = create_engine(database_url(path), echo=False)
            with store._engine.connect() as conn:
                conn.execute(text("SELECT count(*) FROM sqlite_master"))
            SessionLocal = sessionmaker(bind=store._engine, autoflush=False)
            store._session = SessionLocal()
        except SQLAlchemyError as e:
            store.close()
            raise StoreUnavailable(path, str(e)) from e

        logger.debug("Opened metadata store", path=path)
        return store

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StoreError(f"Metadata store {self.path} is not open")
        return self._session

    def scan(self, resource_type: str) -> List[MetaRecord]:
        stmt = select(Meta).where(Meta.type == resource_type).order_by(text("rowid"))
        try:
            rows = self.session.scalars(stmt).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to query {resource_type} records: {e}") from e

        logger.debug("Scanned metadata store", type=resource_type, count=len(rows))
        return [row.to_record() for row in rows]

    def lookup(self, key: str) -> Optional[MetaRecord]:
        try:
            row = self.session.get(Meta, key)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to query record {key}: {e}") from e
        return row.to_record() if row is not None else None

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
