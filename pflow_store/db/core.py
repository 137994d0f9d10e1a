from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import Table, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..config import DEFAULT_LOCK_TIMEOUT
from ..errors import InvalidInputError, StorageError
from ..models import Zblob, ZblobMetadata
from . import zblobs
from .models import zblob_table

logger = logging.getLogger(__name__)


class Storage:
    """SQLite-backed zblob store shared by everything that serves models.

    One exclusive lock guards all collections, so every operation is a single
    blocking step. Construct one per process and hand it to the HTTP layer.
    """

    def __init__(self, db_path: Path | str, *, lock_timeout: float = DEFAULT_LOCK_TIMEOUT):
        self.db_path = Path(db_path)
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._ready: set[str] = set()
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError("open", str(self.db_path), str(exc)) from exc
        self._engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
        )
        self._Session = sessionmaker(bind=self._engine, expire_on_commit=False)

    @contextmanager
    def _locked(self, operation: str, collection: str) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise StorageError(
                operation, collection, f"lock not acquired within {self._lock_timeout}s"
            )
        try:
            yield
        except (SQLAlchemyError, OSError) as exc:
            logger.error("%s on %s failed: %s", operation, collection, exc)
            raise StorageError(operation, collection, str(exc)) from exc
        finally:
            self._lock.release()

    def _ensure_table(self, collection: str) -> Table:
        """Create the collection table on first use. Caller holds the lock."""
        table = zblob_table(collection)
        if collection not in self._ready:
            table.create(self._engine, checkfirst=True)
            self._ready.add(collection)
        return table

    @contextmanager
    def db_session(self, operation: str, collection: str) -> Iterator[tuple[Session, Table]]:
        """Hold the store lock and yield a session plus the collection table.

        Uncommitted work is rolled back when the session closes, so a failed
        call never leaves a partial write behind.
        """
        zblob_table(collection)
        with self._locked(operation, collection):
            table = self._ensure_table(collection)
            sess = self._Session()
            try:
                yield sess, table
            finally:
                sess.close()

    def create_tables(self, *collections: str) -> None:
        for collection in collections:
            with self._locked("create_tables", collection):
                self._ensure_table(collection)

    def create_or_retrieve(
        self,
        collection: str,
        cid: str,
        payload: str,
        metadata: Optional[ZblobMetadata] = None,
    ) -> Zblob:
        if not cid:
            raise InvalidInputError("cid must not be empty")
        if not payload:
            raise InvalidInputError("payload must not be empty")
        with self.db_session("create_or_retrieve", collection) as (sess, table):
            return zblobs.create_or_retrieve(
                sess,
                table,
                cid=cid,
                payload=payload,
                metadata=metadata or ZblobMetadata(),
            )

    def get_by_cid(self, collection: str, cid: str) -> Optional[Zblob]:
        with self.db_session("get_by_cid", collection) as (sess, table):
            return zblobs.get_by_cid(sess, table, cid)

    def count(self, collection: str) -> int:
        with self.db_session("count", collection) as (sess, table):
            return zblobs.count_zblobs(sess, table)

    def reset(self, collection: str) -> None:
        """Drop and recreate a collection so its ids restart at 1. Test/admin use only."""
        table = zblob_table(collection)
        with self._locked("reset", collection):
            with self._engine.begin() as conn:
                table.drop(conn, checkfirst=True)
                table.create(conn)
            self._ready.add(collection)
        logger.warning("Reset collection %s in %s", collection, self.db_path)

    def close(self) -> None:
        self._engine.dispose()
