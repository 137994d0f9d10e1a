from __future__ import annotations

import re
import threading

from sqlalchemy import Column, Integer, MetaData, String, Table, Text

from ..errors import InvalidInputError

metadata = MetaData()
_tables_lock = threading.Lock()

_COLLECTION_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def validate_collection(collection: str) -> str:
    if not isinstance(collection, str) or not _COLLECTION_NAME.fullmatch(collection):
        raise InvalidInputError(f"Invalid collection name: {collection!r}")
    if collection.lower().startswith("sqlite_"):
        raise InvalidInputError(f"Reserved collection name: {collection!r}")
    return collection


def zblob_table(collection: str) -> Table:
    """Return the table backing one collection, defining it on first use.

    Every collection shares the same schema and gets its own id sequence.
    AUTOINCREMENT keeps ids monotonic within a table: an id is never handed
    out twice.
    """
    validate_collection(collection)
    with _tables_lock:
        existing = metadata.tables.get(collection)
        if existing is not None:
            return existing
        return _define_table(collection)


def _define_table(collection: str) -> Table:
    return Table(
        collection,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("cid", String, nullable=False, unique=True),
        Column("payload", Text, nullable=False),
        Column("title", Text, nullable=False, default=""),
        Column("description", Text, nullable=False, default=""),
        # JSON array of strings
        Column("keywords", Text, nullable=False, default=""),
        Column("referrer", Text, nullable=False, default=""),
        sqlite_autoincrement=True,
    )
