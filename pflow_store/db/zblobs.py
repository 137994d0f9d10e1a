from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import Table, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import StorageError
from ..models import Zblob, ZblobMetadata, serialize_keywords

logger = logging.getLogger(__name__)


def get_by_cid(sess: Session, table: Table, cid: str) -> Optional[Zblob]:
    row = sess.execute(select(table).where(table.c.cid == cid)).mappings().first()
    if row is None:
        return None
    return Zblob.from_row(row)


def count_zblobs(sess: Session, table: Table) -> int:
    return sess.execute(select(func.count()).select_from(table)).scalar_one()


def create_or_retrieve(
    sess: Session,
    table: Table,
    *,
    cid: str,
    payload: str,
    metadata: ZblobMetadata,
) -> Zblob:
    """Return the record stored under ``cid``, inserting it first if absent.

    The first writer wins: when a record exists, ``payload`` and ``metadata``
    are ignored. A unique-constraint violation means another connection
    inserted the same cid first, in which case its row is returned.
    """
    existing = get_by_cid(sess, table, cid)
    if existing is not None:
        return existing

    try:
        sess.execute(
            insert(table).values(
                cid=cid,
                payload=payload,
                title=metadata.title,
                description=metadata.description,
                keywords=serialize_keywords(metadata.keywords),
                referrer=metadata.referrer,
            )
        )
        sess.commit()
    except IntegrityError:
        sess.rollback()
        logger.info("Concurrent insert for %s in %s, using stored record", cid, table.name)
    else:
        logger.info("Stored new zblob %s in %s", cid, table.name)

    stored = get_by_cid(sess, table, cid)
    if stored is None:
        raise StorageError("create_or_retrieve", table.name, f"record {cid} missing after insert")
    return stored
