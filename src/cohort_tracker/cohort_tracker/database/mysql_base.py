from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)


def translate_error(exc: Exception) -> StoreError:
    """Map a driver error onto the domain taxonomy.

    Duplicate-key violations become ConflictError so callers can treat them as an
    expected outcome; everything else is a generic StoreError.
    """

    if isinstance(exc, mysql.connector.IntegrityError) and getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY:
        return ConflictError(str(exc))
    return StoreError(str(exc))


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Could not connect to record store: %s", e)
        raise StoreError(str(e)) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        err = translate_error(e)
        if not isinstance(err, ConflictError):
            logger.error("Record store failure: %s", e)
        raise err from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
