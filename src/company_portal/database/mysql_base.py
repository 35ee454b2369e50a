from __future__ import annotations

import logging
from contextlib import contextmanager, suppress
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_TIMEOUT_ERRNOS = {
    errorcode.ER_LOCK_WAIT_TIMEOUT,
    errorcode.ER_LOCK_DEADLOCK,
}


def _is_unavailable(exc: mysql.connector.Error) -> bool:
    if isinstance(exc, (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError)):
        return True
    return getattr(exc, "errno", None) in _TIMEOUT_ERRNOS


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits when the block finishes, rolls back on any exception. Connection
    loss and lock-wait timeouts surface as ``StoreUnavailableError``; other
    driver errors (e.g. duplicate keys) propagate unchanged.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        with suppress(mysql.connector.Error):
            conn.rollback()
        if _is_unavailable(exc):
            logger.warning("Database operation failed: %s", exc)
            raise StoreUnavailableError("Service temporarily unavailable, please retry") from exc
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def is_duplicate_key(exc: mysql.connector.Error) -> bool:
    return getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
