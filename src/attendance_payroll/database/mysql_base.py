from __future__ import annotations

import logging
import socket
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DatastoreTimeoutError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Client-side "server gone / can't connect / lost connection" and server-side lock wait.
_TIMEOUT_ERRNOS = {
    errorcode.CR_CONN_HOST_ERROR,
    errorcode.CR_SERVER_GONE_ERROR,
    errorcode.CR_SERVER_LOST,
    errorcode.CR_SERVER_LOST_EXTENDED,
    errorcode.ER_LOCK_WAIT_TIMEOUT,
}


def is_timeout_error(exc: BaseException) -> bool:
    if isinstance(exc, (socket.timeout, TimeoutError)):
        return True
    if isinstance(exc, (mysql.connector.errors.OperationalError, mysql.connector.errors.InterfaceError)):
        return exc.errno in _TIMEOUT_ERRNOS or "timed out" in str(exc).lower()
    return False


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back on any error.

    Connector timeouts are re-raised as DatastoreTimeoutError.
    """
    try:
        conn = conn_factory.connect()
    except Exception as exc:
        if is_timeout_error(exc):
            raise DatastoreTimeoutError(f"Datastore unavailable: {exc}") from exc
        raise
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception as exc:
        try:
            conn.rollback()
        except Exception as rollback_exc:
            logger.warning("Rollback failed after %r: %s", exc, rollback_exc)
        if is_timeout_error(exc):
            logger.warning("Datastore call timed out: %s", exc)
            raise DatastoreTimeoutError(f"Datastore did not respond in time: {exc}") from exc
        raise
    finally:
        try:
            conn.close()
        except Exception as close_exc:
            logger.debug("Closing connection failed: %s", close_exc)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_decimal(value: Any) -> Decimal:
    """DECIMAL columns come back as Decimal, but SUM()/COALESCE may yield other numerics."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
