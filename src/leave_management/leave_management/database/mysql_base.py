from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection

# ER_LOCK_WAIT_TIMEOUT, ER_LOCK_DEADLOCK
LOCK_CONFLICT_ERRNOS = frozenset({1205, 1213})


def is_lock_conflict(exc: BaseException) -> bool:
    return isinstance(exc, mysql.connector.Error) and getattr(exc, "errno", None) in LOCK_CONFLICT_ERRNOS


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception as exc:
        conn.rollback()
        if is_lock_conflict(exc):
            raise ConflictError("Database lock conflict, please try again") from exc
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_days(value: Any) -> float:
    """Normalize DECIMAL day counts (mysql-connector returns Decimal) to float."""

    if value is None:
        return 0.0
    return float(value)
