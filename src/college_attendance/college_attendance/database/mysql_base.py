from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor) inside one transaction.

    Everything executed in the block is committed together, or rolled back
    if the block raises.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
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


def is_duplicate_key(exc: BaseException) -> bool:
    return isinstance(exc, IntegrityError) and getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


@contextmanager
def translate_duplicate(message: str):
    """Re-raise MySQL duplicate-key errors as ConflictError(message)."""

    try:
        yield
    except IntegrityError as e:
        if is_duplicate_key(e):
            raise ConflictError(message) from e
        raise
