from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from ..common.cancellation import CancellationToken, raise_if_cancelled
from .connection import DatabaseConnection


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection,
    *,
    dictionary: bool = True,
    cancel: Optional[CancellationToken] = None,
):
    """Yield ``(conn, cur)`` inside one transaction.

    Commits when the block exits normally, rolls back on any error (including
    cancellation detected right before the commit).
    """
    raise_if_cancelled(cancel)
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            raise_if_cancelled(cancel)
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


def in_placeholders(values: Sequence[Any]) -> str:
    """``%s, %s, ...`` for a parameterized ``IN (...)`` clause."""
    if not values:
        raise ValueError("IN clause needs at least one value")
    return ", ".join(["%s"] * len(values))
