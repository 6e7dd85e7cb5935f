from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from ..common.ids import normalize_ids
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor); commit on success, roll back on any error."""

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


def dump_id_list(ids) -> str:
    """Serialize an id list for a JSON text column."""
    return json.dumps(normalize_ids(ids))


def load_id_list(value: Any) -> tuple[str, ...]:
    """Parse a JSON text column back into normalized string ids.

    Tolerates NULL, empty strings and rows written by older revisions that
    stored numbers instead of strings.
    """

    if value is None or value == "":
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return ()
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(normalize_ids(value))
