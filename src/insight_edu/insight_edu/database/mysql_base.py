from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

import mysql.connector

from ..core.exceptions import DataStoreError
from .connection import DatabaseConnection

T = TypeVar("T")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back on error.

    mysql.connector errors are re-raised as DataStoreError.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise DataStoreError(str(e)) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise DataStoreError(str(e)) from e
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


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for `IN (...)`; callers must not pass an empty sequence."""
    if not values:
        raise ValueError("in_clause() needs at least one value")
    return ", ".join(["%s"] * len(values))


def parse_id_list(value: Any) -> Optional[Tuple[str, ...]]:
    """Normalize a JSON id-list column.

    mysql-connector can return JSON as:
    - str (e.g. '["S1", "S2"]')
    - bytes / bytearray
    - an already decoded list
    SQL NULL and JSON null stay None; an empty list stays an empty tuple.
    """

    if value is None:
        return None

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return ()
        value = json.loads(value)
        if value is None:
            return None

    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)

    raise TypeError(f"Unsupported id list value type: {type(value)!r}")


def map_rows(rows: Sequence[Dict[str, Any]], mapper: Callable[[Dict[str, Any]], T], *, table: str, key: str = "id") -> List[T]:
    """Map result rows to domain objects.

    A row the mapper cannot read (bad JSON, unknown status, missing column)
    is raised as DataStoreError naming the table and the row key.
    """
    out: List[T] = []
    for r in rows:
        try:
            out.append(mapper(r))
        except (KeyError, TypeError, ValueError) as e:
            raise DataStoreError(f"Malformed {table} row {r.get(key, '?')!r}: {e}") from e
    return out
