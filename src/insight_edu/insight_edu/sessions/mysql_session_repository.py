from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, map_rows, parse_id_list
from .model import Session
from .repository import SessionRepository


def _to_session(r: Dict[str, Any]) -> Session:
    return Session(
        session_id=str(r["id"]),
        class_id=str(r["class_id"]),
        status=SessionStatus(r["status"]),
        target_student_ids=parse_id_list(r.get("target_student_ids")),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_completed_for_classes(self, class_ids: Sequence[str]) -> Sequence[Session]:
        class_ids = [str(c) for c in class_ids or ()]
        if not class_ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, class_id, status, target_student_ids
                FROM sessions
                WHERE class_id IN ({in_clause(class_ids)})
                  AND status=%s
                ORDER BY id
                """,
                (*class_ids, SessionStatus.COMPLETED.value),
            )
            return map_rows(fetchall(cur), _to_session, table="sessions")
