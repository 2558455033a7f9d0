from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, map_rows
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        session_id=str(r["session_id"]),
        student_id=str(r["student_id"]),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student_and_sessions(self, student_id: str, session_ids: Sequence[str]) -> Sequence[AttendanceRecord]:
        session_ids = [str(s) for s in session_ids or ()]
        if not session_ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT session_id, student_id, status
                FROM attendance
                WHERE student_id=%s
                  AND session_id IN ({in_clause(session_ids)})
                ORDER BY session_id
                """,
                (student_id, *session_ids),
            )
            return map_rows(fetchall(cur), _to_record, table="attendance", key="session_id")
