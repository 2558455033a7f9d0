from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.validators import require_non_empty, require_percentage
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, map_rows, parse_id_list
from .model import Student
from .repository import StudentRepository


def _to_student(r: Dict[str, Any]) -> Student:
    cached = r.get("attendance")
    return Student(
        student_id=str(r["id"]),
        name=r["name"],
        class_ids=parse_id_list(r.get("class_ids")) or (),
        attendance_cached=int(cached) if cached is not None else None,
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_students(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, class_ids, attendance
                FROM students
                ORDER BY id
                """
            )
            return map_rows(fetchall(cur), _to_student, table="students")

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, class_ids, attendance
                FROM students
                WHERE id=%s
                """,
                (student_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return map_rows([r], _to_student, table="students")[0]

    def update_attendance(self, student_id: str, percentage: int) -> bool:
        student_id = require_non_empty(student_id, "student_id")
        percentage = require_percentage(percentage)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET attendance=%s WHERE id=%s",
                (percentage, student_id),
            )
            return cur.rowcount > 0
