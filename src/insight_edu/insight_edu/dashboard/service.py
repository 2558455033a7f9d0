from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..attendance.calculator import (
    applicable_sessions,
    average_attendance,
    class_attendance,
    compute_attendance_percentage,
)
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.exceptions import NotFoundError
from ..sessions.model import Session
from ..sessions.repository import SessionRepository
from ..students.model import Student
from ..students.repository import StudentRepository


@dataclass(frozen=True)
class StudentAttendanceView:
    student_id: str
    name: str
    cached: int | None
    computed: int

    @property
    def stale(self) -> bool:
        return (self.cached or 0) != self.computed

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "name": self.name,
            "cached": self.cached,
            "computed": self.computed,
            "stale": self.stale,
        }


class DashboardService:
    """Live attendance figures computed from raw records at read time.

    Uses the same calculator as the sync job, so a student's live number is
    what the next sync would write into the cache.
    """

    def __init__(
        self,
        students: StudentRepository,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
    ):
        self._students = students
        self._sessions = sessions
        self._attendance = attendance

    def _records_for(self, student: Student, sessions: Sequence[Session]) -> Sequence[AttendanceRecord]:
        ids = [s.session_id for s in applicable_sessions(student, sessions)]
        if not ids:
            return []
        return self._attendance.list_for_student_and_sessions(student.student_id, ids)

    def _load(self, students: Sequence[Student], class_ids: Sequence[str]) -> Tuple[List[Session], List[AttendanceRecord]]:
        sessions = list(self._sessions.list_completed_for_classes(sorted(set(class_ids))))
        records: List[AttendanceRecord] = []
        for st in students:
            records.extend(self._records_for(st, sessions))
        return sessions, records

    def student_attendance(self, student_id: str) -> StudentAttendanceView:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError(f"Unknown student: {student_id}")

        sessions, records = self._load([student], student.class_ids)
        return StudentAttendanceView(
            student_id=student.student_id,
            name=student.name,
            cached=student.attendance_cached,
            computed=compute_attendance_percentage(student, sessions, records),
        )

    def class_attendance(self, class_id: str) -> dict:
        members = [s for s in self._students.list_students() if class_id in s.class_ids]
        sessions, records = self._load(members, [class_id])
        return {
            "class_id": class_id,
            "students": len(members),
            "attendance": class_attendance(class_id, members, sessions, records),
        }

    def overview(self) -> dict:
        students = list(self._students.list_students())
        class_ids = [c for st in students for c in st.class_ids]
        sessions, records = self._load(students, class_ids)

        views = [
            StudentAttendanceView(
                student_id=st.student_id,
                name=st.name,
                cached=st.attendance_cached,
                computed=compute_attendance_percentage(st, sessions, records),
            )
            for st in students
        ]
        return {
            "students": [v.to_dict() for v in views],
            "average": average_attendance(students, sessions, records),
            "stale": [v.student_id for v in views if v.stale],
        }
