from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Attendance mark, identified by (session_id, student_id)."""

    session_id: str
    student_id: str
    status: AttendanceStatus

    @property
    def key(self) -> tuple[str, str]:
        return (self.session_id, self.student_id)
