from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_student_and_sessions(self, student_id: str, session_ids: Sequence[str]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
