"""Attendance percentage calculation.

Single implementation used by the sync job (`reconciliation`) and by live
read-time aggregation (`dashboard`). Everything here is pure: no I/O, no
mutation of the inputs.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from ..core.enums import AttendanceStatus, SessionStatus
from ..sessions.model import Session
from ..students.model import Student
from .model import AttendanceRecord


def round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator/denominator to the nearest int, halves going up.

    Integer arithmetic only, so 12.5 -> 13 and 37.5 -> 38 (``round()`` would
    give 12 and 38).
    """
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    return (2 * numerator + denominator) // (2 * denominator)


def is_targeted(session: Session, student_id: str) -> bool:
    if not session.target_student_ids:
        return True
    return student_id in session.target_student_ids


def applicable_sessions(student: Student, sessions: Iterable[Session]) -> List[Session]:
    """Sessions that count toward the student's attendance.

    A session applies when it belongs to one of the student's classes, is
    COMPLETED, and either targets the whole class or lists the student.
    Status is checked here even when the caller already filtered on it.
    """
    class_ids = set(student.class_ids or ())
    seen: set[str] = set()
    out: List[Session] = []

    for s in sessions:
        if s.class_id not in class_ids:
            continue
        if s.status != SessionStatus.COMPLETED:
            continue
        if not is_targeted(s, student.student_id):
            continue
        if s.session_id in seen:
            continue
        seen.add(s.session_id)
        out.append(s)

    return out


def _index_records(records: Iterable[AttendanceRecord]) -> Dict[Tuple[str, str], AttendanceRecord]:
    return {r.key: r for r in records}


def compute_percentage(
    student: Student,
    applicable: Sequence[Session],
    records: Iterable[AttendanceRecord],
) -> int:
    """Percentage of applicable sessions the student was PRESENT at.

    A missing record counts as not present. Returns 0 when nothing applies.
    """
    total = len(applicable)
    if total == 0:
        return 0

    by_key = _index_records(records)
    present = 0
    for s in applicable:
        rec = by_key.get((s.session_id, student.student_id))
        if rec is not None and rec.status == AttendanceStatus.PRESENT:
            present += 1

    return round_half_up(present * 100, total)


def compute_attendance_percentage(
    student: Student,
    sessions: Iterable[Session],
    records: Iterable[AttendanceRecord],
) -> int:
    return compute_percentage(student, applicable_sessions(student, sessions), records)


def average_attendance(
    students: Sequence[Student],
    sessions: Sequence[Session],
    records: Sequence[AttendanceRecord],
) -> int:
    """Mean of the per-student percentages (0 for an empty population)."""
    if not students:
        return 0
    total = sum(compute_attendance_percentage(st, sessions, records) for st in students)
    return round_half_up(total, len(students))


def class_attendance(
    class_id: str,
    students: Sequence[Student],
    sessions: Sequence[Session],
    records: Sequence[AttendanceRecord],
) -> int:
    """Share of (student, session) pairs in a class marked PRESENT.

    Only pairs where the session applies to the student are counted, so
    targeted sessions do not penalise students who were not invited.
    """
    class_sessions = [s for s in sessions if s.class_id == class_id]
    by_key = _index_records(records)

    expected = 0
    present = 0
    for st in students:
        if class_id not in (st.class_ids or ()):
            continue
        for s in applicable_sessions(st, class_sessions):
            expected += 1
            rec = by_key.get((s.session_id, st.student_id))
            if rec is not None and rec.status == AttendanceStatus.PRESENT:
                present += 1

    if expected == 0:
        return 0
    return round_half_up(present * 100, expected)
