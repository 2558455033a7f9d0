from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Sequence

from ..attendance.calculator import applicable_sessions, compute_percentage
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_SYNC_WORKERS
from ..core.enums import SyncOutcome
from ..core.exceptions import NotFoundError
from ..core.result import Err, Ok, Result
from ..sessions.model import Session
from ..sessions.repository import SessionRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import StudentOutcome, SyncSummary
from .report import ReportBuilder

logger = logging.getLogger(__name__)

FetchSessions = Callable[[Sequence[str]], Sequence[Session]]
FetchAttendance = Callable[[str, Sequence[str]], Sequence[AttendanceRecord]]
ApplyUpdate = Callable[[str, int], bool]


def compute_for_student(
    student: Student,
    *,
    fetch_sessions: FetchSessions,
    fetch_attendance: FetchAttendance,
) -> Result[int]:
    """Fetch what the student needs and compute the authoritative percentage.

    Fetch failures come back as Err so a legitimate 0% is never confused with
    a failure.
    """
    try:
        sessions = fetch_sessions(list(student.class_ids))
        applicable = applicable_sessions(student, sessions)
        if applicable:
            records = fetch_attendance(student.student_id, [s.session_id for s in applicable])
        else:
            records = []
    except Exception as e:
        logger.warning("Attendance fetch failed for student %s (%s): %s", student.student_id, student.name, e)
        return Err(f"fetch failed: {e}")

    return Ok(compute_percentage(student, applicable, records))


def reconcile_student(
    student: Student,
    *,
    fetch_sessions: FetchSessions,
    fetch_attendance: FetchAttendance,
    apply_update: ApplyUpdate,
    dry_run: bool = False,
) -> StudentOutcome:
    result = compute_for_student(student, fetch_sessions=fetch_sessions, fetch_attendance=fetch_attendance)
    if isinstance(result, Err):
        return StudentOutcome(
            student_id=student.student_id,
            name=student.name,
            outcome=SyncOutcome.ERROR,
            error=result.reason,
        )

    computed = result.value
    previous = student.attendance_cached or 0
    base = dict(student_id=student.student_id, name=student.name, previous=previous, computed=computed)

    if computed == previous:
        return StudentOutcome(outcome=SyncOutcome.UNCHANGED, **base)

    if dry_run:
        return StudentOutcome(outcome=SyncOutcome.WOULD_UPDATE, **base)

    try:
        written = apply_update(student.student_id, computed)
    except Exception as e:
        logger.warning("Attendance write failed for student %s (%s): %s", student.student_id, student.name, e)
        return StudentOutcome(outcome=SyncOutcome.ERROR, error=f"write failed: {e}", **base)

    if not written:
        logger.warning("Attendance write for student %s changed no rows", student.student_id)
        return StudentOutcome(outcome=SyncOutcome.ERROR, error="write failed: no row updated", **base)

    logger.info("Student %s attendance %s%% -> %s%%", student.student_id, previous, computed)
    return StudentOutcome(outcome=SyncOutcome.UPDATED, **base)


def reconcile(
    students: Iterable[Student],
    *,
    fetch_sessions: FetchSessions,
    fetch_attendance: FetchAttendance,
    apply_update: ApplyUpdate,
    dry_run: bool = False,
    max_workers: int = 1,
) -> SyncSummary:
    """Recompute every student's attendance and fix stale cached values.

    Each student is one task; with max_workers > 1 the tasks run on a bounded
    thread pool. Outcomes are sorted by student id before the report is built,
    so the summary does not depend on execution order.
    """
    ordered = sorted(students, key=lambda s: s.student_id)

    def task(student: Student) -> StudentOutcome:
        return reconcile_student(
            student,
            fetch_sessions=fetch_sessions,
            fetch_attendance=fetch_attendance,
            apply_update=apply_update,
            dry_run=dry_run,
        )

    if max_workers <= 1 or len(ordered) <= 1:
        outcomes: List[StudentOutcome] = [task(s) for s in ordered]
    else:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="attendance-sync") as pool:
            outcomes = list(pool.map(task, ordered))

    builder = ReportBuilder(dry_run=dry_run)
    for outcome in sorted(outcomes, key=lambda o: o.student_id):
        builder.add(outcome)
    return builder.build()


class AttendanceSyncService:
    """Brings `students.attendance` back in line with the raw records."""

    def __init__(
        self,
        students: StudentRepository,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        *,
        max_workers: int = DEFAULT_SYNC_WORKERS,
    ):
        self._students = students
        self._sessions = sessions
        self._attendance = attendance
        self._max_workers = max(1, int(max_workers))

    def run(self, *, dry_run: bool = False) -> SyncSummary:
        # Population fetch failures propagate: no partial report.
        students = self._students.list_students()
        logger.info("Found %d students%s", len(students), " (dry run)" if dry_run else "")
        return self._sync(students, dry_run=dry_run)

    def run_class(self, class_id: str, *, dry_run: bool = False) -> SyncSummary:
        """Reconcile only the students enrolled in `class_id`."""
        students = [s for s in self._students.list_students() if class_id in s.class_ids]
        logger.info("Found %d students in class %s%s", len(students), class_id, " (dry run)" if dry_run else "")
        return self._sync(students, dry_run=dry_run)

    def run_student(self, student_id: str, *, dry_run: bool = False) -> StudentOutcome:
        student = self._students.get_by_id(student_id)
        if student is None:
            raise NotFoundError(f"Student {student_id} not found")

        return reconcile_student(
            student,
            fetch_sessions=self._sessions.list_completed_for_classes,
            fetch_attendance=self._attendance.list_for_student_and_sessions,
            apply_update=self._students.update_attendance,
            dry_run=dry_run,
        )

    def _sync(self, students: Sequence[Student], *, dry_run: bool) -> SyncSummary:
        summary = reconcile(
            students,
            fetch_sessions=self._sessions.list_completed_for_classes,
            fetch_attendance=self._attendance.list_for_student_and_sessions,
            apply_update=self._students.update_attendance,
            dry_run=dry_run,
            max_workers=self._max_workers,
        )

        logger.info(
            "Sync finished: total=%d updated=%d unchanged=%d errors=%d",
            summary.total,
            summary.updated,
            summary.unchanged,
            summary.errors,
        )
        return summary
