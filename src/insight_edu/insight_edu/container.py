from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .core.constants import DEFAULT_SYNC_WORKERS
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection
from .reconciliation.service import AttendanceSyncService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository

    sync_service: AttendanceSyncService
    dashboard_service: DashboardService


def build_services(
    students_repo: StudentRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    *,
    max_workers: int = DEFAULT_SYNC_WORKERS,
) -> Container:
    return Container(
        students_repo=students_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        sync_service=AttendanceSyncService(
            students_repo,
            sessions_repo,
            attendance_repo,
            max_workers=max_workers,
        ),
        dashboard_service=DashboardService(students_repo, sessions_repo, attendance_repo),
    )


def build_container(*, conn: DatabaseConnection, max_workers: int = DEFAULT_SYNC_WORKERS) -> Container:
    """Wire the MySQL repositories around an already opened connection."""
    return build_services(
        MySQLStudentRepository(conn),
        MySQLSessionRepository(conn),
        MySQLAttendanceRepository(conn),
        max_workers=max_workers,
    )
