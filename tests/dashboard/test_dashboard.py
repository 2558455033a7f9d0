from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest
from flask import Flask

from src.insight_edu.insight_edu.attendance.model import AttendanceRecord
from src.insight_edu.insight_edu.container import build_services
from src.insight_edu.insight_edu.core.enums import AttendanceStatus, SessionStatus
from src.insight_edu.insight_edu.core.exceptions import DataStoreError, NotFoundError
from src.insight_edu.insight_edu.dashboard.controller import register
from src.insight_edu.insight_edu.sessions.model import Session
from src.insight_edu.insight_edu.students.model import Student


class InMemoryStudents:
    def __init__(self, students):
        self._by_id = {s.student_id: s for s in students}
        self.broken = False

    def list_students(self):
        if self.broken:
            raise DataStoreError("gone away")
        return sorted(self._by_id.values(), key=lambda s: s.student_id)

    def get_by_id(self, student_id: str) -> Optional[Student]:
        if self.broken:
            raise DataStoreError("gone away")
        return self._by_id.get(student_id)

    def update_attendance(self, student_id: str, percentage: int) -> bool:
        self._by_id[student_id] = replace(self._by_id[student_id], attendance_cached=percentage)
        return True


class InMemorySessions:
    def __init__(self, sessions):
        self._sessions = list(sessions)

    def list_completed_for_classes(self, class_ids):
        return [s for s in self._sessions if s.class_id in class_ids and s.status == SessionStatus.COMPLETED]


class InMemoryAttendance:
    def __init__(self, records):
        self._records = list(records)

    def list_for_student_and_sessions(self, student_id, session_ids):
        return [r for r in self._records if r.student_id == student_id and r.session_id in session_ids]


def _mark(sid, student_id, status=AttendanceStatus.PRESENT):
    return AttendanceRecord(session_id=sid, student_id=student_id, status=status)


@pytest.fixture
def container():
    students = InMemoryStudents(
        [
            Student(student_id="S1", name="Ana", class_ids=("C1",), attendance_cached=100),
            Student(student_id="S2", name="Bo", class_ids=("C1", "C2"), attendance_cached=90),
            Student(student_id="S3", name="Cy", class_ids=("C2",), attendance_cached=None),
        ]
    )
    sessions = InMemorySessions(
        [
            Session(session_id="A", class_id="C1", status=SessionStatus.COMPLETED),
            Session(session_id="B", class_id="C1", status=SessionStatus.COMPLETED),
            Session(session_id="C", class_id="C1", status=SessionStatus.SCHEDULED),
            Session(session_id="D", class_id="C2", status=SessionStatus.COMPLETED, target_student_ids=("S3",)),
        ]
    )
    attendance = InMemoryAttendance(
        [
            _mark("A", "S1"),
            _mark("B", "S1"),
            _mark("A", "S2"),
            _mark("B", "S2", AttendanceStatus.ABSENT),
            _mark("D", "S3"),
        ]
    )
    return build_services(students, sessions, attendance, max_workers=1)


@pytest.fixture
def client(container):
    app = Flask(__name__)
    register(app, container)
    return app.test_client()


def test_student_view_flags_stale_cache(container):
    view = container.dashboard_service.student_attendance("S2")

    assert view.computed == 50
    assert view.cached == 90
    assert view.stale is True
    assert container.dashboard_service.student_attendance("S1").stale is False


def test_unknown_student_raises(container):
    with pytest.raises(NotFoundError):
        container.dashboard_service.student_attendance("NOPE")


def test_class_attendance(container):
    # C1: S1 2/2, S2 1/2 -> 3/4
    assert container.dashboard_service.class_attendance("C1") == {"class_id": "C1", "students": 2, "attendance": 75}
    # C2: only S3 is targeted by D
    assert container.dashboard_service.class_attendance("C2")["attendance"] == 100


def test_overview_average_and_stale_list(container):
    overview = container.dashboard_service.overview()

    computed = {s["student_id"]: s["computed"] for s in overview["students"]}
    assert computed == {"S1": 100, "S2": 50, "S3": 100}
    assert overview["average"] == 83
    assert overview["stale"] == ["S2", "S3"]


def test_live_numbers_match_what_sync_writes(container):
    live = {s["student_id"]: s["computed"] for s in container.dashboard_service.overview()["students"]}

    container.sync_service.run()

    assert {sid: container.students_repo.get_by_id(sid).attendance_cached for sid in live} == live
    assert container.dashboard_service.overview()["stale"] == []


def test_student_endpoint(client):
    resp = client.get("/api/students/S2/attendance")

    assert resp.status_code == 200
    assert resp.get_json() == {"student_id": "S2", "name": "Bo", "cached": 90, "computed": 50, "stale": True}


def test_student_endpoint_404(client):
    resp = client.get("/api/students/NOPE/attendance")

    assert resp.status_code == 404
    assert "NOPE" in resp.get_json()["error"]


def test_class_and_dashboard_endpoints(client):
    assert client.get("/api/classes/C1/attendance").get_json()["attendance"] == 75
    assert client.get("/api/dashboard/attendance").get_json()["average"] == 83


def test_endpoints_report_store_outage(container, client):
    container.students_repo.broken = True

    assert client.get("/api/students/S1/attendance").status_code == 503
    assert client.get("/api/dashboard/attendance").status_code == 503
