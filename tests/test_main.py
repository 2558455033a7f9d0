from __future__ import annotations

from src.insight_edu.insight_edu import main


class FakeDatabase:
    def __init__(self):
        self.closed = False

    def open(self):
        return self

    def close(self):
        self.closed = True

    def describe(self):
        return "root@localhost:3306/insight_edu_test"


def test_create_app_releases_store_at_exit(monkeypatch):
    db = FakeDatabase()
    exit_hooks = []
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(main, "DatabaseConnection", lambda config: db)
    monkeypatch.setattr(main.atexit, "register", exit_hooks.append)

    app = main.create_app()

    assert db.closed is False
    for hook in exit_hooks:
        hook()
    assert db.closed is True
    assert app.extensions["insight_edu"].sync_service is not None


def test_create_app_registers_dashboard_and_sync_routes(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(main, "DatabaseConnection", lambda config: FakeDatabase())
    monkeypatch.setattr(main.atexit, "register", lambda hook: hook)

    rules = {rule.rule for rule in main.create_app().url_map.iter_rules()}

    assert "/api/dashboard/attendance" in rules
    assert "/api/sync/attendance" in rules
    assert "/api/sync/attendance/student/<student_id>" in rules
    assert "/api/sync/attendance/class/<class_id>" in rules
