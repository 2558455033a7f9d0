from __future__ import annotations

import mysql.connector
import pytest

from src.insight_edu.insight_edu.core.exceptions import DataStoreError
from src.insight_edu.insight_edu.database.connection import DatabaseConnection, DBConfig
from src.insight_edu.insight_edu.database.mysql_base import db_cursor, in_clause, parse_id_list


class FakeCursor:
    def __init__(self, fail_with=None):
        self.closed = False
        self.executed = []
        self._fail_with = fail_with

    def execute(self, sql, params=None):
        if self._fail_with:
            raise self._fail_with
        self.executed.append((sql, params))

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn):
        self._conn = conn

    def connect(self):
        return self._conn


def test_db_cursor_commits_and_closes():
    conn = FakeConn(FakeCursor())

    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.committed and conn.closed and cur.closed
    assert not conn.rolled_back


def test_db_cursor_wraps_connector_errors():
    conn = FakeConn(FakeCursor(fail_with=mysql.connector.Error("Table 'students' doesn't exist")))

    with pytest.raises(DataStoreError, match="students"):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("SELECT * FROM students")

    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_db_cursor_rolls_back_on_other_errors():
    conn = FakeConn(FakeCursor())

    with pytest.raises(RuntimeError):
        with db_cursor(FakeFactory(conn)):
            raise RuntimeError("boom")

    assert conn.rolled_back and conn.closed


def test_closed_connection_refuses_to_connect():
    db = DatabaseConnection(DBConfig(host="localhost", port=3306, user="root", password="", database="insight_edu"))

    assert db.is_open is False
    with pytest.raises(DataStoreError):
        db.connect()


def test_open_failure_raises_data_store_error(monkeypatch):
    def refuse(**kwargs):
        raise mysql.connector.Error("Can't connect to MySQL server")

    monkeypatch.setattr(mysql.connector, "connect", refuse)
    db = DatabaseConnection(DBConfig.from_dict({"host": "db", "user": "u", "password": "p", "database": "x"}))

    with pytest.raises(DataStoreError, match="u@db:3306/x"):
        with db:
            pass

    assert db.is_open is False


def test_context_manager_opens_and_closes(monkeypatch):
    class StubConnection:
        def ping(self, reconnect=False):
            pass

        def close(self):
            pass

    monkeypatch.setattr(mysql.connector, "connect", lambda **kwargs: StubConnection())
    db = DatabaseConnection(DBConfig.from_dict({"host": "db", "user": "u", "password": "p", "database": "x"}))

    with db as opened:
        assert opened.is_open
        assert isinstance(db.connect(), StubConnection)

    assert db.is_open is False


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", ()),
        ("[]", ()),
        ('["S1", "S2"]', ("S1", "S2")),
        (b'["S1"]', ("S1",)),
        (["C1", 2], ("C1", "2")),
        ("null", None),
        (b"null", None),
    ],
)
def test_parse_id_list(raw, expected):
    assert parse_id_list(raw) == expected


def test_parse_id_list_rejects_unknown_types():
    with pytest.raises(TypeError):
        parse_id_list(42)


def test_in_clause():
    assert in_clause(["a", "b", "c"]) == "%s, %s, %s"
    with pytest.raises(ValueError):
        in_clause([])
