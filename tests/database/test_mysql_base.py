from __future__ import annotations

from datetime import datetime, timezone

import mysql.connector
import pytest
from mysql.connector import errorcode

from smarttrack.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from smarttrack.attendance.service import AttendanceService
from smarttrack.core.exceptions import AlreadyCheckedInError, StoreConflictError, StoreError
from smarttrack.database.mysql_base import db_cursor


class FakeCursor:
    def __init__(self, insert_error=None):
        self._insert_error = insert_error
        self.closed = False

    def execute(self, sql, params=None):
        if self._insert_error is not None and sql.lstrip().upper().startswith("INSERT"):
            raise self._insert_error

    def fetchone(self):
        return None

    def fetchall(self):
        return []

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, insert_error=None):
        self.cur = FakeCursor(insert_error)
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, insert_error=None):
        self._insert_error = insert_error
        self.connections: list[FakeConnection] = []

    def connect(self, *, with_database: bool = True):
        conn = FakeConnection(self._insert_error)
        self.connections.append(conn)
        return conn


def fk_error():
    return mysql.connector.IntegrityError(
        msg="Cannot add or update a child row: a foreign key constraint fails (fk_segments_user)",
        errno=errorcode.ER_NO_REFERENCED_ROW_2,
    )


def dup_error():
    return mysql.connector.IntegrityError(
        msg="Duplicate entry '1-2026-03-10' for key 'uq_segments_one_open'",
        errno=errorcode.ER_DUP_ENTRY,
    )


def test_cursor_commits_and_closes_on_success():
    factory = FakeConnectionFactory()

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    conn = factory.connections[0]
    assert conn.committed and conn.closed and conn.cur.closed


def test_duplicate_key_is_a_store_conflict():
    factory = FakeConnectionFactory(insert_error=dup_error())

    with pytest.raises(StoreConflictError):
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT INTO attendance_segments VALUES (1)")

    assert factory.connections[0].rolled_back


def test_foreign_key_failure_is_a_plain_store_error(caplog):
    factory = FakeConnectionFactory(insert_error=fk_error())

    with pytest.raises(StoreError) as excinfo:
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT INTO attendance_segments VALUES (1)")

    assert not isinstance(excinfo.value, StoreConflictError)
    assert factory.connections[0].rolled_back
    assert "foreign key constraint fails" in caplog.text


def test_check_in_with_missing_user_row_is_not_reported_as_checked_in(offices_repo, head_office):
    now = datetime(2026, 3, 10, 4, 30, tzinfo=timezone.utc)
    svc = AttendanceService(MySQLAttendanceRepository(FakeConnectionFactory(insert_error=fk_error())), offices_repo)

    with pytest.raises(StoreError) as excinfo:
        svc.check_in(1, head_office.latitude, head_office.longitude, now=now)

    assert not isinstance(excinfo.value, StoreConflictError)


def test_check_in_duplicate_key_is_reported_as_checked_in(offices_repo, head_office):
    now = datetime(2026, 3, 10, 4, 30, tzinfo=timezone.utc)
    svc = AttendanceService(MySQLAttendanceRepository(FakeConnectionFactory(insert_error=dup_error())), offices_repo)

    with pytest.raises(AlreadyCheckedInError):
        svc.check_in(1, head_office.latitude, head_office.longitude, now=now)
