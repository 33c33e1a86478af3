from __future__ import annotations

import threading
import time
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Optional

import pytest

from smarttrack.attendance.model import AttendanceSegment
from smarttrack.common.datetime_utils import TimeWindow
from smarttrack.core.enums import Role
from smarttrack.core.exceptions import StoreConflictError
from smarttrack.offices.model import Office
from smarttrack.users.model import User

HEAD_OFFICE = Office(office_id=1, name="Head Office", latitude=12.9715987, longitude=77.5945627, radius_meters=150)
TECH_PARK = Office(office_id=2, name="Tech Park", latitude=12.9352, longitude=77.6245, radius_meters=200)


class InMemoryAttendance:
    """Fake store with the same one-open-segment-per-day key as the MySQL schema."""

    def __init__(self, *, enforce_unique: bool = True, read_delay: float = 0.0):
        self._segments: dict[int, AttendanceSegment] = {}
        self._id = 0
        self._mutex = threading.Lock()
        self._enforce_unique = enforce_unique
        self._read_delay = read_delay

    @property
    def segments(self) -> list[AttendanceSegment]:
        return sorted(self._segments.values(), key=lambda s: s.segment_id)

    def open_segments(self, user_id: int) -> list[AttendanceSegment]:
        return [s for s in self._segments.values() if s.user_id == user_id and s.is_open]

    def add(self, segment: AttendanceSegment) -> AttendanceSegment:
        self._id = max(self._id, segment.segment_id)
        self._segments[segment.segment_id] = segment
        return segment

    def _in_window(self, window: TimeWindow):
        return [s for s in self._segments.values() if window.contains(s.checkin_time)]

    def find_open_segment(self, user_id: int, window: TimeWindow) -> Optional[AttendanceSegment]:
        if self._read_delay:
            time.sleep(self._read_delay)
        items = [s for s in self._in_window(window) if s.user_id == user_id and s.is_open]
        items.sort(key=lambda s: s.checkin_time, reverse=True)
        return items[0] if items else None

    def list_for_user(self, user_id: int, window: TimeWindow, *, newest_first: bool = False, limit=None):
        items = [s for s in self._in_window(window) if s.user_id == user_id]
        items.sort(key=lambda s: s.checkin_time, reverse=newest_first)
        return items[:limit] if limit is not None else items

    def list_in_window(self, window: TimeWindow, *, limit=None):
        items = self._in_window(window)
        items.sort(key=lambda s: s.checkin_time, reverse=True)
        return items[:limit] if limit is not None else items

    def insert_segment(self, *, user_id, work_date, office_id, latitude, longitude, checkin_time, status):
        with self._mutex:
            if self._enforce_unique and any(
                s.user_id == user_id and s.is_open and s.work_date == work_date for s in self._segments.values()
            ):
                raise StoreConflictError("Duplicate entry for key 'uq_segments_one_open'")
            self._id += 1
            segment = AttendanceSegment(
                segment_id=self._id,
                user_id=user_id,
                work_date=work_date,
                checkin_office_id=office_id,
                checkin_latitude=latitude,
                checkin_longitude=longitude,
                checkin_time=checkin_time,
                status=status,
            )
            self._segments[segment.segment_id] = segment
            return segment

    def close_segment(self, *, segment_id, office_id, latitude, longitude, checkout_time, total_hours):
        with self._mutex:
            current = self._segments.get(segment_id)
            if current is None or not current.is_open:
                return None
            closed = replace(
                current,
                checkout_office_id=office_id,
                checkout_latitude=latitude,
                checkout_longitude=longitude,
                checkout_time=checkout_time,
                total_hours=total_hours,
            )
            self._segments[segment_id] = closed
            return closed


class InMemoryOffices:
    def __init__(self, offices: list[Office]):
        self._offices = list(offices)
        self.list_calls = 0

    def list_all(self):
        self.list_calls += 1
        return list(self._offices)

    def names_by_id(self):
        return {o.office_id: o.name for o in self._offices}


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self._users = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.employee_id == employee_id), None)

    def list_by_role(self, role: Role):
        return [u for u in self._users.values() if u.role == Role(role)]


def make_segment(
    segment_id: int,
    user_id: int,
    checkin_time: datetime,
    checkout_time: Optional[datetime] = None,
    *,
    total_hours: Optional[float] = None,
    work_date: Optional[date] = None,
    office_id: int = 1,
) -> AttendanceSegment:
    closed = checkout_time is not None
    return AttendanceSegment(
        segment_id=segment_id,
        user_id=user_id,
        work_date=work_date or checkin_time.date(),
        checkin_office_id=office_id,
        checkin_latitude=HEAD_OFFICE.latitude,
        checkin_longitude=HEAD_OFFICE.longitude,
        checkin_time=checkin_time,
        checkout_office_id=office_id if closed else None,
        checkout_latitude=HEAD_OFFICE.latitude if closed else None,
        checkout_longitude=HEAD_OFFICE.longitude if closed else None,
        checkout_time=checkout_time,
        total_hours=total_hours,
    )


@pytest.fixture
def fixed_now() -> datetime:
    # 2026-03-10 10:00 at UTC+05:30
    return datetime(2026, 3, 10, 4, 30, tzinfo=timezone.utc)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def offices_repo() -> InMemoryOffices:
    return InMemoryOffices([HEAD_OFFICE, TECH_PARK])


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            User(user_id=1, name="Zara Khan", email="zara@example.com", role=Role.EMPLOYEE, employee_id="EMP003"),
            User(user_id=2, name="asha Rao", email="asha@example.com", role=Role.EMPLOYEE, employee_id="EMP001"),
            User(user_id=3, name="Bob Mathew", email="bob@example.com", role=Role.EMPLOYEE, employee_id="EMP002"),
            User(user_id=9, name="Meera Nair", email="meera@example.com", role=Role.HR, employee_id="HR001"),
        ]
    )


@pytest.fixture
def head_office() -> Office:
    return HEAD_OFFICE


@pytest.fixture
def tech_park() -> Office:
    return TECH_PARK
