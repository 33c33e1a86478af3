from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..attendance.policy.base import HoursPolicy
from ..attendance.policy.standard_policy import StandardHoursPolicy
from ..attendance.repository import AttendanceRepository
from ..attendance.summary import to_segment_view
from ..common.datetime_utils import (
    civil_day_window,
    civil_range_window,
    ensure_utc,
    hours_between,
    is_civil_today,
    now_utc,
)
from ..common.validators import round_hours
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_UTC_OFFSET_MINUTES
from ..core.enums import Role, SessionState
from ..core.exceptions import AuthorizationError, NotFoundError
from ..offices.repository import OfficeRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import AttendanceLog, AttendanceLogRow, RosterReport, RosterRow

logger = logging.getLogger(__name__)

ROSTER_ROLES = frozenset({Role.HR, Role.ADMIN})
UNKNOWN_USER = "Unknown User"


def _require_roster_role(role: Role | str, message: str) -> None:
    try:
        role = Role(role)
    except ValueError:
        role = None
    if role not in ROSTER_ROLES:
        raise AuthorizationError(message)


class RosterReportService:
    """Use case: every employee's status for one civil day (HR/admin view)."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        offices: OfficeRepository,
        *,
        policy: Optional[HoursPolicy] = None,
        offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    ):
        self._attendance = attendance
        self._users = users
        self._offices = offices
        self._policy = policy or StandardHoursPolicy()
        self._offset = int(offset_minutes)

    def roster_for_date(self, day: date, *, role: Role | str, now: datetime | None = None) -> RosterReport:
        _require_roster_role(role, "Forbidden: Only HR or Admin can view all employee statuses.")

        now = ensure_utc(now or now_utc())
        is_today = is_civil_today(day, now, self._offset)

        employees = self._users.list_by_role(Role.EMPLOYEE)
        segments = self._attendance.list_in_window(civil_day_window(day, self._offset))
        office_names = self._offices.names_by_id() if segments else {}

        total_map: dict[int, float] = {}
        latest_map = {}
        for s in segments:
            total_map[s.user_id] = total_map.get(s.user_id, 0.0) + (s.total_hours or 0.0)
            latest = latest_map.get(s.user_id)
            if latest is None or s.checkin_time > latest.checkin_time:
                latest_map[s.user_id] = s

        report: list[RosterRow] = []
        for user in employees:
            total = total_map.get(user.user_id, 0.0)
            latest = latest_map.get(user.user_id)

            status = SessionState.ABSENT
            checkin_office = None
            checkout_office = None
            if latest is not None:
                status = SessionState.CHECKED_IN if latest.is_open else SessionState.CHECKED_OUT
                checkin_office = office_names.get(latest.checkin_office_id)
                if latest.checkout_office_id is not None:
                    checkout_office = office_names.get(latest.checkout_office_id)
                if latest.is_open and is_today:
                    total += hours_between(latest.checkin_time, now)

            report.append(
                RosterRow(
                    user_id=user.user_id,
                    employee_id=user.employee_id,
                    name=user.name,
                    email=user.email,
                    total_hours_today=round_hours(total),
                    overall_status=status,
                    day_status=self._policy.day_status(total),
                    checkin_office=checkin_office,
                    checkout_office=checkout_office,
                )
            )

        report.sort(key=lambda r: (r.name or "").casefold())
        logger.debug("Roster for %s: %d employees, %d segments", day, len(report), len(segments))
        return RosterReport(date=day.strftime("%d/%m/%Y"), report=report)


class AttendanceLogService:
    """Use case: segments of all employees over a civil date range (HR/admin view)."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        offices: OfficeRepository,
        *,
        offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    ):
        self._attendance = attendance
        self._users = users
        self._offices = offices
        self._offset = int(offset_minutes)

    def list_segments(
        self,
        *,
        start: date,
        end: date,
        role: Role | str,
        employee_id: Optional[str] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> AttendanceLog:
        _require_roster_role(role, "Forbidden: Insufficient permissions to access this report.")
        window = civil_range_window(start, end, self._offset)

        users: dict[int, Optional[User]] = {}
        if employee_id:
            user = self._users.get_by_employee_id(employee_id)
            if user is None:
                raise NotFoundError(f'Employee ID "{employee_id}" not found.')
            users[user.user_id] = user
            segments = self._attendance.list_for_user(user.user_id, window, newest_first=True, limit=limit)
        else:
            segments = self._attendance.list_in_window(window, limit=limit)

        office_names = self._offices.names_by_id() if segments else {}
        rows: list[AttendanceLogRow] = []
        for s in segments:
            if s.user_id not in users:
                users[s.user_id] = self._users.get_by_id(s.user_id)
            user = users[s.user_id]
            view = to_segment_view(s, office_names, offset_minutes=self._offset, with_date=True)
            rows.append(
                AttendanceLogRow(
                    segment_id=s.segment_id,
                    employee_id=user.employee_id if user else None,
                    name=user.name if user else UNKNOWN_USER,
                    email=user.email if user else None,
                    role=user.role.value if user else None,
                    work_date=view.work_date,
                    check_in_time_ist=view.check_in_time_ist,
                    check_out_time_ist=view.check_out_time_ist,
                    checkin_office_name=view.checkin_office_name,
                    checkout_office_name=view.checkout_office_name,
                    total_hours=s.total_hours,
                    status=view.status,
                )
            )

        logger.debug("Attendance listing %s..%s employee=%s: %d segments", start, end, employee_id, len(rows))
        return AttendanceLog(start=start.isoformat(), end=end.isoformat(), employee_id=employee_id, logs=rows)
