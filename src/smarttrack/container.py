from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.locks import UserLockRegistry
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy.base import HoursPolicy
from .attendance.policy.standard_policy import StandardHoursPolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.summary import DaySummaryService
from .core.constants import DEFAULT_UTC_OFFSET_MINUTES
from .core.enums import MatchPolicy
from .database.connection import DBConfig, DatabaseConnection
from .offices.mysql_office_repository import MySQLOfficeRepository
from .offices.repository import OfficeRepository
from .reports.service import AttendanceLogService, RosterReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    offices_repo: OfficeRepository
    users_repo: UserRepository

    attendance_service: AttendanceService
    day_summary_service: DaySummaryService
    roster_service: RosterReportService
    attendance_log_service: AttendanceLogService

    offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES


def wire_services(
    *,
    attendance_repo: AttendanceRepository,
    offices_repo: OfficeRepository,
    users_repo: UserRepository,
    offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    match_policy: MatchPolicy | str = MatchPolicy.FIRST,
    policy: Optional[HoursPolicy] = None,
) -> Container:
    policy = policy or StandardHoursPolicy()

    attendance_service = AttendanceService(
        attendance_repo,
        offices_repo,
        locks=UserLockRegistry(),
        offset_minutes=offset_minutes,
        match_policy=MatchPolicy(match_policy),
    )
    day_summary_service = DaySummaryService(attendance_repo, offices_repo, policy=policy, offset_minutes=offset_minutes)
    roster_service = RosterReportService(
        attendance_repo,
        users_repo,
        offices_repo,
        policy=policy,
        offset_minutes=offset_minutes,
    )

    return Container(
        attendance_repo=attendance_repo,
        offices_repo=offices_repo,
        users_repo=users_repo,
        attendance_service=attendance_service,
        day_summary_service=day_summary_service,
        roster_service=roster_service,
        attendance_log_service=AttendanceLogService(
            attendance_repo,
            users_repo,
            offices_repo,
            offset_minutes=offset_minutes,
        ),
        offset_minutes=int(offset_minutes),
    )


def build_container(
    *,
    db_config: dict,
    offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    match_policy: MatchPolicy | str = MatchPolicy.FIRST,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        attendance_repo=MySQLAttendanceRepository(conn),
        offices_repo=MySQLOfficeRepository(conn),
        users_repo=MySQLUserRepository(conn),
        offset_minutes=offset_minutes,
        match_policy=match_policy,
    )
