from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import civil_day_window, civil_range_window, ensure_utc, format_civil_time, hours_between, now_utc
from ..common.validators import round_hours
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_UTC_OFFSET_MINUTES
from ..core.enums import SegmentProgress, SessionState
from ..offices.repository import OfficeRepository
from .model import AttendanceSegment, DaySummary, SegmentView
from .policy.base import HoursPolicy
from .policy.standard_policy import StandardHoursPolicy
from .repository import AttendanceRepository

UNKNOWN_OFFICE = "Unknown"
IN_SESSION = "In Session"


def worked_hours(segments: Sequence[AttendanceSegment], now: datetime) -> float:
    """Closed segment hours plus the running time of any open segment (unrounded)."""
    total = 0.0
    for s in segments:
        if s.is_open:
            total += hours_between(s.checkin_time, now)
        else:
            total += s.total_hours or 0.0
    return total


def overall_status(segments: Sequence[AttendanceSegment], total_hours: float) -> SessionState:
    if any(s.is_open for s in segments):
        return SessionState.CHECKED_IN
    if total_hours > 0:
        return SessionState.CHECKED_OUT
    return SessionState.ABSENT


def to_segment_view(
    segment: AttendanceSegment,
    office_names: Mapping[int, str],
    *,
    offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    with_date: bool = False,
) -> SegmentView:
    checkin_office = office_names.get(segment.checkin_office_id) or UNKNOWN_OFFICE
    if segment.is_open:
        checkout_office = IN_SESSION
    else:
        checkout_office = office_names.get(segment.checkout_office_id) or UNKNOWN_OFFICE

    return SegmentView(
        segment_id=segment.segment_id,
        check_in_time_ist=format_civil_time(segment.checkin_time, offset_minutes),
        check_out_time_ist=format_civil_time(segment.checkout_time, offset_minutes),
        status=SegmentProgress.CHECKED_IN if segment.is_open else SegmentProgress.COMPLETED,
        total_hours=segment.total_hours,
        checkin_office_name=checkin_office,
        checkout_office_name=checkout_office,
        work_date=segment.work_date.isoformat() if with_date else None,
    )


class DaySummaryService:
    """Use case: a user's segments and totals for a civil day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        offices: OfficeRepository,
        *,
        policy: Optional[HoursPolicy] = None,
        offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
    ):
        self._attendance = attendance
        self._offices = offices
        self._policy = policy or StandardHoursPolicy()
        self._offset = int(offset_minutes)

    def summarize_day(self, user_id: int, day: date, *, now: datetime | None = None) -> DaySummary:
        now = ensure_utc(now or now_utc())
        segments = self._attendance.list_for_user(user_id, civil_day_window(day, self._offset))

        if not segments:
            return DaySummary(
                user_id=user_id,
                date=day,
                total_hours_sum=0.0,
                total_overtime_sum=0.0,
                day_status=self._policy.day_status(0.0),
                overall_status=SessionState.ABSENT,
                segments=[],
            )

        total = worked_hours(segments, now)
        office_names = self._offices.names_by_id()

        return DaySummary(
            user_id=user_id,
            date=day,
            total_hours_sum=round_hours(total),
            total_overtime_sum=round_hours(self._policy.overtime(total)),
            day_status=self._policy.day_status(total),
            overall_status=overall_status(segments, total),
            segments=[to_segment_view(s, office_names, offset_minutes=self._offset) for s in segments],
        )

    def history(
        self,
        user_id: int,
        *,
        start: date,
        end: date,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[SegmentView]:
        window = civil_range_window(start, end, self._offset)
        segments = self._attendance.list_for_user(user_id, window, newest_first=True, limit=limit)
        if not segments:
            return []

        office_names = self._offices.names_by_id()
        return [to_segment_view(s, office_names, offset_minutes=self._offset, with_date=True) for s in segments]
