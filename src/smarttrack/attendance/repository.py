from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import TimeWindow
from .model import AttendanceSegment


class AttendanceRepository(Protocol):
    """Store access for attendance segments.

    Windows are inclusive UTC ranges matched against ``checkin_time``.
    """

    def find_open_segment(self, user_id: int, window: TimeWindow) -> Optional[AttendanceSegment]:
        """Most recently opened segment without a checkout, or None."""
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        window: TimeWindow,
        *,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceSegment]:
        raise NotImplementedError

    def list_in_window(self, window: TimeWindow, *, limit: Optional[int] = None) -> Sequence[AttendanceSegment]:
        """Segments of every user, newest first."""
        raise NotImplementedError

    def insert_segment(
        self,
        *,
        user_id: int,
        work_date: date,
        office_id: int,
        latitude: float,
        longitude: float,
        checkin_time: datetime,
        status: str,
    ) -> AttendanceSegment:
        """Raises StoreConflictError if the user already has an open segment that day."""
        raise NotImplementedError

    def close_segment(
        self,
        *,
        segment_id: int,
        office_id: int,
        latitude: float,
        longitude: float,
        checkout_time: datetime,
        total_hours: float,
    ) -> Optional[AttendanceSegment]:
        """Close an open segment. Returns None if it was already closed."""
        raise NotImplementedError
