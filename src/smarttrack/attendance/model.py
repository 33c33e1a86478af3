from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayStatus, SegmentProgress, SessionState


@dataclass(frozen=True)
class AttendanceSegment:
    """Domain entity: one check-in and (once closed) its check-out."""

    segment_id: int
    user_id: int
    work_date: date
    checkin_office_id: int
    checkin_latitude: float
    checkin_longitude: float
    checkin_time: datetime
    checkout_office_id: Optional[int] = None
    checkout_latitude: Optional[float] = None
    checkout_longitude: Optional[float] = None
    checkout_time: Optional[datetime] = None
    total_hours: Optional[float] = None
    status: str = "present"

    @property
    def is_open(self) -> bool:
        return self.checkout_time is None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["work_date"] = self.work_date.isoformat()
        data["checkin_time"] = self.checkin_time.isoformat()
        data["checkout_time"] = self.checkout_time.isoformat() if self.checkout_time else None
        return data


@dataclass(frozen=True)
class SegmentView:
    """Read-model of a segment for the daily log."""

    segment_id: int
    check_in_time_ist: Optional[str]
    check_out_time_ist: Optional[str]
    status: SegmentProgress
    total_hours: Optional[float]
    checkin_office_name: str
    checkout_office_name: str
    work_date: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["id"] = data.pop("segment_id")
        data["status"] = self.status.value
        if self.work_date is None:
            data.pop("work_date")
        return data


@dataclass(frozen=True)
class DaySummary:
    user_id: int
    date: date
    total_hours_sum: float
    total_overtime_sum: float
    day_status: DayStatus
    overall_status: SessionState
    segments: list[SegmentView] = field(default_factory=list)

    def summary_dict(self) -> dict:
        return {
            "total_hours_sum": self.total_hours_sum,
            "total_overtime_sum": self.total_overtime_sum,
            "date": self.date.isoformat(),
            "day_status": self.day_status.value,
            "overall_status": self.overall_status.value,
        }
