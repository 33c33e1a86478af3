from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import DayStatus, SegmentProgress, SessionState


@dataclass(frozen=True)
class RosterRow:
    """One employee's attendance on the roster date."""

    user_id: int
    employee_id: Optional[str]
    name: str
    email: str
    total_hours_today: float
    overall_status: SessionState
    day_status: DayStatus
    checkin_office: Optional[str] = None
    checkout_office: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["overall_status"] = self.overall_status.value
        data["day_status"] = self.day_status.value
        return data


@dataclass(frozen=True)
class RosterReport:
    date: str
    report: list[RosterRow]

    def to_dict(self) -> dict:
        return {"date": self.date, "report": [r.to_dict() for r in self.report]}


@dataclass(frozen=True)
class AttendanceLogRow:
    """One segment in the organization-wide attendance listing."""

    segment_id: int
    employee_id: Optional[str]
    name: str
    email: Optional[str]
    role: Optional[str]
    work_date: str
    check_in_time_ist: Optional[str]
    check_out_time_ist: Optional[str]
    checkin_office_name: str
    checkout_office_name: str
    total_hours: Optional[float]
    status: SegmentProgress

    def to_dict(self) -> dict:
        data = asdict(self)
        data["id"] = data.pop("segment_id")
        data["status"] = self.status.value
        return data


@dataclass(frozen=True)
class AttendanceLog:
    start: str
    end: str
    employee_id: Optional[str]
    logs: list[AttendanceLogRow]

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "employee_id": self.employee_id,
            "logs": [r.to_dict() for r in self.logs],
        }
