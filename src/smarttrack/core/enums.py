from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    EMPLOYEE = "employee"
    HR = "hr"
    ADMIN = "admin"


class SessionState(str, Enum):
    """Live check-in state of a user for the current day."""

    CHECKED_IN = "Checked In"
    CHECKED_OUT = "Checked Out"
    ABSENT = "Absent"


class DayStatus(str, Enum):
    """Final status of a day, derived from accumulated work time."""

    ABSENT = "Absent"
    LOP = "LOP"
    HALF_DAY = "Half Day"
    FULL_DAY = "Full Day"


class SegmentProgress(str, Enum):
    COMPLETED = "Completed"
    CHECKED_IN = "Checked In"


class MatchPolicy(str, Enum):
    """How an office is picked when a point lies inside several geofences."""

    FIRST = "first"
    NEAREST = "nearest"
