from __future__ import annotations

from ...common.validators import round_hours
from ...core.constants import FULL_DAY_MIN_HOURS, HALF_DAY_MIN_HOURS, STANDARD_WORK_HOURS
from ...core.enums import DayStatus
from .base import HoursPolicy


class StandardHoursPolicy(HoursPolicy):
    """Standard rule: 0h absent, under 4h LOP, under 8h half day, else full day."""

    def __init__(
        self,
        *,
        half_day_min_hours: float = HALF_DAY_MIN_HOURS,
        full_day_min_hours: float = FULL_DAY_MIN_HOURS,
        standard_work_hours: float = STANDARD_WORK_HOURS,
    ):
        self.half_day_min_hours = float(half_day_min_hours)
        self.full_day_min_hours = float(full_day_min_hours)
        self.standard_work_hours = float(standard_work_hours)

    def day_status(self, total_hours: float) -> DayStatus:
        hours = round_hours(total_hours)
        if hours <= 0:
            return DayStatus.ABSENT
        if hours < self.half_day_min_hours:
            return DayStatus.LOP
        if hours < self.full_day_min_hours:
            return DayStatus.HALF_DAY
        return DayStatus.FULL_DAY

    def overtime(self, total_hours: float) -> float:
        return max(0.0, float(total_hours) - self.standard_work_hours)
