from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import DayStatus


class HoursPolicy(ABC):
    """Policy interface (Strategy Pattern) turning worked hours into a day status."""

    @abstractmethod
    def day_status(self, total_hours: float) -> DayStatus:
        raise NotImplementedError

    @abstractmethod
    def overtime(self, total_hours: float) -> float:
        raise NotImplementedError
