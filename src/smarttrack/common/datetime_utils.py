"""Civil-day helpers.

Dates coming from users are calendar days in a fixed civil offset (UTC+05:30 by
default); stored instants are UTC. Every conversion between the two goes
through this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from ..core.constants import DEFAULT_UTC_OFFSET_MINUTES
from ..core.exceptions import ValidationError

_LAST_MILLISECOND = timedelta(days=1) - timedelta(milliseconds=1)


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive UTC range ``[start, end]``."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def civil_timezone(offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES) -> timezone:
    return timezone(timedelta(minutes=int(offset_minutes)))


def civil_day_window(day: date, offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES) -> TimeWindow:
    """UTC instants of ``day`` 00:00:00.000 through 23:59:59.999 at the offset."""
    local_start = datetime.combine(day, time.min, tzinfo=civil_timezone(offset_minutes))
    start = local_start.astimezone(timezone.utc)
    return TimeWindow(start=start, end=start + _LAST_MILLISECOND)


def civil_range_window(start_day: date, end_day: date, offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES) -> TimeWindow:
    if start_day > end_day:
        raise ValidationError("Start date must not be after end date")
    return TimeWindow(
        start=civil_day_window(start_day, offset_minutes).start,
        end=civil_day_window(end_day, offset_minutes).end,
    )


def ensure_utc(instant: datetime) -> datetime:
    """Attach UTC to naive values (the store keeps naive UTC) and normalize aware ones."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def truncate_to_millis(instant: datetime) -> datetime:
    # DATETIME(3) columns keep milliseconds only
    return instant.replace(microsecond=instant.microsecond // 1000 * 1000)


def to_civil(instant: datetime, offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES) -> datetime:
    return ensure_utc(instant).astimezone(civil_timezone(offset_minutes))


def civil_date(instant: datetime, offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES) -> date:
    return to_civil(instant, offset_minutes).date()


def is_civil_today(day: date, now: datetime, offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES) -> bool:
    return civil_date(now, offset_minutes) == day


def format_civil_time(instant: datetime | None, offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES) -> str | None:
    """Render as ``hh:mm:ss AM`` in the civil timezone."""
    if instant is None:
        return None
    return to_civil(instant, offset_minutes).strftime("%I:%M:%S %p")


def hours_between(start: datetime, end: datetime) -> float:
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / 3600


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError("Invalid date format. Please use YYYY-MM-DD.")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
