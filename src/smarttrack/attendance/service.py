from __future__ import annotations

import logging
from datetime import datetime

from ..common.datetime_utils import (
    TimeWindow,
    civil_date,
    civil_day_window,
    ensure_utc,
    hours_between,
    now_utc,
    truncate_to_millis,
)
from ..common.validators import require_coordinates, round_hours
from ..core.constants import DEFAULT_UTC_OFFSET_MINUTES, SEGMENT_STATUS_PRESENT
from ..core.enums import MatchPolicy, SessionState
from ..core.exceptions import AlreadyCheckedInError, NoOpenSessionError, OutsideGeofenceError, StoreConflictError
from ..offices.geofence import locate
from ..offices.model import Office
from ..offices.repository import OfficeRepository
from .locks import UserLockRegistry
from .model import AttendanceSegment
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ALREADY_CHECKED_IN_MESSAGE = "You are already checked in. Please check out first."
NO_OPEN_SESSION_MESSAGE = "No active check-in found to check out from."
OUTSIDE_GEOFENCE_MESSAGE = "You are outside all office areas"


def segment_hours(checkin_time: datetime, checkout_time: datetime) -> float:
    """Duration of a segment in hours, rounded to 2 decimals.

    The absolute value is taken, so a checkout stamped before its check-in
    (client clock skew) still yields a non-negative duration.
    """
    return round_hours(abs(hours_between(checkin_time, checkout_time)))


class AttendanceService:
    """Use case: check in / check out against office geofences."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        offices: OfficeRepository,
        *,
        locks: UserLockRegistry | None = None,
        offset_minutes: int = DEFAULT_UTC_OFFSET_MINUTES,
        match_policy: MatchPolicy = MatchPolicy.FIRST,
    ):
        self._attendance = attendance
        self._offices = offices
        self._locks = locks or UserLockRegistry()
        self._offset = int(offset_minutes)
        self._policy = MatchPolicy(match_policy)

    def today_window(self, now: datetime) -> TimeWindow:
        return civil_day_window(civil_date(now, self._offset), self._offset)

    def _resolve_office(self, latitude: float, longitude: float) -> Office:
        # No caching: offices are read fresh on every call.
        office = locate(latitude, longitude, self._offices.list_all(), policy=self._policy)
        if office is None:
            raise OutsideGeofenceError(OUTSIDE_GEOFENCE_MESSAGE)
        return office

    def check_in(self, user_id: int, latitude, longitude, *, now: datetime | None = None) -> AttendanceSegment:
        lat, lon = require_coordinates(latitude, longitude)
        now = truncate_to_millis(ensure_utc(now or now_utc()))
        window = self.today_window(now)

        with self._locks.hold(user_id):
            if self._attendance.find_open_segment(user_id, window):
                logger.info("Check-in rejected for user %s: open segment exists", user_id)
                raise AlreadyCheckedInError(ALREADY_CHECKED_IN_MESSAGE)

            try:
                office = self._resolve_office(lat, lon)
            except OutsideGeofenceError:
                logger.info("Check-in rejected for user %s: outside geofences (%s, %s)", user_id, lat, lon)
                raise

            try:
                segment = self._attendance.insert_segment(
                    user_id=user_id,
                    work_date=civil_date(now, self._offset),
                    office_id=office.office_id,
                    latitude=lat,
                    longitude=lon,
                    checkin_time=now,
                    status=SEGMENT_STATUS_PRESENT,
                )
            except StoreConflictError:
                # Another worker opened a segment between our read and write.
                logger.warning("Check-in conflict for user %s: concurrent open segment", user_id)
                raise AlreadyCheckedInError(ALREADY_CHECKED_IN_MESSAGE)

        logger.info("User %s checked in at office %s (segment %s)", user_id, office.office_id, segment.segment_id)
        return segment

    def check_out(self, user_id: int, latitude, longitude, *, now: datetime | None = None) -> AttendanceSegment:
        lat, lon = require_coordinates(latitude, longitude)
        now = truncate_to_millis(ensure_utc(now or now_utc()))
        window = self.today_window(now)

        with self._locks.hold(user_id):
            open_segment = self._attendance.find_open_segment(user_id, window)
            if not open_segment:
                logger.info("Check-out rejected for user %s: no open segment", user_id)
                raise NoOpenSessionError(NO_OPEN_SESSION_MESSAGE)

            try:
                office = self._resolve_office(lat, lon)
            except OutsideGeofenceError:
                logger.info("Check-out rejected for user %s: outside geofences (%s, %s)", user_id, lat, lon)
                raise

            total_hours = segment_hours(open_segment.checkin_time, now)
            segment = self._attendance.close_segment(
                segment_id=open_segment.segment_id,
                office_id=office.office_id,
                latitude=lat,
                longitude=lon,
                checkout_time=now,
                total_hours=total_hours,
            )
            if segment is None:
                raise NoOpenSessionError(NO_OPEN_SESSION_MESSAGE)

        logger.info(
            "User %s checked out at office %s (segment %s, %.2fh)",
            user_id,
            office.office_id,
            segment.segment_id,
            total_hours,
        )
        return segment

    def current_status(self, user_id: int, *, now: datetime | None = None) -> SessionState:
        now = ensure_utc(now or now_utc())
        window = self.today_window(now)

        if self._attendance.find_open_segment(user_id, window):
            return SessionState.CHECKED_IN
        if self._attendance.list_for_user(user_id, window, limit=1):
            return SessionState.CHECKED_OUT
        return SessionState.ABSENT
