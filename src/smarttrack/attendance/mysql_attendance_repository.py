from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import TimeWindow
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime, to_float
from .model import AttendanceSegment
from .repository import AttendanceRepository

_COLUMNS = """
    segment_id, user_id, work_date,
    checkin_office_id, checkin_latitude, checkin_longitude, checkin_time,
    checkout_office_id, checkout_latitude, checkout_longitude, checkout_time,
    total_hours, status
"""


def _to_segment(r: dict) -> AttendanceSegment:
    return AttendanceSegment(
        segment_id=int(r["segment_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        checkin_office_id=int(r["checkin_office_id"]),
        checkin_latitude=to_float(r["checkin_latitude"]),
        checkin_longitude=to_float(r["checkin_longitude"]),
        checkin_time=from_db_datetime(r["checkin_time"]),
        checkout_office_id=int(r["checkout_office_id"]) if r.get("checkout_office_id") is not None else None,
        checkout_latitude=to_float(r.get("checkout_latitude")),
        checkout_longitude=to_float(r.get("checkout_longitude")),
        checkout_time=from_db_datetime(r.get("checkout_time")),
        total_hours=to_float(r.get("total_hours")),
        status=r["status"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open_segment(self, user_id: int, window: TimeWindow) -> Optional[AttendanceSegment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_segments
                WHERE user_id=%s
                  AND checkout_time IS NULL
                  AND checkin_time BETWEEN %s AND %s
                ORDER BY checkin_time DESC
                LIMIT 1
                """,
                (int(user_id), to_db_datetime(window.start), to_db_datetime(window.end)),
            )
            row = fetchone(cur)
            return _to_segment(row) if row else None

    def list_for_user(
        self,
        user_id: int,
        window: TimeWindow,
        *,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceSegment]:
        order = "DESC" if newest_first else "ASC"
        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance_segments
            WHERE user_id=%s AND checkin_time BETWEEN %s AND %s
            ORDER BY checkin_time {order}
        """
        params: list[object] = [int(user_id), to_db_datetime(window.start), to_db_datetime(window.end)]
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_segment(r) for r in fetchall(cur)]

    def list_in_window(self, window: TimeWindow, *, limit: Optional[int] = None) -> Sequence[AttendanceSegment]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance_segments
            WHERE checkin_time BETWEEN %s AND %s
            ORDER BY checkin_time DESC
        """
        params: list[object] = [to_db_datetime(window.start), to_db_datetime(window.end)]
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_segment(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_segments(
                    user_id, work_date, checkin_office_id, checkin_latitude, checkin_longitude, checkin_time, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), work_date, int(office_id), latitude, longitude, to_db_datetime(checkin_time), status),
            )
            segment_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_segments WHERE segment_id=%s", (segment_id,))
            return _to_segment(fetchone(cur))

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_segments
                SET checkout_office_id=%s, checkout_latitude=%s, checkout_longitude=%s,
                    checkout_time=%s, total_hours=%s
                WHERE segment_id=%s AND checkout_time IS NULL
                """,
                (int(office_id), latitude, longitude, to_db_datetime(checkout_time), total_hours, int(segment_id)),
            )
            if cur.rowcount <= 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_segments WHERE segment_id=%s", (int(segment_id),))
            return _to_segment(fetchone(cur))
