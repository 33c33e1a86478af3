from __future__ import annotations

from typing import Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_float
from .model import Office
from .repository import OfficeRepository


def _to_office(row: dict) -> Office:
    return Office(
        office_id=int(row["office_id"]),
        name=row["name"],
        latitude=to_float(row["latitude"]),
        longitude=to_float(row["longitude"]),
        radius_meters=to_float(row["radius_meters"]),
    )


class MySQLOfficeRepository(OfficeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT office_id, name, latitude, longitude, radius_meters
                FROM offices
                ORDER BY office_id ASC
                """
            )
            return [_to_office(r) for r in fetchall(cur)]

    def names_by_id(self) -> Mapping[int, str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT office_id, name FROM offices")
            return {int(r["office_id"]): r["name"] for r in fetchall(cur)}
