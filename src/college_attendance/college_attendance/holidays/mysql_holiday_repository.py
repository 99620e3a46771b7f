from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, date, reason FROM holidays ORDER BY date DESC")
            return [
                Holiday(holiday_id=int(r["id"]), day=r["date"], reason=r["reason"])
                for r in fetchall(cur)
            ]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM holidays")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create(self, *, day: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO holidays(date, reason) VALUES(%s,%s)", (day, reason))
            return int(cur.lastrowid)

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE id=%s", (int(holiday_id),))
            return cur.rowcount > 0
