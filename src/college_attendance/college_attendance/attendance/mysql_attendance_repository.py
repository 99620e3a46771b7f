from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, translate_duplicate
from .model import AttendanceEntry, AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = "id, student_id, date, period, status, is_manual, marked_by, created_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        student_id=int(r["student_id"]),
        day=r["date"],
        status=AttendanceStatus(r["status"]),
        is_manual=bool(r["is_manual"]),
        period=int(r["period"]) if r.get("period") is not None else None,
        marked_by=r.get("marked_by"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, day: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE date=%s ORDER BY student_id ASC, period ASC",
                (day,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def replace_for_date(self, *, day: date, entries: Sequence[AttendanceEntry], marked_by: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE date=%s", (day,))
            if entries:
                cur.executemany(
                    """
                    INSERT INTO attendance(student_id, date, period, status, is_manual, marked_by)
                    VALUES(%s,%s,NULL,%s,1,%s)
                    """,
                    [(int(e.student_id), day, e.status.value, marked_by) for e in entries],
                )
            return len(entries)

    def create(
        self,
        *,
        student_id: int,
        day: date,
        status: AttendanceStatus,
        is_manual: bool,
        period: Optional[int] = None,
        marked_by: Optional[int] = None,
    ) -> int:
        with translate_duplicate("Attendance already recorded"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(student_id, date, period, status, is_manual, marked_by)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (int(student_id), day, period, status.value, int(bool(is_manual)), marked_by),
                )
                return int(cur.lastrowid)

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE student_id=%s
                ORDER BY date DESC, period ASC
                """,
                (int(student_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    a.id, a.date, a.period, a.status, a.is_manual,
                    s.roll_number, s.name, s.class, s.section
                FROM attendance a
                JOIN students s ON s.id = a.student_id
                WHERE a.date BETWEEN %s AND %s
                ORDER BY a.date DESC, s.roll_number ASC
                """,
                (start_date, end_date),
            )
            return [
                AttendanceReportRow(
                    attendance_id=int(r["id"]),
                    day=r["date"],
                    status=AttendanceStatus(r["status"]),
                    is_manual=bool(r["is_manual"]),
                    roll_number=r["roll_number"],
                    name=r["name"],
                    class_name=r["class"],
                    section=r.get("section"),
                    period=int(r["period"]) if r.get("period") is not None else None,
                )
                for r in fetchall(cur)
            ]
