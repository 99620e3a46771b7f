"""Read-only roll-ups over recorded attendance (dashboard and per-student stats)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..holidays.repository import HolidayRepository
from ..students.model import Student
from ..students.repository import StudentRepository


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    present_today: int
    absent_today: int
    total_holidays: int


@dataclass(frozen=True)
class StudentStats:
    records: list[AttendanceRecord]
    total_present: int
    total_absent: int
    attendance_percentage: float


def attendance_percentage(present: int, absent: int) -> float:
    """present / (present + absent) * 100 rounded half-up to one decimal, 0 when nothing is recorded."""

    total = present + absent
    if total <= 0:
        return 0.0
    # Half-up, so 6.25 shows as 6.3.
    pct = Decimal(present * 100) / Decimal(total)
    return float(pct.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _count(records, status: AttendanceStatus) -> int:
    return sum(1 for r in records if r.status == status)


class RollupService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        holidays: HolidayRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._holidays = holidays

    def dashboard_stats(self, today: date) -> DashboardStats:
        records = self._attendance.list_for_date(today)
        return DashboardStats(
            total_students=self._students.count(),
            present_today=_count(records, AttendanceStatus.PRESENT),
            absent_today=_count(records, AttendanceStatus.ABSENT),
            total_holidays=self._holidays.count(),
        )

    def student_stats(self, student_id: int) -> StudentStats:
        records = list(self._attendance.list_for_student(int(student_id)))
        present = _count(records, AttendanceStatus.PRESENT)
        absent = _count(records, AttendanceStatus.ABSENT)
        return StudentStats(
            records=records,
            total_present=present,
            total_absent=absent,
            attendance_percentage=attendance_percentage(present, absent),
        )

    def my_attendance(self, email: Optional[str]) -> tuple[Student, StudentStats]:
        """Stats for the student whose roster email matches the signed-in account."""

        student = self._students.get_by_email(email) if email else None
        if not student:
            raise NotFoundError("Student record not found")
        return student, self.student_stats(student.student_id)
