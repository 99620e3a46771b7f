from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional, Union

from ..common.datetime_utils import today_local
from ..core.constants import PERIODS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

StatusInput = Union[AttendanceStatus, str, None]


def _parse_status(value: StatusInput) -> Optional[AttendanceStatus]:
    if value is None or value == "":
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")


class AttendanceService:
    """Use case: record attendance, manually per day or camera-assisted per period."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def get_day_sheet(self, day: date) -> dict[int, AttendanceStatus]:
        """Current status per student for ``day`` (pre-fills the manual form)."""

        return {r.student_id: r.status for r in self._attendance.list_for_date(day)}

    def save_manual(
        self,
        *,
        day: date,
        statuses: Mapping[int, StatusInput],
        marked_by: Optional[int],
        today: Optional[date] = None,
    ) -> int:
        """Replace the whole day's attendance with ``statuses``.

        Unset entries are skipped. Records for ``day`` that are not in the
        mapping are removed, including camera-assisted ones.
        """

        today = today or today_local()
        if day > today:
            raise ValidationError("Attendance cannot be recorded for a future date")

        entries: list[AttendanceEntry] = []
        for student_id, value in statuses.items():
            status = _parse_status(value)
            if status is None:
                continue
            entries.append(AttendanceEntry(student_id=int(student_id), status=status))

        saved = self._attendance.replace_for_date(day=day, entries=entries, marked_by=marked_by)
        logger.info("Manual attendance saved for %s: %s records (marked_by=%s)", day.isoformat(), saved, marked_by)
        return saved

    def mark_assisted(
        self,
        *,
        student_id: int,
        period: int,
        marked_by: Optional[int],
        today: Optional[date] = None,
    ) -> int:
        """Record one camera-assisted ``present`` for today's ``period``.

        Raises ConflictError when the student already has a record for that
        period today.
        """

        today = today or today_local()
        if int(period) not in PERIODS:
            raise ValidationError(f"Period must be between {PERIODS[0]} and {PERIODS[-1]}")

        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        if not student.has_photo:
            raise ValidationError(f"{student.name} has no reference photo")

        try:
            attendance_id = self._attendance.create(
                student_id=student.student_id,
                day=today,
                status=AttendanceStatus.PRESENT,
                is_manual=False,
                period=int(period),
                marked_by=marked_by,
            )
        except ConflictError as e:
            raise ConflictError(
                f"Attendance for {student.name} is already recorded for period {int(period)} today"
            ) from e

        logger.info("Assisted attendance: student_id=%s period=%s day=%s", student.student_id, period, today)
        return attendance_id

    def list_for_date(self, day: date) -> list[AttendanceRecord]:
        return list(self._attendance.list_for_date(day))
