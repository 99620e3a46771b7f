from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEntry, AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def list_for_date(self, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def replace_for_date(self, *, day: date, entries: Sequence[AttendanceEntry], marked_by: Optional[int]) -> int:
        """Delete every record dated ``day`` and insert ``entries`` as manual records.

        Both steps run in one transaction. Returns the number inserted.
        """

        raise NotImplementedError

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
        """Insert one record. Raises ConflictError on a duplicate (student, day, period)."""

        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        """Records ordered by day (newest first), then period."""

        raise NotImplementedError

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[AttendanceReportRow]:
        """Records within [start_date, end_date] joined with students, newest first."""

        raise NotImplementedError
