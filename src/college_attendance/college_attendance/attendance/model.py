from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one recorded status for a student on a day.

    ``period`` is None for manual (whole day) records and 1..7 for
    camera-assisted ones.
    """

    attendance_id: int
    student_id: int
    day: date
    status: AttendanceStatus
    is_manual: bool
    period: Optional[int] = None
    marked_by: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceEntry:
    """One (student, status) pair submitted by the manual form."""

    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for the records page and export (record joined with its student)."""

    attendance_id: int
    day: date
    status: AttendanceStatus
    is_manual: bool
    roll_number: str
    name: str
    class_name: str
    section: Optional[str]
    period: Optional[int] = None
