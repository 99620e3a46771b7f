from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..core.constants import ALL_SECTIONS
from ..core.exceptions import ValidationError
from .exporter import build_frame, export_filename, write_workbook


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: io.BytesIO
    row_count: int


def is_section_filter(section: Optional[str]) -> bool:
    return bool(section) and section != ALL_SECTIONS


class ReportService:
    """Filtered attendance records and their spreadsheet export."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def list_records(self, *, start: date, end: date, section: Optional[str] = None) -> list[AttendanceReportRow]:
        if start > end:
            raise ValidationError("Start date must be on or before end date")

        rows = list(self._attendance.get_report_rows(start_date=start, end_date=end))

        # Section is filtered after retrieval, against the joined student.
        if is_section_filter(section):
            rows = [r for r in rows if r.section == section]
        return rows

    def export_workbook(self, *, start: date, end: date, section: Optional[str] = None) -> ExportFile:
        rows = self.list_records(start=start, end=end, section=section)
        return ExportFile(
            filename=export_filename(start, end),
            content=write_workbook(build_frame(rows)),
            row_count=len(rows),
        )
