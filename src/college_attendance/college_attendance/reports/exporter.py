from __future__ import annotations

import io
from datetime import date
from typing import Sequence

import pandas as pd

from ..attendance.model import AttendanceReportRow
from ..common.datetime_utils import format_dmy
from ..core.constants import EXPORT_COLUMNS, EXPORT_SHEET_NAME

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def export_filename(start: date, end: date) -> str:
    return f"attendance_{start.isoformat()}_to_{end.isoformat()}.xlsx"


def to_export_row(r: AttendanceReportRow) -> dict:
    return {
        "Date": format_dmy(r.day),
        "Roll Number": r.roll_number,
        "Name": r.name,
        "Year": r.class_name,
        "Section": r.section or "",
        "Status": r.status.value.upper(),
        "Type": "Manual" if r.is_manual else "Face Recognition",
    }


def build_frame(rows: Sequence[AttendanceReportRow]) -> pd.DataFrame:
    return pd.DataFrame([to_export_row(r) for r in rows], columns=list(EXPORT_COLUMNS))


def write_workbook(frame: pd.DataFrame) -> io.BytesIO:
    # Built in memory, nothing touches the disk.
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
    output.seek(0)
    return output
