from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from ..attendance.model import AttendanceReportRow
from .sink import COLUMNS, to_table_row


class ExcelReportSink:
    mimetype = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def render(self, rows: Sequence[AttendanceReportRow], *, title: str) -> bytes:
        keys = [k for k, _ in COLUMNS]
        df = pd.DataFrame([to_table_row(r) for r in rows], columns=keys)
        df = df.rename(columns=dict(COLUMNS))

        out = io.BytesIO()
        # Excel caps sheet names at 31 chars.
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=(title or "Attendance")[:31])
        return out.getvalue()
