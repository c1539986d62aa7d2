from __future__ import annotations

import csv
import io
from typing import Sequence

from ..attendance.model import AttendanceReportRow
from .sink import COLUMNS, to_table_row


class CsvReportSink:
    mimetype = "text/csv"
    extension = "csv"

    def render(self, rows: Sequence[AttendanceReportRow], *, title: str) -> bytes:
        out = io.StringIO()
        headers = dict(COLUMNS)
        writer = csv.DictWriter(out, fieldnames=list(headers))
        writer.writerow(headers)
        for r in rows:
            writer.writerow(to_table_row(r))

        # BOM so Excel opens non-ASCII names correctly.
        return out.getvalue().encode("utf-8-sig")
