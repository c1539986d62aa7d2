from __future__ import annotations

from typing import Protocol, Sequence

from ..attendance.model import AttendanceReportRow
from ..core.constants import PRESENT_STATUS

COLUMNS = [
    ("session_code", "Session Code"),
    ("subject", "Subject"),
    ("student_name", "Name"),
    ("roll_no", "Roll No"),
    ("recorded_at", "Recorded At"),
    ("status", "Status"),
    ("lat", "Latitude"),
    ("lng", "Longitude"),
    ("distance_meters", "Distance (m)"),
]


class TabularReportSink(Protocol):
    """Renders attendance rows into a downloadable file."""

    mimetype: str
    extension: str

    def render(self, rows: Sequence[AttendanceReportRow], *, title: str) -> bytes:
        raise NotImplementedError


def to_table_row(r: AttendanceReportRow) -> dict:
    """Flatten a report row into display values keyed by COLUMNS."""

    return {
        "session_code": r.session_code,
        "subject": r.subject,
        "student_name": r.student_name,
        "roll_no": r.roll_no,
        "recorded_at": r.recorded_at.strftime("%Y-%m-%d %H:%M:%S"),
        "status": PRESENT_STATUS,
        "lat": r.lat,
        "lng": r.lng,
        "distance_meters": f"{r.distance_meters:.2f}",
    }
