from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..attendance.repository import AttendanceRepository
from ..core.enums import ReportFormat
from ..core.exceptions import NotFoundError, ValidationError
from ..sessions.service import SessionService
from .csv_sink import CsvReportSink
from .excel_sink import ExcelReportSink
from .sink import TabularReportSink


@dataclass(frozen=True)
class ReportFile:
    content: bytes
    filename: str
    mimetype: str


def default_sinks() -> dict[ReportFormat, TabularReportSink]:
    return {ReportFormat.CSV: CsvReportSink(), ReportFormat.EXCEL: ExcelReportSink()}


class ReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionService,
        *,
        sinks: Optional[Mapping[ReportFormat, TabularReportSink]] = None,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._sinks = dict(sinks) if sinks is not None else default_sinks()

    def _sink(self, fmt: str) -> TabularReportSink:
        try:
            return self._sinks[ReportFormat(str(fmt).lower())]
        except (ValueError, KeyError):
            raise ValidationError(f"Unsupported export format: {fmt}") from None

    def export_session(self, code, fmt: str) -> ReportFile:
        sink = self._sink(fmt)
        session = self._sessions.get_session(code)
        rows = self._attendance.get_report_rows(session_id=session.session_id)
        if not rows:
            raise NotFoundError("No attendance found")

        return ReportFile(
            content=sink.render(rows, title=f"Attendance {session.code}"),
            filename=f"attendance-{session.code}.{sink.extension}",
            mimetype=sink.mimetype,
        )

    def export_subject(self, subject: Optional[str], fmt: str) -> ReportFile:
        """All records, or only those of sessions whose subject matches (case-insensitive)."""

        sink = self._sink(fmt)
        subject = subject.strip() if subject else None
        rows = self._attendance.get_report_rows(subject=subject)
        if not rows:
            raise NotFoundError("No attendance found")

        return ReportFile(
            content=sink.render(rows, title="Attendance"),
            filename=f"attendance.{sink.extension}",
            mimetype=sink.mimetype,
        )
