from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..geo.distance import GeoPoint
from .model import AttendanceRecord, AttendanceReportRow

SESSION_ROLL_CONSTRAINT = "uq_attendance_session_roll"


class AttendanceRepository(Protocol):
    def get_for_session_and_roll(self, session_id: int, roll_no: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        """Records in creation order."""

        raise NotImplementedError

    def create(
        self,
        *,
        session_id: int,
        student_name: str,
        roll_no: str,
        location: GeoPoint,
        distance_meters: float,
        created_at: datetime,
        client_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
        device_fingerprint: Optional[str] = None,
    ) -> AttendanceRecord:
        """Insert a record.

        Raises DuplicateKeyError(SESSION_ROLL_CONSTRAINT) when (session_id, roll_no)
        already exists. This is the source of truth for duplicate prevention.
        """

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        session_id: Optional[int] = None,
        subject: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
