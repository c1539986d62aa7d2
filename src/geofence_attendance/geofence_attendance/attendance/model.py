from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..geo.distance import GeoPoint


@dataclass(frozen=True)
class ClientContext:
    """Where a submission came from. Audit only, never a uniqueness key."""

    ip: str
    user_agent: str


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance in one session."""

    attendance_id: int
    session_id: int
    student_name: str
    roll_no: str
    location: GeoPoint
    distance_meters: float
    created_at: datetime
    client_ip: Optional[str] = None
    user_agent: Optional[str] = None
    device_fingerprint: Optional[str] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for exports (joined with the owning session)."""

    session_code: str
    subject: str
    teacher_name: str
    student_name: str
    roll_no: str
    recorded_at: datetime
    lat: float
    lng: float
    distance_meters: float
