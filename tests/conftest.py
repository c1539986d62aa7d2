from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.geofence_attendance.geofence_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from src.geofence_attendance.geofence_attendance.attendance.repository import SESSION_ROLL_CONSTRAINT
from src.geofence_attendance.geofence_attendance.container import wire_services
from src.geofence_attendance.geofence_attendance.core.exceptions import DuplicateKeyError
from src.geofence_attendance.geofence_attendance.geo.distance import GeoPoint
from src.geofence_attendance.geofence_attendance.sessions.model import Session
from src.geofence_attendance.geofence_attendance.sessions.repository import CODE_CONSTRAINT


class InMemorySessions:
    def __init__(self):
        self.by_code: dict[str, Session] = {}
        self._id = 0

    def get_by_code(self, code: str) -> Optional[Session]:
        return self.by_code.get(code)

    def create(self, *, teacher_name, subject, location, code, link, expires_at, created_at) -> Session:
        if code in self.by_code:
            raise DuplicateKeyError(CODE_CONSTRAINT)
        self._id += 1
        s = Session(
            session_id=self._id,
            teacher_name=teacher_name,
            subject=subject,
            location=location,
            code=code,
            link=link,
            expires_at=expires_at,
            created_at=created_at,
        )
        self.by_code[code] = s
        return s

    def by_id(self, session_id: int) -> Session:
        return next(s for s in self.by_code.values() if s.session_id == session_id)


class InMemoryAttendance:
    def __init__(self, sessions: InMemorySessions):
        self._sessions = sessions
        self.records: list[AttendanceRecord] = []

    def get_for_session_and_roll(self, session_id: int, roll_no: str) -> Optional[AttendanceRecord]:
        for r in self.records:
            if r.session_id == session_id and r.roll_no == roll_no:
                return r
        return None

    def list_for_session(self, session_id: int):
        return [r for r in self.records if r.session_id == session_id]

    def create(self, *, session_id, student_name, roll_no, location, distance_meters, created_at,
               client_ip=None, user_agent=None, device_fingerprint=None) -> AttendanceRecord:
        if self.get_for_session_and_roll(session_id, roll_no):
            raise DuplicateKeyError(SESSION_ROLL_CONSTRAINT)
        rec = AttendanceRecord(
            attendance_id=len(self.records) + 1,
            session_id=session_id,
            student_name=student_name,
            roll_no=roll_no,
            location=location,
            distance_meters=distance_meters,
            created_at=created_at,
            client_ip=client_ip,
            user_agent=user_agent,
            device_fingerprint=device_fingerprint,
        )
        self.records.append(rec)
        return rec

    def get_report_rows(self, *, session_id=None, subject=None):
        out = []
        for r in self.records:
            s = self._sessions.by_id(r.session_id)
            if session_id is not None and s.session_id != session_id:
                continue
            if subject and s.subject.lower() != subject.lower():
                continue
            out.append(
                AttendanceReportRow(
                    session_code=s.code,
                    subject=s.subject,
                    teacher_name=s.teacher_name,
                    student_name=r.student_name,
                    roll_no=r.roll_no,
                    recorded_at=r.created_at,
                    lat=r.location.lat,
                    lng=r.location.lng,
                    distance_meters=r.distance_meters,
                )
            )
        return out


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 0, 0)


@pytest.fixture
def classroom() -> GeoPoint:
    return GeoPoint(lat=12.9716, lng=77.5946)


@pytest.fixture
def sessions_repo() -> InMemorySessions:
    return InMemorySessions()


@pytest.fixture
def attendance_repo(sessions_repo) -> InMemoryAttendance:
    return InMemoryAttendance(sessions_repo)


@pytest.fixture
def container(sessions_repo, attendance_repo):
    return wire_services(
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        ttl_minutes=10,
        code_max_attempts=5,
        max_distance_meters=120,
    )


@pytest.fixture
def client(container, monkeypatch):
    from src.geofence_attendance.geofence_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("APP_BASE_URL", "")
    app = create_app(container)
    return app.test_client()
