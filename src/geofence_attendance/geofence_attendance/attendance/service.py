from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_latitude, require_longitude, require_non_empty
from ..core.constants import DEFAULT_MAX_DISTANCE_METERS, MAX_NAME_LENGTH, MAX_ROLL_NO_LENGTH
from ..core.exceptions import ConflictError, DuplicateKeyError, ForbiddenError
from ..geo.distance import GeoPoint, distance_meters, is_within
from ..sessions.service import SessionService
from .fingerprint import device_fingerprint
from .model import AttendanceRecord, ClientContext
from .repository import SESSION_ROLL_CONSTRAINT, AttendanceRepository

DUPLICATE_ROLL_MESSAGE = (
    "This roll number has already been used for attendance in this session. "
    "Each student can only mark attendance once per session."
)
TOO_FAR_MESSAGE = "You are too far from classroom location."


def normalize_roll_no(roll_no: str) -> str:
    return roll_no.strip().upper()


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionService,
        *,
        max_distance_meters: float = DEFAULT_MAX_DISTANCE_METERS,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._max_distance = float(max_distance_meters)

    @property
    def max_distance_meters(self) -> float:
        return self._max_distance

    def submit_attendance(
        self,
        code,
        student_name,
        roll_no,
        lat,
        lng,
        *,
        client: Optional[ClientContext] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        code = require_non_empty(code, "code")
        student_name = require_non_empty(student_name, "studentName", max_len=MAX_NAME_LENGTH)
        roll_no = normalize_roll_no(require_non_empty(roll_no, "rollNo", max_len=MAX_ROLL_NO_LENGTH))
        location = GeoPoint(lat=require_latitude(lat), lng=require_longitude(lng))

        now = now or now_utc()
        session = self._sessions.get_active_session(code, now=now)

        # Advisory only: gives a friendly answer; the unique index decides.
        existing = self._attendance.get_for_session_and_roll(session.session_id, roll_no)
        if existing:
            raise self._conflict(existing)

        distance = distance_meters(location, session.location)
        if not is_within(distance, self._max_distance):
            raise ForbiddenError(TOO_FAR_MESSAGE, distance=distance)

        fingerprint = device_fingerprint(client) if client else None

        try:
            return self._attendance.create(
                session_id=session.session_id,
                student_name=student_name,
                roll_no=roll_no,
                location=location,
                distance_meters=distance,
                created_at=now,
                client_ip=client.ip if client else None,
                user_agent=client.user_agent if client else None,
                device_fingerprint=fingerprint,
            )
        except DuplicateKeyError as e:
            if e.constraint != SESSION_ROLL_CONSTRAINT:
                raise
            winner = self._attendance.get_for_session_and_roll(session.session_id, roll_no)
            if winner:
                raise self._conflict(winner) from e
            raise ConflictError(DUPLICATE_ROLL_MESSAGE, roll_no=roll_no) from e

    def list_attendance(self, code, *, now: datetime | None = None) -> Sequence[AttendanceRecord]:
        session = self._sessions.get_active_session(code, now=now)
        return self._attendance.list_for_session(session.session_id)

    def _conflict(self, record: AttendanceRecord) -> ConflictError:
        return ConflictError(
            DUPLICATE_ROLL_MESSAGE,
            roll_no=record.roll_no,
            student_name=record.student_name,
            submitted_at=record.created_at,
        )
