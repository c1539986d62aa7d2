from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_latitude, require_longitude, require_non_empty
from ..core.constants import DEFAULT_CODE_MAX_ATTEMPTS, DEFAULT_SESSION_TTL_MINUTES, MAX_NAME_LENGTH
from ..core.exceptions import CollisionRetryError, DuplicateKeyError, ExpiredError, NotFoundError
from ..geo.distance import GeoPoint
from .codes import generate_code, normalize_code
from .model import Session
from .repository import CODE_CONSTRAINT, SessionRepository


def build_attend_link(base_url: str, code: str) -> str:
    return f"{base_url.rstrip('/')}/attend?code={code}"


class SessionService:
    def __init__(
        self,
        sessions: SessionRepository,
        *,
        ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES,
        max_attempts: int = DEFAULT_CODE_MAX_ATTEMPTS,
        code_factory: Optional[Callable[[], str]] = None,
    ):
        if int(max_attempts) < 1:
            raise ValueError("max_attempts must be >= 1")
        self._sessions = sessions
        self._ttl = timedelta(minutes=int(ttl_minutes))
        self._max_attempts = int(max_attempts)
        self._code_factory = code_factory or generate_code

    def create_session(
        self,
        teacher_name,
        subject,
        lat,
        lng,
        *,
        base_url: str,
        now: datetime | None = None,
    ) -> Session:
        teacher_name = require_non_empty(teacher_name, "teacherName", max_len=MAX_NAME_LENGTH)
        subject = require_non_empty(subject, "subject", max_len=MAX_NAME_LENGTH)
        location = GeoPoint(lat=require_latitude(lat), lng=require_longitude(lng))

        now = now or now_utc()
        expires_at = now + self._ttl

        for _ in range(self._max_attempts):
            code = normalize_code(self._code_factory())
            try:
                return self._sessions.create(
                    teacher_name=teacher_name,
                    subject=subject,
                    location=location,
                    code=code,
                    link=build_attend_link(base_url, code),
                    expires_at=expires_at,
                    created_at=now,
                )
            except DuplicateKeyError as e:
                if e.constraint != CODE_CONSTRAINT:
                    raise
                continue

        raise CollisionRetryError("Collision detected. Please retry.")

    def get_session(self, code) -> Session:
        """Lookup regardless of expiry (sessions are kept for reporting)."""

        code = normalize_code(require_non_empty(code, "code"))
        session = self._sessions.get_by_code(code)
        if not session:
            raise NotFoundError("Session not found")
        return session

    def get_active_session(self, code, *, now: datetime | None = None) -> Session:
        session = self.get_session(code)
        if not session.is_active(now or now_utc()):
            raise ExpiredError("Session expired")
        return session
