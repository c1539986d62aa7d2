from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import SessionState
from ..geo.distance import GeoPoint


@dataclass(frozen=True)
class Session:
    """Domain entity: a time-boxed attendance session opened by a teacher."""

    session_id: int
    teacher_name: str
    subject: str
    location: GeoPoint
    code: str
    link: str
    expires_at: datetime
    created_at: datetime

    def state_at(self, now: datetime) -> SessionState:
        if now > self.expires_at:
            return SessionState.EXPIRED
        return SessionState.ACTIVE

    def is_active(self, now: datetime) -> bool:
        return self.state_at(now) == SessionState.ACTIVE
