from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..geo.distance import GeoPoint
from .model import Session

CODE_CONSTRAINT = "uq_sessions_code"


class SessionRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[Session]:
        """Lookup by normalized (uppercase) code."""

        raise NotImplementedError

    def create(
        self,
        *,
        teacher_name: str,
        subject: str,
        location: GeoPoint,
        code: str,
        link: str,
        expires_at: datetime,
        created_at: datetime,
    ) -> Session:
        """Insert a session.

        Raises DuplicateKeyError(CODE_CONSTRAINT) when the code already exists.
        """

        raise NotImplementedError

