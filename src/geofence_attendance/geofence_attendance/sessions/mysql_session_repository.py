from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, translate_duplicate_key
from ..geo.distance import GeoPoint
from .model import Session
from .repository import CODE_CONSTRAINT, SessionRepository


def _to_session(r: dict) -> Session:
    return Session(
        session_id=int(r["session_id"]),
        teacher_name=r["teacher_name"],
        subject=r["subject"],
        location=GeoPoint(lat=float(r["lat"]), lng=float(r["lng"])),
        code=r["code"],
        link=r["link"],
        expires_at=r["expires_at"],
        created_at=r["created_at"],
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT session_id, teacher_name, subject, lat, lng, code, link, expires_at, created_at
                FROM sessions
                WHERE code=%s
                """,
                (code,),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

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
        with translate_duplicate_key(CODE_CONSTRAINT):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO sessions(teacher_name, subject, lat, lng, code, link, expires_at, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (teacher_name, subject, location.lat, location.lng, code, link, expires_at, created_at),
                )
                session_id = int(cur.lastrowid)

        return Session(
            session_id=session_id,
            teacher_name=teacher_name,
            subject=subject,
            location=location,
            code=code,
            link=link,
            expires_at=expires_at,
            created_at=created_at,
        )
