from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_CODE_MAX_ATTEMPTS, DEFAULT_MAX_DISTANCE_METERS, DEFAULT_SESSION_TTL_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository

    session_service: SessionService
    attendance_service: AttendanceService
    report_service: ReportService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def wire_services(
    *,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
    ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES,
    code_max_attempts: int = DEFAULT_CODE_MAX_ATTEMPTS,
    max_distance_meters: float = DEFAULT_MAX_DISTANCE_METERS,
) -> Container:
    session_service = SessionService(sessions_repo, ttl_minutes=ttl_minutes, max_attempts=code_max_attempts)
    attendance_service = AttendanceService(
        attendance_repo,
        session_service,
        max_distance_meters=max_distance_meters,
    )
    report_service = ReportService(attendance_repo, session_service)

    return Container(
        conn=conn,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        session_service=session_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )


def build_container(
    *,
    db_config: dict,
    ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES,
    code_max_attempts: int = DEFAULT_CODE_MAX_ATTEMPTS,
    max_distance_meters: float = DEFAULT_MAX_DISTANCE_METERS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).open()

    return wire_services(
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        conn=conn,
        ttl_minutes=ttl_minutes,
        code_max_attempts=code_max_attempts,
        max_distance_meters=max_distance_meters,
    )
