from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_duplicate_key
from ..geo.distance import GeoPoint
from .model import AttendanceRecord, AttendanceReportRow
from .repository import SESSION_ROLL_CONSTRAINT, AttendanceRepository

_COLUMNS = """
    attendance_id, session_id, student_name, roll_no, lat, lng, distance_meters,
    client_ip, user_agent, device_fingerprint, created_at
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        session_id=int(r["session_id"]),
        student_name=r["student_name"],
        roll_no=r["roll_no"],
        location=GeoPoint(lat=float(r["lat"]), lng=float(r["lng"])),
        distance_meters=float(r["distance_meters"]),
        created_at=r["created_at"],
        client_ip=r.get("client_ip"),
        user_agent=r.get("user_agent"),
        device_fingerprint=r.get("device_fingerprint"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_session_and_roll(self, session_id: int, roll_no: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_id=%s AND roll_no=%s",
                (int(session_id), roll_no),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE session_id=%s
                ORDER BY created_at ASC, attendance_id ASC
                """,
                (int(session_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        with translate_duplicate_key(SESSION_ROLL_CONSTRAINT):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        session_id, student_name, roll_no, lat, lng, distance_meters,
                        client_ip, user_agent, device_fingerprint, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(session_id),
                        student_name,
                        roll_no,
                        location.lat,
                        location.lng,
                        float(distance_meters),
                        client_ip,
                        user_agent,
                        device_fingerprint,
                        created_at,
                    ),
                )
                attendance_id = int(cur.lastrowid)

        return AttendanceRecord(
            attendance_id=attendance_id,
            session_id=int(session_id),
            student_name=student_name,
            roll_no=roll_no,
            location=location,
            distance_meters=float(distance_meters),
            created_at=created_at,
            client_ip=client_ip,
            user_agent=user_agent,
            device_fingerprint=device_fingerprint,
        )

    def get_report_rows(
        self,
        *,
        session_id: Optional[int] = None,
        subject: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses: list[str] = []
        params: list[object] = []

        if session_id is not None:
            clauses.append("ar.session_id=%s")
            params.append(int(session_id))
        if subject:
            clauses.append("LOWER(s.subject)=LOWER(%s)")
            params.append(subject)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    s.code, s.subject, s.teacher_name,
                    ar.student_name, ar.roll_no, ar.created_at, ar.lat, ar.lng, ar.distance_meters
                FROM attendance_records ar
                JOIN sessions s ON s.session_id = ar.session_id
                {where}
                ORDER BY ar.created_at ASC, ar.attendance_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    session_code=r["code"],
                    subject=r["subject"],
                    teacher_name=r["teacher_name"],
                    student_name=r["student_name"],
                    roll_no=r["roll_no"],
                    recorded_at=r["created_at"],
                    lat=float(r["lat"]),
                    lng=float(r["lng"]),
                    distance_meters=float(r["distance_meters"]),
                )
                for r in rows
            ]
