from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import to_iso
from ..common.http import json_body
from ..container import Container
from ..core.constants import MAX_CLIENT_IP_LENGTH, MAX_USER_AGENT_LENGTH, UNKNOWN_CLIENT
from ..core.exceptions import DomainError
from .model import AttendanceRecord, ClientContext


def client_context() -> ClientContext:
    """Caller IP and user agent, clipped to the stored column widths."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    ip = (
        forwarded.split(",")[0].strip()
        or request.headers.get("X-Real-IP", "").strip()
        or request.remote_addr
        or UNKNOWN_CLIENT
    )
    user_agent = request.headers.get("User-Agent") or UNKNOWN_CLIENT
    return ClientContext(ip=ip[:MAX_CLIENT_IP_LENGTH], user_agent=user_agent[:MAX_USER_AGENT_LENGTH])


def attendance_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "sessionId": r.session_id,
        "studentName": r.student_name,
        "rollNo": r.roll_no,
        "location": r.location.as_dict(),
        "distanceMeters": r.distance_meters,
        "deviceFingerprint": r.device_fingerprint,
        "clientIP": r.client_ip,
        "userAgent": r.user_agent,
        "createdAt": to_iso(r.created_at),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance", methods=["POST"], endpoint="submit_attendance")
    def submit_attendance():
        data = json_body()
        client = client_context()
        try:
            r = container.attendance_service.submit_attendance(
                data.get("code"),
                data.get("studentName"),
                data.get("rollNo"),
                data.get("lat"),
                data.get("lng"),
                client=client,
            )
        except DomainError as e:
            app.logger.info(
                "Attendance rejected (%s) code=%r rollNo=%r ip=%s: %s",
                e.status_code, data.get("code"), data.get("rollNo"), client.ip, e.message,
            )
            raise

        app.logger.info(
            "Attendance marked code=%s rollNo=%s distance=%.1fm fingerprint=%s",
            data.get("code"), r.roll_no, r.distance_meters, r.device_fingerprint,
        )
        echo = {"studentName": r.student_name, "rollNo": r.roll_no, "distanceMeters": r.distance_meters}
        return jsonify({"message": "Attendance marked successfully", "data": echo, **echo}), 201

    @app.route("/session/<code>/attendance", methods=["GET"], endpoint="session_attendance")
    def session_attendance(code: str):
        rows = container.attendance_service.list_attendance(code)
        return jsonify([attendance_json(r) for r in rows])
