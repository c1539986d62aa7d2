from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import to_iso
from ..common.http import base_url, json_body
from ..container import Container
from .model import Session


def session_summary(s: Session) -> dict:
    return {
        "code": s.code,
        "teacherName": s.teacher_name,
        "subject": s.subject,
        "location": s.location.as_dict(),
        "expiresAt": to_iso(s.expires_at),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/session", methods=["POST"], endpoint="create_session")
    def create_session():
        data = json_body()
        s = container.session_service.create_session(
            data.get("teacherName"),
            data.get("subject"),
            data.get("lat"),
            data.get("lng"),
            base_url=base_url(app),
        )
        app.logger.info("Session %s opened by %s for %s", s.code, s.teacher_name, s.subject)
        return (
            jsonify(
                {
                    "sessionId": s.session_id,
                    "code": s.code,
                    "link": s.link,
                    "expiresAt": to_iso(s.expires_at),
                }
            ),
            201,
        )

    @app.route("/session/<code>", methods=["GET"], endpoint="get_session")
    def get_session(code: str):
        s = container.session_service.get_active_session(code)
        return jsonify(session_summary(s))
