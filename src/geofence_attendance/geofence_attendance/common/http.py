from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def base_url(app: Flask) -> str:
    return app.config.get("APP_BASE_URL") or request.host_url.rstrip("/")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify(e.payload()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # Stack goes to the log only, never to the client.
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"message": "Internal Server Error"}), 500
