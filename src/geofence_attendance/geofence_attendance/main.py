from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    """Flask app factory.

    Pass a prebuilt container (e.g. in-memory repositories in tests) to skip
    the MySQL bootstrap.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["APP_BASE_URL"] = getattr(settings, "APP_BASE_URL", "")
    app.config["PORT"] = int(getattr(settings, "PORT", 3000))
    app.logger.setLevel(logging.DEBUG if app.config["DEBUG"] else logging.INFO)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe()
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            ttl_minutes=int(getattr(settings, "SESSION_TTL_MINUTES", 10)),
            code_max_attempts=int(getattr(settings, "CODE_MAX_ATTEMPTS", 5)),
            max_distance_meters=float(getattr(settings, "MAX_DISTANCE_METERS", 3000)),
        )
        atexit.register(container.close)

    app.extensions["attendance_container"] = container
    app.logger.info("geofence radius=%.0fm", container.attendance_service.max_distance_meters)

    register_error_handlers(app)
    register_sessions(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
