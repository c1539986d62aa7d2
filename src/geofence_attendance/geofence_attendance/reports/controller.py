from __future__ import annotations

from flask import Flask, request

from ..container import Container
from .service import ReportFile


def register(app: Flask, container: Container) -> None:
    def _download(report: ReportFile):
        return app.response_class(
            report.content,
            mimetype=report.mimetype,
            headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
        )

    @app.route("/session/<code>/export/<fmt>", methods=["GET"], endpoint="export_session")
    def export_session(code: str, fmt: str):
        return _download(container.report_service.export_session(code, fmt))

    @app.route("/export/<fmt>", methods=["GET"], endpoint="export_subject")
    def export_subject(fmt: str):
        return _download(container.report_service.export_subject(request.args.get("subject"), fmt))
