from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..container import Container
from ..core.exceptions import DataStoreError, NotFoundError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _unavailable(e: Exception):
        logger.error("Dashboard query failed: %s", e)
        return jsonify({"error": "Attendance data is temporarily unavailable"}), 503

    @app.route("/api/students/<student_id>/attendance", methods=["GET"], endpoint="student_attendance")
    def student_attendance(student_id: str):
        try:
            view = container.dashboard_service.student_attendance(student_id)
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except DataStoreError as e:
            return _unavailable(e)
        return jsonify(view.to_dict())

    @app.route("/api/classes/<class_id>/attendance", methods=["GET"], endpoint="class_attendance")
    def class_attendance(class_id: str):
        try:
            return jsonify(container.dashboard_service.class_attendance(class_id))
        except DataStoreError as e:
            return _unavailable(e)

    @app.route("/api/dashboard/attendance", methods=["GET"], endpoint="dashboard_attendance")
    def dashboard_attendance():
        try:
            return jsonify(container.dashboard_service.overview())
        except DataStoreError as e:
            return _unavailable(e)
