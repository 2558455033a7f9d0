from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import SyncOutcome
from ..core.exceptions import DataStoreError, NotFoundError

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def register(app: Flask, container: Container) -> None:
    def _dry_run() -> bool:
        return (request.args.get("dry_run") or "").strip().lower() in _TRUTHY

    def _unavailable(e: Exception):
        logger.error("Attendance sync failed: %s", e)
        return jsonify({"error": "Attendance data is temporarily unavailable"}), 503

    @app.route("/api/sync/attendance", methods=["POST"], endpoint="sync_attendance")
    def sync_attendance():
        try:
            summary = container.sync_service.run(dry_run=_dry_run())
        except DataStoreError as e:
            return _unavailable(e)
        return jsonify({"message": "Attendance sync completed", "results": summary.to_dict()})

    @app.route("/api/sync/attendance/student/<student_id>", methods=["POST"], endpoint="sync_student_attendance")
    def sync_student_attendance(student_id: str):
        try:
            outcome = container.sync_service.run_student(student_id, dry_run=_dry_run())
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except DataStoreError as e:
            return _unavailable(e)

        if outcome.outcome == SyncOutcome.ERROR:
            logger.error("Attendance sync failed for student %s: %s", student_id, outcome.error)
            return jsonify({"error": outcome.error, "student_id": student_id}), 503

        return jsonify({"message": "Student attendance synced", "student_id": student_id, "result": outcome.to_dict()})

    @app.route("/api/sync/attendance/class/<class_id>", methods=["POST"], endpoint="sync_class_attendance")
    def sync_class_attendance(class_id: str):
        try:
            summary = container.sync_service.run_class(class_id, dry_run=_dry_run())
        except DataStoreError as e:
            return _unavailable(e)
        return jsonify({"message": "Class attendance synced", "class_id": class_id, "results": summary.to_dict()})
