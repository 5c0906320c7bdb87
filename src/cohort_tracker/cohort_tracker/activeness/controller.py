from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, auth_context, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _record_dict(r) -> dict:
        return {
            "id": r.record_id,
            "student_name": r.student_name,
            "activeness_score": r.activeness_score,
            "duration_minutes": r.duration_minutes,
            "zoom_session_id": r.zoom_session_id,
            "created_at": r.created_at.isoformat(),
        }

    @app.route("/activeness", methods=["GET"], endpoint="activeness_board")
    def activeness_board():
        records = container.activeness_service.list_scores()
        return jsonify({"success": True, "records": [_record_dict(r) for r in records]})

    @app.route("/admin/activeness", methods=["POST"], endpoint="add_activeness")
    @admin_required
    def add_activeness():
        data = payload()
        record_id = container.activeness_service.add_score(
            student_name=data.get("student_name", ""),
            activeness_score=data.get("activeness_score"),
            duration_minutes=data.get("duration_minutes"),
            zoom_session_id=data.get("zoom_session_id"),
            admin_id=auth_context().admin_id,
        )
        return jsonify({"success": True, "id": record_id}), 201

    @app.route("/admin/activeness/<int:record_id>", methods=["DELETE"], endpoint="delete_activeness")
    @admin_required
    def delete_activeness(record_id: int):
        container.activeness_service.delete_score(record_id=record_id)
        return jsonify({"success": True})
