from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, auth_context, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _round_dict(r) -> dict:
        return {
            "id": r.round_id,
            "student_name": r.student_name,
            "round_number": r.round_number,
            "score": r.score,
            "feedback": r.feedback,
            "created_at": r.created_at.isoformat(),
        }

    @app.route("/admin/interviews", methods=["GET"], endpoint="admin_interviews")
    @admin_required
    def admin_interviews():
        rounds = container.interview_service.list_rounds()
        return jsonify({"success": True, "rounds": [_round_dict(r) for r in rounds]})

    @app.route("/admin/interviews", methods=["POST"], endpoint="add_interview_round")
    @admin_required
    def add_interview_round():
        data = payload()
        round_id = container.interview_service.add_round(
            student_name=data.get("student_name", ""),
            score=data.get("score"),
            round_number=data.get("round_number", 1),
            feedback=data.get("feedback"),
            admin_id=auth_context().admin_id,
        )
        return jsonify({"success": True, "id": round_id}), 201

    @app.route("/admin/interviews/<int:round_id>", methods=["DELETE"], endpoint="delete_interview_round")
    @admin_required
    def delete_interview_round(round_id: int):
        container.interview_service.delete_round(round_id=round_id)
        return jsonify({"success": True})

    @app.route("/leaderboard", methods=["GET"], endpoint="leaderboard")
    def leaderboard():
        board = container.interview_service.leaderboard()
        return jsonify(
            {
                "success": True,
                "students": [m.to_dict() for m in board.students],
                "summary": board.summary.to_dict(),
            }
        )
