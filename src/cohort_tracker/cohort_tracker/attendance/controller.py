from __future__ import annotations

import io
from datetime import date

import qrcode
from flask import Flask, jsonify, request, send_file, url_for

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, auth_context, error_response, payload
from ..container import Container
from ..core.enums import FlowState, UnavailableReason
from ..core.exceptions import StoreError, ValidationError

_UNAVAILABLE_MESSAGES = {
    UnavailableReason.NOT_FOUND: "Attendance session not found",
    UnavailableReason.INACTIVE: "This attendance session is no longer active",
    UnavailableReason.EXPIRED: "This attendance session has expired",
}


def register(app: Flask, container: Container) -> None:
    def _attendance_link(session) -> str:
        base = app.config.get("PUBLIC_BASE_URL")
        if base:
            return f"{base.rstrip('/')}/attend/{session.session_code}"
        return url_for("attend", session_code=session.session_code, _external=True)

    def _unavailable(flow):
        return jsonify(
            {
                "success": False,
                "state": flow.state.value,
                "reason": flow.reason.value,
                "message": _UNAVAILABLE_MESSAGES[flow.reason],
            }
        ), 404 if flow.reason == UnavailableReason.NOT_FOUND else 410

    @app.route("/admin/sessions", methods=["GET"], endpoint="admin_sessions")
    @admin_required
    def admin_sessions():
        sessions = container.session_service.list_sessions()
        return jsonify({"success": True, "sessions": [s.to_dict() for s in sessions]})

    @app.route("/admin/sessions", methods=["POST"], endpoint="create_session")
    @admin_required
    def create_session():
        data = payload()
        session_date_s = data.get("session_date")
        try:
            session_date = parse_iso_date(session_date_s) if session_date_s else None
        except ValueError:
            raise ValidationError("Session date must be YYYY-MM-DD")

        s = container.session_service.create_session(
            session_name=data.get("session_name", ""),
            session_date=session_date,
            batch_name=data.get("batch_name"),
            duration_hours=data.get("duration_hours"),
            admin_id=auth_context().admin_id,
        )
        body = s.to_dict()
        body["attendance_url"] = _attendance_link(s)
        body["dashboard_url"] = url_for("attendance_view", public_id=s.public_id, _external=True)
        return jsonify({"success": True, "session": body}), 201

    @app.route("/admin/sessions/<int:session_id>/deactivate", methods=["POST"], endpoint="deactivate_session")
    @admin_required
    def deactivate_session(session_id: int):
        container.session_service.deactivate_session(session_id=session_id)
        return jsonify({"success": True})

    @app.route("/admin/sessions/<int:session_id>", methods=["DELETE"], endpoint="delete_session")
    @admin_required
    def delete_session(session_id: int):
        container.session_service.delete_session(session_id=session_id)
        return jsonify({"success": True})

    @app.route("/admin/sessions/<int:session_id>/qr", methods=["GET"], endpoint="session_qr_image")
    @admin_required
    def session_qr_image(session_id: int):
        """QR code pointing students at the session's attendance link."""
        s = container.session_service.get_session(session_id=session_id)

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(_attendance_link(s))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return send_file(buf, mimetype="image/png")

    @app.route("/admin/sessions/calendar", methods=["GET"], endpoint="sessions_calendar")
    @admin_required
    def sessions_calendar():
        today = date.today()
        try:
            year = int(request.args.get("year") or today.year)
            month = int(request.args.get("month") or today.month)
        except ValueError:
            raise ValidationError("year and month must be numbers")
        days = container.session_service.month_overview(year=year, month=month)
        return jsonify({"success": True, "year": year, "month": month, "days": days})

    @app.route("/attend/<session_code>", methods=["GET"], endpoint="attend")
    def attend(session_code: str):
        flow = container.new_attendance_flow()
        if flow.resolve(session_code) == FlowState.UNAVAILABLE:
            return _unavailable(flow)

        s = flow.session
        return jsonify(
            {
                "success": True,
                "state": flow.state.value,
                "session": {
                    "session_name": s.session_name,
                    "session_date": s.session_date.isoformat(),
                    "expires_at": s.expires_at.isoformat(),
                },
            }
        )

    @app.route("/attend/<session_code>", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance(session_code: str):
        flow = container.new_attendance_flow()
        if flow.resolve(session_code) == FlowState.UNAVAILABLE:
            return _unavailable(flow)

        try:
            result = flow.submit(payload().get("student_name"))
        except ValidationError as e:
            return error_response(str(e), 400)
        except StoreError:
            app.logger.exception("Error marking attendance")
            return error_response("Failed to mark attendance. Please try again.", 503)

        body = result.to_dict()
        body["success"] = True
        return jsonify(body), 200 if result.already_marked else 201

    @app.route("/attendance/view/<public_id>", methods=["GET"], endpoint="attendance_view")
    def attendance_view(public_id: str):
        snapshot = container.dashboard_service.load(public_id)
        body = snapshot.to_dict()
        body["success"] = True
        body["poll_seconds"] = app.config.get("DASHBOARD_POLL_SECONDS")
        return jsonify(body)
