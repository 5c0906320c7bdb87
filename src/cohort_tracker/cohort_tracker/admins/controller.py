from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import TOKEN_KEY, auth_context, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _session_body(s) -> dict:
        return {
            "success": True,
            "admin": {"id": s.admin_id, "email": s.email, "name": s.name},
        }

    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = payload()
        s = container.auth_service.sign_up(
            email=data.get("email", ""),
            password=data.get("password", ""),
            name=data.get("name", ""),
        )
        session[TOKEN_KEY] = s.token
        return jsonify(_session_body(s)), 201

    @app.route("/auth/signin", methods=["POST"], endpoint="signin")
    def signin():
        data = payload()
        s = container.auth_service.sign_in(email=data.get("email", ""), password=data.get("password", ""))
        session[TOKEN_KEY] = s.token
        return jsonify(_session_body(s))

    @app.route("/auth/signout", methods=["POST"], endpoint="signout")
    def signout():
        auth_context().sign_out()
        session.pop(TOKEN_KEY, None)
        return jsonify({"success": True})

    @app.route("/auth/session", methods=["GET"], endpoint="current_session")
    def current_session():
        ctx = auth_context()
        return jsonify(
            {
                "success": True,
                "loading": ctx.loading,
                "admin": ctx.admin.to_dict() if ctx.admin else None,
            }
        )
