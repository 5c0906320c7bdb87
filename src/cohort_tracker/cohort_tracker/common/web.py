"""Flask glue shared by the feature controllers."""
from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..admins.context import AuthContext
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)

TOKEN_KEY = "auth_token"


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def payload() -> dict:
    """JSON body, or form fields for classic form posts."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def auth_context() -> AuthContext:
    """Per-request AuthContext; torn down in the teardown_request hook."""
    ctx = g.get("auth_context")
    if ctx is None:
        container = current_app.extensions["container"]
        token = session.get(TOKEN_KEY)
        ctx = AuthContext(container.auth_service).init(token)
        if token and ctx.session is None:
            # Lapsed or unknown to this process; drop it from the cookie.
            session.pop(TOKEN_KEY, None)
        g.auth_context = ctx
    return ctx


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if auth_context().admin is None:
            return error_response("Admin sign-in required", 401)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.teardown_request
    def _teardown_auth(_exc):
        ctx = g.pop("auth_context", None)
        if ctx is not None:
            ctx.teardown()

    @app.errorhandler(ValidationError)
    def _validation(e):
        return error_response(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e):
        return error_response(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e):
        return error_response(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return error_response(str(e), 404)

    @app.errorhandler(ConflictError)
    def _conflict(e):
        return error_response("Record already exists", 409)

    @app.errorhandler(StoreError)
    def _store(e):
        app.logger.error("Store error: %s", e)
        return error_response("The record store is unavailable, please try again", 503)

    @app.errorhandler(Exception)
    def _unexpected(e):
        if isinstance(e, HTTPException):
            return e
        app.logger.exception("Unhandled error")
        return error_response("Internal server error", 500)
