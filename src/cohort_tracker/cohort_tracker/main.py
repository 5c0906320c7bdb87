from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .activeness.controller import register as register_activeness
from .admins.controller import register as register_admins
from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_AUTH_SESSION_HOURS, DEFAULT_POLL_SECONDS, DEFAULT_SESSION_HOURS
from .database.bootstrap import apply_schema, ensure_demo_admin, list_tables
from .interviews.controller import register as register_interviews

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PUBLIC_BASE_URL"] = getattr(settings, "PUBLIC_BASE_URL", "")
    app.config["DASHBOARD_POLL_SECONDS"] = int(getattr(settings, "DASHBOARD_POLL_SECONDS", DEFAULT_POLL_SECONDS))
    session_hours = int(getattr(settings, "SESSION_DURATION_HOURS", DEFAULT_SESSION_HOURS))
    auth_session_hours = float(getattr(settings, "AUTH_SESSION_HOURS", DEFAULT_AUTH_SESSION_HOURS))

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_admin(db_config)
            logger.info("demo admin ready")

        container = build_container(
            db_config=db_config, session_hours=session_hours, auth_session_hours=auth_session_hours
        )

    app.extensions["container"] = container

    register_error_handlers(app)
    register_admins(app, container)
    register_interviews(app, container)
    register_activeness(app, container)
    register_attendance(app, container)

    return app
