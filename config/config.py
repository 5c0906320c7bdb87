"""Shared settings read from the environment (python-dotenv loads .env first)."""
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "cohort_tracker")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    PUBLIC_BASE_URL = os.environ.get("PUBLIC_BASE_URL", "")
    SESSION_DURATION_HOURS = int(os.environ.get("SESSION_DURATION_HOURS", "24"))
    AUTH_SESSION_HOURS = float(os.environ.get("AUTH_SESSION_HOURS", "12"))
    DASHBOARD_POLL_SECONDS = int(os.environ.get("DASHBOARD_POLL_SECONDS", "30"))


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
