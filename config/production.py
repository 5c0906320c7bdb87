import os

from .config import Config, DB_CONFIG

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = dict(DB_CONFIG)

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

PUBLIC_BASE_URL = Config.PUBLIC_BASE_URL
SESSION_DURATION_HOURS = Config.SESSION_DURATION_HOURS
AUTH_SESSION_HOURS = Config.AUTH_SESSION_HOURS
DASHBOARD_POLL_SECONDS = Config.DASHBOARD_POLL_SECONDS

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
