import os

from .config import Config, DB_CONFIG

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = dict(DB_CONFIG)

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

PUBLIC_BASE_URL = Config.PUBLIC_BASE_URL
SESSION_DURATION_HOURS = Config.SESSION_DURATION_HOURS
AUTH_SESSION_HOURS = Config.AUTH_SESSION_HOURS
DASHBOARD_POLL_SECONDS = Config.DASHBOARD_POLL_SECONDS

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create the demo admin on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
