import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "cohort_tracker_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

PUBLIC_BASE_URL = "http://testserver"
SESSION_DURATION_HOURS = 24
AUTH_SESSION_HOURS = 12
DASHBOARD_POLL_SECONDS = 30

AUTO_INIT_DB = False
AUTO_SEED_DB = False
