"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

INTERVIEW_SCORE_MIN = 0
INTERVIEW_SCORE_MAX = 10
ACTIVENESS_SCORE_MIN = 0
ACTIVENESS_SCORE_MAX = 100

SESSION_CODE_LENGTH = 8
PUBLIC_ID_LENGTH = 16
DEFAULT_SESSION_HOURS = 24
DEFAULT_POLL_SECONDS = 30
DEFAULT_AUTH_SESSION_HOURS = 12
DEFAULT_LIST_LIMIT = 500
