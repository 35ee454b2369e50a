"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TOKEN_TTL_DAYS = 7
JWT_ALGORITHM = "HS256"

OTP_LENGTH = 6
OTP_TTL_MINUTES = 5

FULL_DAY_HOURS = 8.0
RECENT_WINDOW_DAYS = 7

MIN_PASSWORD_LENGTH = 6

DEFAULT_DB_CONNECT_TIMEOUT = 5
DEFAULT_DB_LOCK_WAIT_TIMEOUT = 5
DEFAULT_MAIL_FROM = "no-reply@company.local"
