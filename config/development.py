import os

# Unset on purpose in most dev setups; TokenService logs the fallback key.
JWT_SECRET = os.getenv("JWT_SECRET")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "company_portal"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

RESEND_API_KEY = os.getenv("RESEND_API_KEY")
MAIL_FROM = os.getenv("MAIL_FROM", "no-reply@company.local")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also upsert the demo accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

EXPOSE_ACCOUNT_EXISTENCE = bool(int(os.getenv("EXPOSE_ACCOUNT_EXISTENCE", "1")))
