import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

SMTP_CONFIG = {
    "host": os.getenv("SMTP_HOST", "localhost"),
    "port": int(os.getenv("SMTP_PORT", "1025")),
    "username": os.getenv("EMAIL_USER", ""),
    "password": os.getenv("EMAIL_PASS", ""),
    "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "0"))),
    "sender": os.getenv("EMAIL_FROM", "timeclock@localhost"),
    "recipients": [r.strip() for r in os.getenv("REPORT_RECIPIENTS", "admin@localhost").split(",") if r.strip()],
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Fixed UTC-3 without DST, same offset as the business clock.
REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "America/Argentina/Buenos_Aires")
SCHEDULER_ENABLED = bool(int(os.getenv("SCHEDULER_ENABLED", "0")))
REPORT_TICK_TIMEOUT_SECONDS = int(os.getenv("REPORT_TICK_TIMEOUT_SECONDS", "300"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed sample employees on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
