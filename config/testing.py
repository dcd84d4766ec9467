import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_test"),
    "connection_timeout": 5,
}

SMTP_CONFIG = {
    "host": "localhost",
    "port": 1025,
    "use_tls": False,
    "sender": "timeclock@localhost",
    "recipients": ["admin@localhost"],
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

REPORT_TIMEZONE = "America/Argentina/Buenos_Aires"
SCHEDULER_ENABLED = False
REPORT_TICK_TIMEOUT_SECONDS = 5

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
