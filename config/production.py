import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

SMTP_CONFIG = {
    "host": os.getenv("SMTP_HOST", "smtp.gmail.com"),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "username": os.getenv("EMAIL_USER", ""),
    "password": os.getenv("EMAIL_PASS", ""),
    "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "1"))),
    "sender": os.getenv("EMAIL_FROM", os.getenv("EMAIL_USER", "")),
    "recipients": [r.strip() for r in os.getenv("REPORT_RECIPIENTS", "").split(",") if r.strip()],
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "America/Argentina/Buenos_Aires")
SCHEDULER_ENABLED = bool(int(os.getenv("SCHEDULER_ENABLED", "1")))
REPORT_TICK_TIMEOUT_SECONDS = int(os.getenv("REPORT_TICK_TIMEOUT_SECONDS", "300"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
