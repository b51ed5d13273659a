import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv(
        "SQLALCHEMY_DATABASE_URI",
        "sqlite:///library.db"
    )

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # store calls fail with StorageUnavailable after this many seconds
    STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "5"))
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", "1")

    # Lending
    LOAN_OVERDUE_DAYS = int(os.getenv("LOAN_OVERDUE_DAYS", "4"))
    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

    # Late loans sweep (daily at 00:00 by default)
    SCHEDULER_ENABLED = _env_bool("SCHEDULER_ENABLED", "1")
    SCHEDULER_TIMEZONE = os.getenv("SCHEDULER_TIMEZONE", "UTC")
    LATE_LOANS_CRON_HOUR = int(os.getenv("LATE_LOANS_CRON_HOUR", "0"))
    LATE_LOANS_CRON_MINUTE = int(os.getenv("LATE_LOANS_CRON_MINUTE", "0"))
    LATE_LOANS_SUBJECT = os.getenv("LATE_LOANS_SUBJECT", "Book with overdue loan.")
    LATE_LOANS_MESSAGE = os.getenv(
        "LATE_LOANS_MESSAGE",
        "Attention! You have an overdue loan. Please return the book as soon as possible."
    )

    # Mail
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = True
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "noreply@library.local")
    MAIL_SUPPRESS_SEND = _env_bool("MAIL_SUPPRESS_SEND", "0")
