"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path


def get_database_url() -> str:
    """Get async SQLAlchemy database URL from env or default SQLite file."""
    url = os.getenv("DATABASE_URL", "")
    if url:
        return url
    db_path = Path(__file__).resolve().parents[2] / "data" / "movie_reviews.db"
    return f"sqlite+aiosqlite:///{db_path}"


def get_app_env() -> str:
    """Get deployment environment name (development or production)."""
    return os.getenv("APP_ENV", "production").lower()


def is_development() -> bool:
    """True when error details may be returned to clients."""
    return get_app_env() == "development"


def get_sql_echo() -> bool:
    """Whether SQLAlchemy should log every statement."""
    return os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_file() -> str | None:
    """Get log file name; None logs to console only."""
    return os.getenv("LOG_FILE") or None


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))
