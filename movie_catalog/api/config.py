"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path

VERSION = "1.0.0"


def get_database_path() -> str:
    """Get database file path from env or default."""
    return os.getenv("DATABASE_URL", "sqlite:///").replace("sqlite:///", "") or str(
        Path(__file__).resolve().parents[2] / "data" / "movies.db"
    )


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_environment() -> str:
    """Get environment name (development|staging|production)."""
    return os.getenv("APP_ENV", "development")


def get_query_timeout() -> float:
    """Get per-query deadline in seconds."""
    return float(os.getenv("QUERY_TIMEOUT_SECONDS", "3"))


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "4000"))
