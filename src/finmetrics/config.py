"""Environment-driven settings for finmetrics."""

import os
from pathlib import Path
from typing import Optional

DB_PATH_ENV = "FINMETRICS_DB_PATH"
LOG_LEVEL_ENV = "FINMETRICS_LOG_LEVEL"
LOG_FILE_ENV = "FINMETRICS_LOG_FILE"

DEFAULT_DATA_DIR = Path.home() / ".finmetrics"
DEFAULT_LOG_LEVEL = "WARNING"


def get_database_path() -> str:
    """Return the database path from FINMETRICS_DB_PATH or the default location."""
    return os.environ.get(DB_PATH_ENV) or str(DEFAULT_DATA_DIR / "finmetrics.db")


def get_log_level() -> str:
    """Return the configured log level name."""
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()


def get_log_file() -> Optional[str]:
    """Return the log file path, or None to log to the console only."""
    return os.environ.get(LOG_FILE_ENV) or None
