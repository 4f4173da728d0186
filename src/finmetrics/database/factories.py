"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from finmetrics.config import get_database_path
from finmetrics.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks the
            FINMETRICS_DB_PATH environment variable, then defaults to
            ~/.finmetrics/finmetrics.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = get_database_path()
        Path(database_path).parent.mkdir(parents=True, exist_ok=True)

    db = SQLAlchemyDatabase(f"sqlite:///{database_path}")
    db.database_path = database_path
    return db
