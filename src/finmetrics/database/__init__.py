"""Database layer for finmetrics application."""

from finmetrics.database.base import Database
from finmetrics.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
