"""Database layer for boojet application."""

from boojet.database.base import Database
from boojet.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
