"""Database layer for goldnotebook application."""

from goldnotebook.database.base import Database, STORAGE_KEY
from goldnotebook.database.factories import create_sqlite_database

__all__ = ["Database", "STORAGE_KEY", "create_sqlite_database"]
