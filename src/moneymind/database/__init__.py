"""Database layer for moneymind application."""

from moneymind.database.base import Database
from moneymind.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
