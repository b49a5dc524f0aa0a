"""Database layer for legendarios application."""

from legendarios.database.base import Database
from legendarios.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
