"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from legendarios.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "LEGENDARIOS_DB_PATH"


def default_database_path() -> Path:
    """Return ~/.legendarios/legendarios.db, creating the directory."""
    db_dir = Path.home() / ".legendarios"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "legendarios.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            LEGENDARIOS_DB_PATH environment variable, then defaults to
            ~/.legendarios/legendarios.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = str(default_database_path())

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
