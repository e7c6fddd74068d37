"""Database factory functions for creating store instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerdesk.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "LEDGERDESK_DB_PATH"


def default_database_path() -> str:
    """~/.ledgerdesk/ledgerdesk.db, creating the directory if needed."""
    db_dir = Path.home() / ".ledgerdesk"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "ledgerdesk.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite store instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            LEDGERDESK_DB_PATH environment variable, then defaults to
            ~/.ledgerdesk/ledgerdesk.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = default_database_path()

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
