"""Storage layer for ledgerdesk."""

from ledgerdesk.database.base import Database
from ledgerdesk.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
