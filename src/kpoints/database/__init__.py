"""Database layer for kpoints application."""

from kpoints.database.base import Database
from kpoints.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
