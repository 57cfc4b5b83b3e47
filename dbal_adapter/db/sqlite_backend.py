"""
SQLite backend for the DBAL adapter.

Used for:
    - local development
    - tests (":memory:")
    - small embedded databases

Implements:
    - connect()
    - last_insert_id_sql
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from .backend_base import DBBackend


MEMORY = ":memory:"


class SQLiteBackend(DBBackend):
    """
    Minimal SQLite backend.

    Parameters
    ----------
    db_path : str
        Path to the SQLite database file, or ":memory:".
    """

    name = "sqlite"
    last_insert_id_sql = "SELECT last_insert_rowid()"

    def __init__(self, db_path: str = MEMORY):
        self.path = db_path if db_path == MEMORY else Path(db_path)

    def connect(self) -> sqlite3.Connection:
        """
        Open a SQLite3 connection with row_factory=dict-like access.

        The connection runs in autocommit mode (isolation_level=None) and
        enforces foreign keys.
        """
        conn = sqlite3.connect(str(self.path), isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def __repr__(self) -> str:
        return f"SQLiteBackend({str(self.path)!r})"
