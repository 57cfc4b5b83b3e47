"""
Connection wrapper used by the Adapter.

This file defines:
- DBConnection: a wrapper around a live DB-API 2.0 handle that implements
  the ConnectionLike interface (execute_query / execute_update /
  last_insert_id)

Backends must expose:
    backend.connect()            -> raw connection
    backend.last_insert_id_sql   -> statement returning the last generated id
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from . import helpers
from .helpers import Params, Types

logger = logging.getLogger(__name__)


class DBConnection:
    """
    Thin wrapper around a raw DB-API 2.0 connection.

    Responsibilities:
        - Bind parameters according to their type hints
        - Normalize rows across backends (return Python dicts)
        - Report affected rows and generated ids

    Notes:
        - Backends open their connections in autocommit mode; this wrapper
          never begins, commits or rolls back transactions itself
        - Driver errors propagate unchanged
        - Safe to close() multiple times
    """

    def __init__(self, raw_conn: Any, backend: Any):
        self.raw = raw_conn
        self.backend = backend
        self.closed = False

    # ------------------------------------------------------------------
    # SQL execution
    # ------------------------------------------------------------------

    def _execute(self, statement: str, params: Params, types: Types):
        bound = helpers.bind_params(params, types)
        cur = self.raw.cursor()
        try:
            cur.execute(statement, bound)
        except Exception:
            cur.close()
            raise
        return cur

    def execute_query(self, statement: str, params: Params = None, types: Types = None) -> List[Dict[str, Any]]:
        """
        Execute a SELECT statement and return every row as a dict.
        """
        cur = self._execute(statement, params, types)
        try:
            rows = cur.fetchall()
            return [helpers.row_to_dict(r, cur.description) for r in rows]
        finally:
            cur.close()

    def execute_update(self, statement: str, params: Params = None, types: Types = None) -> int:
        """
        Execute an INSERT / UPDATE / DELETE / DDL statement.

        Returns the number of affected rows (0 when the driver reports -1,
        e.g. for DDL).
        """
        cur = self._execute(statement, params, types)
        try:
            return max(cur.rowcount, 0)
        finally:
            cur.close()

    def last_insert_id(self) -> str:
        """
        Identifier generated by the most recent INSERT on this connection.
        """
        cur = self.raw.cursor()
        try:
            cur.execute(self.backend.last_insert_id_sql)
            row = cur.fetchone()
        finally:
            cur.close()

        if row is None:
            return "0"
        value = next(iter(row.values())) if hasattr(row, "values") else row[0]
        return str(value if value is not None else 0)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """
        Close the underlying connection safely.
        """
        if self.closed:
            return
        try:
            self.raw.close()
        except Exception:
            # Allow double-close or backend errors w/out propagating
            logger.debug("Error while closing %s connection", self.backend.name, exc_info=True)
        self.closed = True

    def __enter__(self) -> "DBConnection":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"DBConnection(backend={self.backend.name!r})"


__all__ = ["DBConnection"]
