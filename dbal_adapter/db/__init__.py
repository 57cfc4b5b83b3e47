"""
dbal_adapter.db

Database backend layer for the DBAL adapter.

This package provides:

- A backend-agnostic connection wrapper:
      * DBConnection
      * get_connection (factory from AdapterConfig or a params dict)

- Helper functions for parameter binding, row mapping and SQL display:
      * ParameterType
      * bind_params
      * row_to_dict
      * format_sql

- Concrete database backend implementations:
      * SQLiteBackend   (default: local development + tests)
      * PostgresBackend (psycopg2)

- Backend contracts:
      * DBBackend
      * BackendLike / ConnectionLike
      * ensure_backend / ensure_connection
"""

from __future__ import annotations

from typing import Any, Mapping, Union

from ..config import AdapterConfig
from ..errors import ConfigurationError
from .connection import DBConnection
from .sqlite_backend import SQLiteBackend
from .postgres_backend import PostgresBackend
from .backend_base import (
    DBBackend,
    BackendLike,
    ConnectionLike,
    ensure_backend,
    ensure_connection,
)
from .helpers import (
    ParameterType,
    bind_params,
    row_to_dict,
    sql_literal,
    format_sql,
)


def make_backend(driver: str, uri: str) -> DBBackend:
    """Instantiate the backend registered under ``driver``."""
    driver = (driver or "").strip().lower()
    if driver in ("sqlite", "sqlite3"):
        return SQLiteBackend(uri or ":memory:")
    if driver in ("postgres", "postgresql", "psycopg2"):
        if not uri:
            raise ConfigurationError("The postgres backend requires a DSN")
        return PostgresBackend(uri)
    raise ConfigurationError(f"Unknown database backend: {driver!r}")


def get_connection(params: Union[AdapterConfig, Mapping[str, Any]]) -> DBConnection:
    """
    Open a DBConnection.

    ``params`` is either an AdapterConfig or a mapping with:

        driver : "sqlite" | "postgres"
        path   : SQLite file (or ":memory:")
        dsn    : Postgres DSN
        url    : alias for path / dsn
    """
    if isinstance(params, AdapterConfig):
        backend = make_backend(params.db_backend, params.db_uri)
    else:
        if "driver" not in params:
            raise ConfigurationError("Connection params require a 'driver' key")
        uri = params.get("url") or params.get("path") or params.get("dsn") or ""
        backend = make_backend(params["driver"], uri)

    ensure_backend(backend)
    return DBConnection(backend.connect(), backend)


__all__ = [
    # Connection
    "DBConnection",
    "get_connection",
    "make_backend",

    # Backends
    "SQLiteBackend",
    "PostgresBackend",
    "DBBackend",
    "BackendLike",
    "ConnectionLike",
    "ensure_backend",
    "ensure_connection",

    # Helpers
    "ParameterType",
    "bind_params",
    "row_to_dict",
    "sql_literal",
    "format_sql",
]
