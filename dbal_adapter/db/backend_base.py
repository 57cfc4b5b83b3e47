"""
Backend base interfaces for the DBAL adapter.

This module defines the minimal contracts that all database backends
(SQLite, Postgres, etc.) must satisfy.

It is intentionally light-weight:

- It does NOT depend on any specific DB driver.
- It only encodes the structural requirements assumed by:
      * dbal_adapter.db.connection.DBConnection
      * dbal_adapter.adapter.Adapter

Backends must expose:

    backend.connect()              -> raw DB-API connection
    backend.name                   -> "sqlite" | "postgres" | ...
    backend.last_insert_id_sql     -> statement returning the last generated id

The Adapter itself only talks to objects satisfying ConnectionLike.

This file provides:
- DBBackend: abstract base class
- BackendLike / ConnectionLike: structural protocols
- ensure_backend / ensure_connection: runtime validators
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Abstract Base Backend
# ---------------------------------------------------------------------------

class DBBackend(ABC):
    """
    Abstract base class for a DBAL backend.

    Concrete subclasses may define any constructor signature they want
    (e.g. SQLiteBackend(db_path), PostgresBackend(dsn)).
    """

    name: str = "abstract"
    last_insert_id_sql: str = ""

    @abstractmethod
    def connect(self) -> Any:
        """
        Acquire and return a new raw DB-API 2.0 connection.
        """
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Structural Protocols
# ---------------------------------------------------------------------------

@runtime_checkable
class BackendLike(Protocol):
    name: str
    last_insert_id_sql: str

    def connect(self) -> Any:
        ...


@runtime_checkable
class ConnectionLike(Protocol):
    """
    The connection interface consumed by the Adapter.

    Implementations raise on failure; the Adapter normalizes the error.
    """

    def execute_query(self, statement: str, params: Any = (), types: Any = ()) -> List[Dict[str, Any]]:
        ...

    def execute_update(self, statement: str, params: Any = (), types: Any = ()) -> int:
        ...

    def last_insert_id(self) -> str:
        ...


# ---------------------------------------------------------------------------
# Runtime Guards
# ---------------------------------------------------------------------------

def _missing(obj: Any, attrs: List[str]) -> List[str]:
    return [a for a in attrs if not hasattr(obj, a)]


def ensure_backend(backend: Any) -> BackendLike:
    """
    Validate that an object behaves like a DBAL backend.

    Raises:
        TypeError if required attributes are missing.
    """
    if not isinstance(backend, BackendLike):
        missing = _missing(backend, ["connect", "name", "last_insert_id_sql"])
        if missing:
            raise TypeError(
                f"Invalid DBAL backend {backend!r}: missing attributes {missing}"
            )
    return backend  # type: ignore[return-value]


def ensure_connection(connection: Any) -> ConnectionLike:
    """
    Validate that an object can be wrapped by the Adapter.

    Raises:
        TypeError if required methods are missing.
    """
    if not isinstance(connection, ConnectionLike):
        missing = _missing(connection, ["execute_query", "execute_update", "last_insert_id"])
        raise TypeError(
            f"Invalid DBAL connection {connection!r}: missing attributes {missing}"
        )
    return connection


__all__ = [
    "DBBackend",
    "BackendLike",
    "ConnectionLike",
    "ensure_backend",
    "ensure_connection",
]
