import logging

import pytest

from dbal_adapter import Adapter, EventManager, Events
from dbal_adapter.db import get_connection


class Recorder:
    """Listener that keeps every (event_name, payload) it receives."""

    def __init__(self):
        self.events = []

    def for_event(self, name):
        # Callables only receive the payload, so bind the name here.
        def listener(payload):
            self.events.append((name, payload))

        return listener

    @property
    def names(self):
        return [name for name, _ in self.events]

    def payloads(self, name):
        return [p for n, p in self.events if n == name]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def event_manager(recorder):
    manager = EventManager()
    for name in Events.ALL:
        manager.add_event_listener(name, recorder.for_event(name))
    return manager


@pytest.fixture
def sql_logger():
    return logging.getLogger("tests.sql")


@pytest.fixture
def connection():
    """In-memory SQLite connection with a small users table."""
    conn = get_connection({"driver": "sqlite", "path": ":memory:"})
    conn.execute_update(
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, active INTEGER)"
    )
    for name in ("ada", "grace", "linus"):
        conn.execute_update("INSERT INTO users (name, active) VALUES (?, ?)", [name, 1])
    yield conn
    conn.close()


@pytest.fixture
def adapter(connection, sql_logger, event_manager):
    return Adapter(connection, logger=sql_logger, event_manager=event_manager)


@pytest.fixture
def bare_adapter(connection):
    return Adapter(connection)
