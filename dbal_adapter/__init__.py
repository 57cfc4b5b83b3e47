"""
dbal_adapter

Top-level package initializer for the instrumented DBAL adapter.

Submodules include:
    - adapter      (Adapter: query / non_query / last_insert_id)
    - pipeline     (Pipeline combinator)
    - performance  (SqlPerformance)
    - events/      (names, payloads, EventManager)
    - db/          (backends, DBConnection, helpers)
    - errors       (DBALError)
    - config       (AdapterConfig, load_config)
"""

from .config import AdapterConfig, load_config
from .errors import DBALError, ConfigurationError
from .performance import SqlPerformance
from .pipeline import Pipeline
from .events import Events, EventManager
from .adapter import Adapter

__all__ = [
    "Adapter",
    "AdapterConfig",
    "load_config",
    "DBALError",
    "ConfigurationError",
    "SqlPerformance",
    "Pipeline",
    "Events",
    "EventManager",
]
