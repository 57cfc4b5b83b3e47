"""
Instrumented adapter over a DB-API connection.

Adapter is the single entrypoint callers use to run statements:

    adapter = Adapter.from_config(logger=logging.getLogger("sql"),
                                  event_manager=manager)
    rows = adapter.query("SELECT * FROM users WHERE id = ?", [1])
    affected = adapter.non_query("DELETE FROM users WHERE id = ?", [1])

Each call:
    - trims the statement
    - notifies  before-query / before-non-query
    - executes and times the statement on the wrapped connection
    - notifies  after-query / after-non-query   (result + SqlPerformance)
    - logs a performance record at INFO

On failure the error is normalized to DBALError, logged at ERROR, sent to
``on-error`` listeners and re-raised. The logger and the event manager are
both optional; without them the corresponding steps are no-ops. A sink or
logger that raises is reported through this module's logger and never
changes the outcome of the statement.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from .config import AdapterConfig, load_config
from .db import get_connection
from .db.backend_base import ConnectionLike, ensure_connection
from .db.helpers import Params, Types, format_sql
from .errors import DBALError
from .events import (
    Events,
    EventManager,
    EventAfterPayload,
    EventBeforePayload,
    EventErrorPayload,
    EventPayload,
)
from .events.payloads import freeze
from .performance import SqlPerformance, timed
from .pipeline import Pipeline

logger = logging.getLogger(__name__)


class Adapter:
    """
    Facade holding three externally owned collaborators.

    Parameters
    ----------
    connection : ConnectionLike
        Object with execute_query / execute_update / last_insert_id
        (normally a DBConnection).
    logger : logging.Logger, optional
        Receives performance records (INFO) and failures (ERROR).
    event_manager : EventManager, optional
        Receives before / after / error notifications.
    """

    def __init__(
        self,
        connection: ConnectionLike,
        logger: Optional[logging.Logger] = None,
        event_manager: Optional[EventManager] = None,
    ) -> None:
        self.connection = ensure_connection(connection)
        self.logger = logger
        self.event_manager = event_manager

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_config(
        cls,
        config: Optional[AdapterConfig] = None,
        *,
        logger: Optional[logging.Logger] = None,
        event_manager: Optional[EventManager] = None,
    ) -> "Adapter":
        """
        Open a connection for ``config`` (or the environment) and wrap it.

        When ``config.enable_logging`` is set and no logger is given, the
        logger named ``config.logger_name`` is attached.
        """
        cfg = config or load_config()

        if logger is None and cfg.enable_logging:
            logging.basicConfig(level=cfg.log_level)
            logger = logging.getLogger(cfg.logger_name)

        return cls(get_connection(cfg), logger=logger, event_manager=event_manager)

    @classmethod
    def from_params(
        cls,
        params: Dict[str, Any],
        *,
        logger: Optional[logging.Logger] = None,
        event_manager: Optional[EventManager] = None,
    ) -> "Adapter":
        """Open a connection from a ``{"driver": ..., "path"/"dsn": ...}`` dict."""
        return cls(get_connection(params), logger=logger, event_manager=event_manager)

    def set_logger(self, logger: Optional[logging.Logger]) -> "Adapter":
        self.logger = logger
        return self

    def set_event_manager(self, event_manager: Optional[EventManager]) -> "Adapter":
        self.event_manager = event_manager
        return self

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def query(self, sentence: str, params: Params = None, types: Types = None) -> List[Dict[str, Any]]:
        """
        Run a read statement and return every row as a dict.

        Raises
        ------
        DBALError
            Any failure while binding or executing the statement.
        """
        return self._run(
            "query",
            Events.ON_BEFORE_QUERY,
            Events.ON_AFTER_QUERY,
            self.connection.execute_query,
            lambda rows: rows,
            sentence,
            params,
            types,
        )

    def non_query(self, sentence: str, params: Params = None, types: Types = None) -> int:
        """
        Run a write statement and return the number of affected rows.

        Raises
        ------
        DBALError
            Any failure while binding or executing the statement.
        """
        return self._run(
            "non_query",
            Events.ON_BEFORE_NON_QUERY,
            Events.ON_AFTER_NON_QUERY,
            self.connection.execute_update,
            lambda affected: {"affectedRows": affected},
            sentence,
            params,
            types,
        )

    def last_insert_id(self) -> str:
        return self.connection.last_insert_id()

    def _run(
        self,
        method: str,
        before_event: str,
        after_event: str,
        execute: Callable[..., Any],
        event_result: Callable[[Any], Any],
        sentence: str,
        params: Params,
        types: Types,
    ) -> Any:
        sentence = sentence.strip()
        params = freeze(params)
        types = freeze(types)
        location = f"{type(self).__name__}.{method}"

        def execute_timed(_: Any):
            result, elapsed = timed(execute, sentence, params, types)
            return result, self.calculate_performance(elapsed)

        def notify_after(outcome) -> None:
            result, performance = outcome
            self.notify(
                after_event,
                EventAfterPayload(sentence, params, types, event_result(result), performance),
            )

        def normalize(exc: BaseException):
            raise DBALError.from_exception(exc)

        # Only binding and execution can fail the call; sinks and logging
        # go through _guarded.
        pipeline = (
            Pipeline.of(lambda: self._guarded(
                self.notify, before_event, EventBeforePayload(sentence, params, types)))
            .then(execute_timed)
            .tap(lambda outcome: self._guarded(notify_after, outcome))
            .tap(lambda outcome: self._guarded(self.log_performance, sentence, params, outcome[1]))
            .then(lambda outcome: outcome[0])
            .catch(normalize)
            .tap_catch(lambda err: self._guarded(self.log_error, location, err))
            .tap_catch(lambda err: self._guarded(
                self.notify, Events.ON_ERROR, EventErrorPayload(sentence, params, types, err)))
        )
        return pipeline()

    def _guarded(self, fn: Callable[..., Any], *args: Any) -> None:
        """Run a notification or logging step; a failure is logged, never raised."""
        try:
            fn(*args)
        except Exception:
            logger.exception("%s failed in %s", getattr(fn, "__name__", fn), type(self).__name__)

    # ------------------------------------------------------------------
    # Performance
    # ------------------------------------------------------------------

    def calculate_performance(self, runtime: float) -> SqlPerformance:
        return SqlPerformance.from_runtime(runtime)

    def log_performance(self, sentence: str, params: Params, performance: SqlPerformance) -> None:
        record = {
            "sql": format_sql(sentence, params),
            "run_time": performance.runtime,
            "prettyRunTime": performance.pretty_runtime,
            "memory": performance.memory,
        }
        self.log_info(json.dumps(record, default=str, ensure_ascii=False))

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def log(self, level: Any, message: str) -> None:
        """
        Forward ``message`` to the attached logger, if any.

        ``level`` is a logging level number or a name such as "info".
        """
        if self.logger is None:
            return
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO
        self.logger.log(level, message)

    def log_error(self, location: str, exc: BaseException) -> None:
        message = exc.message if isinstance(exc, DBALError) else str(exc)
        self.log(logging.ERROR, f"Error in the {location}(...) -> {message}")

    def log_info(self, message: str) -> None:
        self.log(logging.INFO, message)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def notify(self, event_name: str, payload: EventPayload) -> "Adapter":
        if self.event_manager is not None:
            self.event_manager.dispatch_event(event_name, payload)
        return self

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        close = getattr(self.connection, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "Adapter":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


__all__ = ["Adapter"]
