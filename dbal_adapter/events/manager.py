# dbal_adapter/events/manager.py

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .names import Events, method_name

logger = logging.getLogger(__name__)

Listener = Union[Callable[[Any], Any], object]


class EventManager:
    """
    Name-keyed event dispatch.

    A listener is either a callable taking the payload, or an object with a
    method named after the event (``before-query`` -> ``before_query``).
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}

    # ---------------- Registration ----------------

    def add_event_listener(self, event_names: Union[str, Iterable[str]], listener: Listener) -> None:
        for name in _names(event_names):
            bucket = self._listeners.setdefault(name, [])
            if listener not in bucket:
                bucket.append(listener)

    def remove_event_listener(self, event_names: Union[str, Iterable[str]], listener: Listener) -> None:
        for name in _names(event_names):
            bucket = self._listeners.get(name)
            if not bucket:
                continue
            bucket[:] = [l for l in bucket if l != listener]
            if not bucket:
                del self._listeners[name]

    def add_event_subscriber(self, subscriber: Any) -> None:
        """Register an object exposing ``get_subscribed_events()``."""
        self.add_event_listener(subscriber.get_subscribed_events(), subscriber)

    def remove_event_subscriber(self, subscriber: Any) -> None:
        self.remove_event_listener(subscriber.get_subscribed_events(), subscriber)

    # ---------------- Accessors -------------------

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def get_listeners(self, event_name: Optional[str] = None) -> Any:
        if event_name is None:
            return {k: list(v) for k, v in self._listeners.items()}
        return list(self._listeners.get(event_name, []))

    # ---------------- Dispatch --------------------

    def dispatch_event(self, event_name: str, payload: Any = None) -> None:
        """
        Deliver ``payload`` to every listener of ``event_name`` in
        registration order.

        A failing listener is logged and skipped; it never interrupts the
        operation that emitted the event.
        """
        for listener in self.get_listeners(event_name):
            try:
                _resolve(listener, event_name)(payload)
            except Exception:
                logger.exception("Listener %r failed for event %s", listener, event_name)


def _names(event_names: Union[str, Iterable[str]]) -> List[str]:
    names = [event_names] if isinstance(event_names, str) else list(event_names)
    unknown = [n for n in names if n not in Events.ALL]
    if unknown:
        raise ValueError(f"Unknown event name(s): {unknown}; expected one of {list(Events.ALL)}")
    return names


def _resolve(listener: Listener, event_name: str) -> Callable[[Any], Any]:
    method = getattr(listener, method_name(event_name), None)
    if callable(method):
        return method
    if callable(listener):
        return listener
    raise TypeError(
        f"Listener {listener!r} is not callable and has no '{method_name(event_name)}' method"
    )


__all__ = ["EventManager", "Listener"]
