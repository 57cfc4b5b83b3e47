"""
dbal_adapter.events

Event names, payload records and the name-keyed EventManager used to
notify listeners before and after each statement, and on errors.
"""

from .names import Events
from .manager import EventManager
from .payloads import (
    EventPayload,
    EventBeforePayload,
    EventBeforeEventPayload,
    EventAfterPayload,
    EventErrorPayload,
    serialize_payload,
)

__all__ = [
    "Events",
    "EventManager",

    # Payloads
    "EventPayload",
    "EventBeforePayload",
    "EventBeforeEventPayload",
    "EventAfterPayload",
    "EventErrorPayload",
    "serialize_payload",
]
