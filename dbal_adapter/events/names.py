"""
Names of the events dispatched by the adapter.
"""

from __future__ import annotations


class Events:
    """Event name constants."""

    ON_BEFORE_QUERY = "before-query"
    ON_AFTER_QUERY = "after-query"
    ON_BEFORE_NON_QUERY = "before-non-query"
    ON_AFTER_NON_QUERY = "after-non-query"
    ON_ERROR = "on-error"

    ALL = (
        ON_BEFORE_QUERY,
        ON_AFTER_QUERY,
        ON_BEFORE_NON_QUERY,
        ON_AFTER_NON_QUERY,
        ON_ERROR,
    )


def method_name(event_name: str) -> str:
    """Listener method name for an event ("before-query" -> "before_query")."""
    return event_name.replace("-", "_")


__all__ = ["Events", "method_name"]
