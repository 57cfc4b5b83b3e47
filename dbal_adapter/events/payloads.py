"""
Structured Event Payloads
=========================

Immutable records describing one statement at three points of its life:

    - EventBeforePayload  – emitted before execution
    - EventAfterPayload   – emitted after a successful execution
    - EventErrorPayload   – emitted when execution failed

Every payload produces a JSON-compatible dict through ``to_dict()``.
The row set carried by EventAfterPayload is intentionally left out of the
serialized form; listeners read it from ``payload.result``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Sequence, Union

from ..errors import DBALError
from ..performance import SqlPerformance

Params = Union[Sequence[Any], Mapping[str, Any]]
Types = Union[Sequence[Any], Mapping[str, Any]]

PayloadKind = Literal["before", "after", "error"]


def _plain(values: Any) -> Any:
    """Copy params/types into plain lists or dicts for serialization."""
    if isinstance(values, Mapping):
        return {k: _type_name(v) for k, v in values.items()}
    return [_type_name(v) for v in values]


def _type_name(value: Any) -> Any:
    # ParameterType members serialize by value
    return value.value if isinstance(value, Enum) else value


def freeze(values: Any) -> Union[tuple, Mapping[str, Any]]:
    """Read-only copy of params/types: a tuple, or a mapping proxy over a dict copy."""
    if values is None:
        return ()
    if isinstance(values, Mapping):
        return MappingProxyType(dict(values))
    return tuple(values)


# ---------------------------------------------------------------------------
# Base payload
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EventPayload:
    """
    Fields shared by every payload.

    sentence : str
        The (trimmed) SQL statement.
    params : sequence or mapping
        Bound values, positional or named. Stored as a tuple or a
        read-only mapping, so listeners cannot change what gets executed.
    types : sequence or mapping
        Type hints aligned with ``params``; empty means "infer".
    """

    sentence: str
    params: Params = ()
    types: Types = ()

    kind = "base"

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", freeze(self.params))
        object.__setattr__(self, "types", freeze(self.types))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentence": self.sentence,
            "params": _plain(self.params),
            "types": _plain(self.types),
        }


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EventBeforePayload(EventPayload):
    """Emitted prior to execution."""

    kind = "before"


@dataclass(frozen=True)
class EventAfterPayload(EventPayload):
    """
    Emitted after a successful execution.

    ``result`` is the row list for reads and ``{"affectedRows": n}`` for
    writes.
    """

    result: Any = None
    performance: Optional[SqlPerformance] = None

    kind = "after"

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["performance"] = self.performance.to_dict() if self.performance else None
        return payload


@dataclass(frozen=True)
class EventErrorPayload(EventPayload):
    """Emitted when execution failed."""

    error: Optional[DBALError] = None

    kind = "error"

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["error"] = self.error.to_dict() if self.error is not None else None
        return payload


# Older name of EventBeforePayload.
EventBeforeEventPayload = EventBeforePayload


def serialize_payload(payload: EventPayload) -> Dict[str, Any]:
    """Serialize any payload variant into a JSON-compatible dict."""
    return payload.to_dict()


__all__ = [
    "EventPayload",
    "EventBeforePayload",
    "EventBeforeEventPayload",
    "EventAfterPayload",
    "EventErrorPayload",
    "PayloadKind",
    "serialize_payload",
    "freeze",
]
