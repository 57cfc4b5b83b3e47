"""
Shared DB helper utilities.

These wrappers ensure:
    - consistent parameter binding across backends (type hints)
    - predictable row→dict mapping
    - readable SQL for log records (literal interpolation)

Connections import this module as `.helpers`
"""

from __future__ import annotations

import json
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

Params = Union[Sequence[Any], Mapping[str, Any], None]
Types = Union[Sequence[Any], Mapping[str, Any], None]


# ----------------------------------------------------------------------
# Parameter types
# ----------------------------------------------------------------------

class ParameterType(str, Enum):
    """Type hints understood by bind_params()."""

    NULL = "null"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    BINARY = "binary"
    JSON = "json"
    DATE = "date"
    DATETIME = "datetime"


def _to_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _to_datetime(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


_CONVERTERS = {
    ParameterType.NULL: lambda v: None,
    ParameterType.INTEGER: int,
    ParameterType.FLOAT: float,
    ParameterType.STRING: str,
    ParameterType.BOOLEAN: bool,
    ParameterType.BINARY: bytes,
    ParameterType.JSON: lambda v: json.dumps(v, default=str),
    ParameterType.DATE: _to_date,
    ParameterType.DATETIME: _to_datetime,
}


def _coerce(value: Any, hint: Any) -> Any:
    if hint is None:
        return value
    try:
        ptype = ParameterType(hint)
    except ValueError:
        raise ValueError(
            f"Unknown parameter type {hint!r}; expected one of {[t.value for t in ParameterType]}"
        ) from None

    if value is None and ptype is not ParameterType.JSON:
        return None
    return _CONVERTERS[ptype](value)


def bind_params(params: Params = None, types: Types = None) -> Union[tuple, Dict[str, Any]]:
    """
    Apply type hints to parameters.

    Parameters
    ----------
    params:
        Positional sequence or named mapping of values.
    types:
        Hints aligned with ``params`` (same length for sequences, same keys
        for mappings). Empty or None means "pass values through".

    Returns
    -------
    tuple or dict
        Values ready for ``cursor.execute``.

    Raises
    ------
    ValueError
        Misaligned hints or an unknown type tag.
    """
    if params is None:
        params = ()

    if isinstance(params, Mapping):
        hints = types or {}
        if not isinstance(hints, Mapping):
            raise ValueError("Named parameters require named type hints")
        unknown = [k for k in hints if k not in params]
        if unknown:
            raise ValueError(f"Type hints for unknown parameters: {unknown}")
        return {k: _coerce(v, hints.get(k)) for k, v in params.items()}

    values = tuple(params)
    if not types:
        return values
    if isinstance(types, Mapping):
        raise ValueError("Positional parameters require positional type hints")

    hints = list(types)
    if len(hints) != len(values):
        raise ValueError(
            f"Got {len(values)} parameters but {len(hints)} type hints"
        )
    return tuple(_coerce(v, h) for v, h in zip(values, hints))


# ----------------------------------------------------------------------
# Row mapping
# ----------------------------------------------------------------------

def row_to_dict(row: Any, description: Optional[Sequence[Any]] = None) -> dict:
    """
    Convert sqlite3.Row, psycopg2 RealDictRow or a plain tuple to a dict.

    Parameters
    ----------
    row:
        Backend-specific row object.
    description:
        Optional ``cursor.description`` used to name tuple columns.
    """
    if row is None:
        return {}

    # sqlite3.Row, psycopg2.extras.RealDictRow, etc.
    if hasattr(row, "keys"):
        return {k: row[k] for k in row.keys()}

    if description:
        return {col[0]: value for col, value in zip(description, row)}

    # Fallback: treat as a tuple-like sequence
    return dict(enumerate(row))


# ----------------------------------------------------------------------
# SQL formatting (display only)
# ----------------------------------------------------------------------

_TOKEN = re.compile(
    r"""
      '(?:[^']|'')*'                     # single-quoted literal
    | "(?:[^"]|"")*"                     # quoted identifier
    | (?P<qmark>\?)                      # qmark placeholder
    | (?P<format>%s)                     # format placeholder
    | (?<!:):(?P<named>[A-Za-z_]\w*)     # :named placeholder
    | %\((?P<pyformat>\w+)\)s            # %(named)s placeholder
    """,
    re.VERBOSE,
)


def sql_literal(value: Any) -> str:
    """Render a Python value as an SQL literal for log output."""
    if value is None:
        return "NULL"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "X'" + bytes(value).hex().upper() + "'"
    if isinstance(value, (datetime, date)):
        value = value.isoformat(sep=" ") if isinstance(value, datetime) else value.isoformat()
    elif isinstance(value, (list, tuple)):
        return ", ".join(sql_literal(v) for v in value)
    elif isinstance(value, dict):
        value = json.dumps(value, default=str)
    return "'" + str(value).replace("'", "''") + "'"


def format_sql(sentence: str, params: Params = None) -> str:
    """
    Interpolate parameters into ``sentence`` for display.

    Placeholders inside quoted literals are left alone. Placeholders with
    no matching parameter are kept as written. The result is never sent to
    the database.
    """
    if not params:
        return sentence

    positional: List[Any] = [] if isinstance(params, Mapping) else list(params)
    named: Mapping[str, Any] = params if isinstance(params, Mapping) else {}
    cursor = 0

    def replace(match: "re.Match[str]") -> str:
        nonlocal cursor
        if match.group("qmark") or match.group("format"):
            if cursor < len(positional):
                cursor += 1
                return sql_literal(positional[cursor - 1])
            return match.group(0)
        key = match.group("named") or match.group("pyformat")
        if key is not None and key in named:
            return sql_literal(named[key])
        return match.group(0)

    return _TOKEN.sub(replace, sentence)


__all__ = [
    "ParameterType",
    "bind_params",
    "row_to_dict",
    "sql_literal",
    "format_sql",
]
