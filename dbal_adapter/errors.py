"""
Error types raised by the DBAL adapter.

Every failure that happens while a statement is bound or executed is
normalized into a single DBALError so that callers only need one except
clause. The original driver exception is kept as ``previous`` and as the
``__cause__`` of the raised error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

ErrorCode = Union[int, str]


def _driver_code(exc: BaseException) -> ErrorCode:
    """Best-effort extraction of a driver specific error code."""
    # sqlite3 (Python 3.11+)
    code = getattr(exc, "sqlite_errorcode", None)
    if code is not None:
        return code

    # psycopg2
    code = getattr(exc, "pgcode", None)
    if code:
        return code

    # OSError and friends
    code = getattr(exc, "errno", None)
    if code is not None:
        return code

    return 0


class DBALError(Exception):
    """
    Database operation failure.

    Parameters
    ----------
    message : str
        Human-readable message, usually copied from the driver error.
    code : int | str
        Driver error code (0 when unknown).
    previous : BaseException, optional
        The exception this error was created from.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = 0,
        previous: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.previous = previous

    @classmethod
    def from_exception(cls, exc: BaseException) -> "DBALError":
        """
        Normalize any exception into a DBALError.

        An exception that already is a DBALError is returned unchanged.
        """
        if isinstance(exc, DBALError):
            return exc

        err = cls(str(exc), code=_driver_code(exc), previous=exc)
        err.__cause__ = exc
        return err

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible description of the error."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "code": self.code,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"


class ConfigurationError(DBALError):
    """Raised for unknown backends or a missing database driver."""


__all__ = [
    "DBALError",
    "ConfigurationError",
]
