"""Classification of database failures.

Transient failures (lost connections, pool and statement timeouts,
serialization conflicts) are worth retrying and must never be reported as a
permission denial. Everything else is a genuine error.
"""

from __future__ import annotations

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

# PostgreSQL SQLSTATE codes for conflicts that succeed on retry
SERIALIZATION_FAILURE = "40001"
DEADLOCK_DETECTED = "40P01"

_TRANSIENT_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, TimeoutError)
_RETRYABLE_SQLSTATES = frozenset({SERIALIZATION_FAILURE, DEADLOCK_DETECTED})


def sqlstate_of(error: DBAPIError) -> str | None:
    """Extract the SQLSTATE code from a wrapped driver error, if any."""
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_transient_database_error(error: BaseException) -> bool:
    """Check whether a database failure is transient and worth retrying.

    Args:
        error: The exception raised by SQLAlchemy or the driver

    Returns:
        True for connection loss, timeouts and serialization conflicts
    """
    if isinstance(error, _TRANSIENT_ERRORS):
        return True
    if isinstance(error, DBAPIError):
        return sqlstate_of(error) in _RETRYABLE_SQLSTATES
    return False
