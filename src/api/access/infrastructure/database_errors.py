"""Translation of transient database failures into UnavailableError."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from access.infrastructure.observability import DatabaseAvailabilityProbe
from access.ports.exceptions import UnavailableError
from infrastructure.database.exceptions import is_transient_database_error


@contextmanager
def unavailable_on_transient(
    operation: str, probe: DatabaseAvailabilityProbe
) -> Iterator[None]:
    """Re-raise transient database failures as UnavailableError.

    Non-transient errors propagate unchanged.

    Args:
        operation: Name of the repository operation, for logs
        probe: Probe recording the outage
    """
    try:
        yield
    except (SQLAlchemyError, TimeoutError) as e:
        if not is_transient_database_error(e):
            raise
        probe.database_unavailable(operation=operation, error=str(e))
        raise UnavailableError(f"Database unavailable during {operation}") from e
