"""Translation of SQLAlchemy failures into domain errors.

Repositories wrap every statement in :func:`translate_errors` so nothing
above the persistence layer ever sees a driver exception, and nothing
below it turns a failure into an empty result.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from orderbot.domain.exceptions import ConflictError, StorageError, StoreTimeoutError

_TIMEOUT_MARKERS = ("database is locked", "timeout", "timed out", "lock wait")


@contextmanager
def translate_errors(action: str, *, unique_conflict: bool = False) -> Iterator[None]:
    """Re-raise SQLAlchemy errors raised while performing *action*.

    Args:
        action: Short description used in the error message.
        unique_conflict: Report integrity violations as ConflictError
            (the caller knows the only constraint that can fire is a
            uniqueness one). Otherwise they are StorageError.
    """
    try:
        yield
    except IntegrityError as exc:
        if unique_conflict:
            raise ConflictError(f"Cannot {action}: {exc.orig}") from exc
        raise StorageError(f"Cannot {action}: {exc.orig}") from exc
    except PoolTimeoutError as exc:
        raise StoreTimeoutError(f"Timed out trying to {action}") from exc
    except OperationalError as exc:
        if _looks_like_timeout(exc):
            raise StoreTimeoutError(f"Timed out trying to {action}: {exc.orig}") from exc
        raise StorageError(f"Cannot {action}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        raise StorageError(f"Cannot {action}: {exc}") from exc


def _looks_like_timeout(exc: OperationalError) -> bool:
    message = str(exc.orig).lower()
    return any(marker in message for marker in _TIMEOUT_MARKERS)
