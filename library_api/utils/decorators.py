from functools import wraps

from flask import current_app
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from library_api.errors import StorageUnavailable
from library_api.extensions import db


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, (OperationalError, PoolTimeoutError)):
        return True
    return isinstance(exc, DBAPIError) and bool(exc.connection_invalidated)


def storage_call(fn):
    """Turn timeouts and lost connections into StorageUnavailable.

    The session is rolled back first so the next call starts clean.
    Integrity errors and anything else propagate untouched.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (DBAPIError, PoolTimeoutError) as e:
            if not _is_transient(e):
                raise
            db.session.rollback()
            current_app.logger.warning(f"[storage] {fn.__qualname__} failed: {e}")
            raise StorageUnavailable() from e
    return wrapper
