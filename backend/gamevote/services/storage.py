from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from gamevote import db
from gamevote.exceptions import StorageError


@contextmanager
def storage_guard(action: str):
    """Roll back and re-raise database failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StorageError(f"{action} failed", {'cause': type(exc).__name__}) from exc
