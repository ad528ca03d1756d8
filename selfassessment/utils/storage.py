"""Database error handling shared by the accessors."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from selfassessment.engine.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(db: DBSession, action: str) -> Iterator[None]:
    """Roll back and re-raise database failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Storage failure while trying to {action}: {e}")
        raise StorageError(f"Failed to {action}") from e
