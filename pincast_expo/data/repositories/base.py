"""
Shared helpers for SQLAlchemy repositories.
"""

import functools

from sqlalchemy.exc import SQLAlchemyError

from pincast_expo.domain.exceptions import StorageError
from pincast_expo.infra.config.logging_config import get_logger

_log = get_logger("repo")


def storage_errors(operation: str):
    """Translate driver failures into ``StorageError`` for the API layer."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                _log.error("repo.storage_error", operation=operation, error=str(e))
                raise StorageError(f"Storage failure during {operation}") from e

        return wrapper

    return decorator
