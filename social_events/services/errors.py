# social_events/services/errors.py
import logging
from functools import wraps
from typing import Callable, Any

from pymongo.errors import PyMongoError

# Get logger without configuring (let uvicorn handle logging configuration)
logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for service errors. Carries the HTTP status it maps to."""
    status_code = 500

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Missing or malformed input."""
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class ForbiddenError(ServiceError):
    """No record matches both the id and the caller's ownership key."""
    status_code = 403


class ConflictError(ServiceError):
    status_code = 409


class StorageError(ServiceError):
    """Database failure. The message is generic; the driver error is only logged."""
    status_code = 500


def storage_errors(message: str) -> Callable:
    """Decorator converting driver failures into StorageError(message)."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except ServiceError:
                # Re-raise service errors as-is
                raise
            except PyMongoError as e:
                logger.error(f"Storage error in {func.__name__}: {e}", exc_info=True)
                raise StorageError(message)
        return wrapper
    return decorator
