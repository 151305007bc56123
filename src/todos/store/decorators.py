from functools import wraps
import logging
from typing import Any, Callable, TypeVar
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from sqlalchemy.exc import InterfaceError, OperationalError

from src.common.exceptions import StoreUnavailableException

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

UNAVAILABLE_ERRORS = (
    OperationalError,
    InterfaceError,
    RedisConnectionError,
    RedisTimeoutError,
    OSError,
)


def translate_store_errors(func: F) -> F:
    """Turn connection failures of the storage medium into StoreUnavailableException."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except UNAVAILABLE_ERRORS as e:
            logger.error(f"Task store call '{func.__name__}' failed: {e}")
            raise StoreUnavailableException() from e

    return wrapper  # type: ignore
