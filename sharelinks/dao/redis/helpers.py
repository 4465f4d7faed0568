import functools
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from sharelinks.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

# Errors Redis answers with while it can't serve the command right now
# (maxmemory reached, replica promoted after failover). BusyLoadingError
# is a ConnectionError subclass and needs no entry here.
REDIS_BACKEND_ERRORS = (redis.exceptions.OutOfMemoryError, redis.exceptions.ReadOnlyError)


def redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection and backend errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.ConnectionError, redis.exceptions.TimeoutError
            or one of REDIS_BACKEND_ERRORS.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError when Redis is unreachable
            or refuses to serve the command. Other Redis errors (e.g. WRONGTYPE)
            propagate unchanged.

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, token):
        ...     return self.redis.get(token)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except REDIS_BACKEND_ERRORS as e:
            raise DataStoreError(f'Redis at {redis_location(self.redis)} is unavailable ({e}).') from e

    return wrapper
