"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize Redis client
    - Healthcheck Redis client

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class ShareLinkRedisDAO(RedisClientMixin, ShareLinkBaseDAO):
        ...     pass
        ...
        >>> dao = ShareLinkRedisDAO(prefix="sharelinks:prod")
        >>> dao._healthcheck()
        True
"""

import redis

from sharelinks.dao.redis.redis_key_schema import RedisKeySchema
from sharelinks.dao.redis.helpers import redis_location
from sharelinks.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a DataStoreError if unreachable.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int = 6379,
        redis_db: int = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_ssl: bool = False,
        redis_socket_timeout: float | None = None,
        redis_socket_connect_timeout: float | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Initialize a Redis-based DAO

        The option is given to either use an existing Redis client instance or
        create one via the appropriate Redis connection parameters.

        Args:
            redis_host (str): Hostname of the Redis server. Defaults to 'localhost'.
            redis_port (int): Redis server port. Defaults to 6379.
            redis_db (int): Redis database index. Defaults to 0.
            redis_decode_responses (bool): If True, decodes Redis responses. Defaults to True.
            redis_username (str | None): Username for Redis authentication (if required).
            redis_password (str | None): Password for Redis authentication (if required).
            redis_ssl (bool): Connect over TLS. Defaults to False.
            redis_socket_timeout (float | None): Per-command socket timeout in seconds.
            redis_socket_connect_timeout (float | None): Connection timeout in seconds.
            redis_client (redis.Redis | None): Pre-initialized Redis client. If None, a new client is created.
            prefix (str | None): Namespace prefix for all Redis keys, e.g. 'app:env'.

        Raises:
            DataStoreError:
                If Redis healthcheck fails (connectivity issues).
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                ssl=redis_ssl,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_connect_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis connection cannot be established and raise_error=True.
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True
