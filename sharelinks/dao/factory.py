"""Select the share link DAO for the configured backend.

The Lambda configuration names its backend via `active_backend` and carries
that backend's connection parameters under the same key:

    {"active_backend": "redis", "redis": {"host": "...", "port": 6379, "db": 0}}
"""

import logging
import threading

from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.memory import ShareLinkMemoryDAO
from sharelinks.dao.redis import ShareLinkRedisDAO
from sharelinks.exceptions import BadConfigurationError
from sharelinks.types import AppConfig


logger = logging.getLogger(__name__)

# One store per process for the memory backend, so that links created by one
# invocation resolve in the next one (warm Lambda container, SAM local API).
_memory_dao: ShareLinkMemoryDAO | None = None
_memory_dao_lock = threading.Lock()


def _shared_memory_dao() -> ShareLinkMemoryDAO:
    global _memory_dao
    with _memory_dao_lock:
        if _memory_dao is None:
            _memory_dao = ShareLinkMemoryDAO()
        return _memory_dao


def create_share_link_dao(app_config: AppConfig, prefix: str | None = None) -> ShareLinkBaseDAO:
    """Build the share link DAO named by `app_config['active_backend']`.

    Raises:
        BadConfigurationError: If the backend is missing or unsupported.
        DataStoreError: If the backend is unreachable.
    """
    backend = app_config.get('active_backend')

    if backend == 'redis':
        redis_config = {f'redis_{k}': v for k, v in app_config.get('redis', {}).items()}
        logger.debug('Using Redis as the backend database for share links.')
        return ShareLinkRedisDAO(**redis_config, prefix=prefix)
    if backend == 'memory':
        logger.debug('Using process memory as the backend database for share links.')
        return _shared_memory_dao()

    raise BadConfigurationError(f'Unsupported share link backend: {backend!r}')
