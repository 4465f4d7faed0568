from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.memory import ShareLinkMemoryDAO
from sharelinks.dao.redis import ShareLinkRedisDAO
from sharelinks.dao.factory import create_share_link_dao


__all__ = [
    'ShareLinkBaseDAO',
    'ShareLinkMemoryDAO',
    'ShareLinkRedisDAO',
    'create_share_link_dao',
]
