from sharelinks.dao.redis.redis_key_schema import RedisKeySchema
from sharelinks.dao.redis.mixins import RedisClientMixin
from sharelinks.dao.redis.share_link_redis_dao import ShareLinkRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShareLinkRedisDAO',
]
