"""Data Access Object (DAO) implementation for managing share links in Redis

This module provides a Redis-based implementation of ShareLinkBaseDAO.

Responsibilities:
    - Insert share links with a TTL, at most once per token;
    - Retrieve share links and compute their expiry from the remaining TTL;
    - Translate Redis connectivity issues into DataStoreError.

Classes:
    ShareLinkRedisDAO:
        DAO for storing and retrieving ShareLinkModel in a Redis datastore.

Example:
    >>> from sharelinks.models import ShareLinkModel
    >>> from sharelinks.dao.redis import ShareLinkRedisDAO

    >>> dao = ShareLinkRedisDAO(prefix="sharelinks:dev")

    >>> share_link = ShareLinkModel(
    ...     target="https://example.edu/course/cs101",
    ...     token="aZ3kQ9"
    ... )
    >>> dao.insert(share_link, ttl=604800)
    <ShareLinkRedisDAO>

    >>> retrieved = dao.get("aZ3kQ9")
    >>> retrieved.target
    'https://example.edu/course/cs101'
    >>> retrieved.expires_at
    <datetime>
"""

import logging
from datetime import datetime, timedelta, UTC

from beartype import beartype

from sharelinks.models import ShareLinkModel
from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.redis.mixins import RedisClientMixin
from sharelinks.dao.redis.helpers import handle_redis_connection_error
from sharelinks.dao.exceptions import ShareLinkAlreadyExistsError


logger = logging.getLogger(__name__)


class ShareLinkRedisDAO(RedisClientMixin, ShareLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing share link mappings

    This class implements the ShareLinkBaseDAO interface using Redis as a data store.
    Each share link is a single string key `<prefix>:shares:<token>` holding the
    target URL, set to expire by Redis after the link's TTL.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(share_link: ShareLinkModel, ttl: int, **kwargs) -> ShareLinkRedisDAO:
            SET the share link with NX and EX <ttl>.
            Raises ShareLinkAlreadyExistsError when the token is taken.
            Raises DataStoreError on connectivity issues with Redis.

        get(token: str, **kwargs) -> ShareLinkModel | None:
            GET the share link and its TTL in a single transaction.
            Returns None when the token doesn't exist (or expired).
            Raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, share_link: ShareLinkModel, ttl: int, **kwargs) -> 'ShareLinkRedisDAO':
        """Insert a share link mapping into Redis

        NOTE: SET NX makes the existence check and the write a single atomic
              command. Two concurrent writers drawing the same token can't
              both succeed, and a committed target URL is never overwritten:

              (lambda 1): SET <app>:shares:<token> <url 1> NX EX <ttl>  => OK
              (lambda 2): SET <app>:shares:<token> <url 2> NX EX <ttl>  => nil
                          -> ShareLinkAlreadyExistsError, caller draws a new token

        Args:
            share_link (ShareLinkModel):
                ShareLinkModel instance representing the share link mapping.
            ttl (int):
                Lifetime of the share link in seconds.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShareLinkRedisDAO: self (for method chaining)

        Raises:
            ShareLinkAlreadyExistsError:
                If a share link with the same token already exists.
            DataStoreError:
                If a Redis connection issue occurs.
        """
        if ttl < 1:
            raise ValueError(f'TTL must be a positive integer (given value: {ttl}).')

        share_link_key = self.keys.share_link_key(share_link.token)
        created = self.redis.set(share_link_key, share_link.target, nx=True, ex=ttl)
        if not created:
            raise ShareLinkAlreadyExistsError(f"Share link with token '{share_link.token}' already exists.")

        logger.debug('Stored share link in Redis.', extra={'token': share_link.token, 'ttl': ttl})
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, token: str, **kwargs) -> ShareLinkModel | None:
        """Retrieve a stored share link by token

        Fetches both the target URL and its remaining TTL using a single Redis
        transaction, so the key can't expire between the two reads.

        Args:
            token (str):
                The token identifier of the share link.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShareLinkModel | None:
                The retrieved share link, or None if it doesn't exist or expired.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('aZ3kQ9')
            ShareLinkModel(target='https://example.edu/course/cs101', token='aZ3kQ9', ...)
        """
        share_link_key = self.keys.share_link_key(token)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(share_link_key)
            pipe.ttl(share_link_key)
            target, ttl = pipe.execute()

        if target is None:
            return None

        # TTL is -1 for keys without expiry (not written by this DAO)
        expires_at = datetime.now(UTC) + timedelta(seconds=ttl) if ttl >= 0 else None
        return ShareLinkModel(target=target, token=token, expires_at=expires_at)
