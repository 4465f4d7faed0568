"""Share link issuance and resolution.

`ShareLinkService` owns the create/resolve protocol against an expiring
key-value store (any ShareLinkBaseDAO):

    create(target_url):
        repeat (at most `max_generation_attempts` times):
            token = generate_token(token_length)
            if store.get(token) is absent:
                store.insert(token -> target_url, ttl=ttl_seconds)   # set-if-absent
                return token, short url
        raise TokenSpaceExhaustedError

    resolve(token):
        store.get(token) or raise ShareLinkNotFoundError

The check and the insert are not one atomic operation. A concurrent writer
that commits the same token in between makes the insert fail with
ShareLinkAlreadyExistsError, which is handled like any other collision:
draw a fresh token and try again.

The service keeps no state of its own, so a single instance may be shared by
concurrent requests. DataStoreError is never retried here; it propagates to
the caller.

Example:
    >>> from sharelinks.dao import ShareLinkMemoryDAO
    >>> service = ShareLinkService(ShareLinkMemoryDAO())
    >>> token, url = service.create('https://example.edu/course/cs101')
    >>> url
    'https://beyondsyllabus.in/share/aZ3kQ9'
    >>> service.resolve(token)
    'https://example.edu/course/cs101'
    >>> service.resolve('doesnotexist')
    Traceback (most recent call last):
        ...
    sharelinks.dao.exceptions.ShareLinkNotFoundError: Share link with token 'doesnotexist' not found or has expired.
"""

import logging
from collections.abc import Callable

from beartype import beartype

from sharelinks.models import ShareLinkModel
from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.exceptions import (
    ShareLinkAlreadyExistsError,
    ShareLinkNotFoundError,
    TokenSpaceExhaustedError,
)
from sharelinks.utils.config import ShareSettings
from sharelinks.utils.helpers import get_short_url
from sharelinks.utils.tokens import generate_token


logger = logging.getLogger(__name__)


class ShareLinkService:
    """Create and resolve share links on top of a share link DAO.

    Attributes:
        dao (ShareLinkBaseDAO):
            Expiring key-value store holding the share links.
        settings (ShareSettings):
            Token length, TTL, base URL and the token draw bound.
        token_generator (Callable[[int], str]):
            Produces a candidate token of the requested length.
    """

    def __init__(
        self,
        dao: ShareLinkBaseDAO,
        settings: ShareSettings | None = None,
        token_generator: Callable[[int], str] = generate_token,
    ):
        self.dao = dao
        self.settings = settings if settings is not None else ShareSettings()
        self.token_generator = token_generator

    def short_url(self, token: str) -> str:
        return get_short_url(token, self.settings.base_url)

    @beartype
    def create(self, target_url: str) -> tuple[str, str]:
        """Issue a new share link for `target_url`.

        Args:
            target_url (str):
                Non-empty URL to share. Its syntax is not validated.

        Returns:
            tuple[str, str]: the token and the public share URL.

        Raises:
            ValueError:
                If `target_url` is empty.
            TokenSpaceExhaustedError:
                If every drawn token collided within `max_generation_attempts` draws.
            DataStoreError:
                If the data store is unavailable.
        """
        if not target_url:
            raise ValueError('Target URL must be a non-empty string.')

        attempts = self.settings.max_generation_attempts
        for attempt in range(1, attempts + 1):
            token = self.token_generator(self.settings.token_length)

            if self.dao.get(token) is not None:
                logger.debug('Token collision, drawing a new token.', extra={'token': token, 'attempt': attempt})
                continue

            try:
                self.dao.insert(ShareLinkModel(target=target_url, token=token), ttl=self.settings.ttl_seconds)
            except ShareLinkAlreadyExistsError:
                logger.debug('Lost insert race for token, drawing a new token.', extra={'token': token, 'attempt': attempt})
                continue

            logger.info('Created share link.', extra={'token': token, 'attempt': attempt, 'event': 'SHARE_CREATED'})
            return token, self.short_url(token)

        logger.error(
            'Could not find a free token. The token space is exhausted.',
            extra={'attempts': attempts, 'tokenLength': self.settings.token_length, 'event': 'TOKEN_SPACE_EXHAUSTED'},
        )
        raise TokenSpaceExhaustedError(
            f'No free token of length {self.settings.token_length} found after {attempts} attempts.'
        )

    @beartype
    def resolve(self, token: str) -> str:
        """Return the target URL of the share link identified by `token`.

        Raises:
            ValueError:
                If `token` is empty.
            ShareLinkNotFoundError:
                If the token is unknown or its share link expired.
            DataStoreError:
                If the data store is unavailable.
        """
        if not token:
            raise ValueError('Token must be a non-empty string.')

        share_link = self.dao.get(token)
        if share_link is None:
            raise ShareLinkNotFoundError(f"Share link with token '{token}' not found or has expired.")
        return share_link.target
