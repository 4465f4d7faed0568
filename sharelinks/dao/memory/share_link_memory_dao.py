"""In-process implementation of ShareLinkBaseDAO.

Emulates an expiring key-value store inside a Python dictionary. Intended for
local development (`"active_backend": "memory"`) and for tests, where the
clock is driven with freezegun instead of sleeping.

Expiry is lazy: an expired record is treated as absent and purged the next
time its token is touched.

Example:
    >>> dao = ShareLinkMemoryDAO()
    >>> dao.insert(ShareLinkModel(target='https://example.edu', token='aZ3kQ9'), ttl=60)
    <ShareLinkMemoryDAO>
    >>> dao.get('aZ3kQ9').target
    'https://example.edu'
"""

import threading
from datetime import datetime, timedelta, UTC

from beartype import beartype

from sharelinks.models import ShareLinkModel
from sharelinks.dao.base import ShareLinkBaseDAO
from sharelinks.dao.exceptions import ShareLinkAlreadyExistsError


class ShareLinkMemoryDAO(ShareLinkBaseDAO):
    """Dictionary-backed share link DAO with per-record TTL.

    All operations hold a single lock, which gives every token the same
    atomic set-if-absent semantics as Redis' SET NX.
    """

    def __init__(self):
        self._records: dict[str, ShareLinkModel] = {}
        self._lock = threading.Lock()

    def _live(self, token: str, now: datetime) -> ShareLinkModel | None:
        record = self._records.get(token)
        if record is not None and record.expires_at <= now:
            del self._records[token]
            return None
        return record

    @beartype
    def insert(self, share_link: ShareLinkModel, ttl: int, **kwargs) -> 'ShareLinkMemoryDAO':
        if ttl < 1:
            raise ValueError(f'TTL must be a positive integer (given value: {ttl}).')

        with self._lock:
            now = datetime.now(UTC)
            if self._live(share_link.token, now) is not None:
                raise ShareLinkAlreadyExistsError(f"Share link with token '{share_link.token}' already exists.")
            self._records[share_link.token] = ShareLinkModel(
                target=share_link.target,
                token=share_link.token,
                expires_at=now + timedelta(seconds=ttl),
            )
        return self

    @beartype
    def get(self, token: str, **kwargs) -> ShareLinkModel | None:
        with self._lock:
            return self._live(token, datetime.now(UTC))

    def __len__(self) -> int:
        with self._lock:
            now = datetime.now(UTC)
            return sum(1 for record in self._records.values() if record.expires_at > now)
