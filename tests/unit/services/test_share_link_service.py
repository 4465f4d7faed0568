"""Unit tests for ShareLinkService

Test coverage includes:

1. Creation
   - Returns the token and the share URL built from the configured base URL.
   - Retries with a fresh token on collisions and on lost insert races.
   - Rejects empty target URLs.

2. Resolution
   - Round trip: resolve(create(url)) == url.
   - Unknown tokens raise ShareLinkNotFoundError.
   - Repeated reads return the same URL and never write.

3. Expiry boundary (frozen clock)

4. Concurrency
   - N concurrent creates yield N distinct, resolvable tokens.

5. Failure modes
   - Exhausted token space raises TokenSpaceExhaustedError within the attempt bound.
   - DataStoreError propagates without retries.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from sharelinks.models import ShareLinkModel
from sharelinks.dao import ShareLinkMemoryDAO
from sharelinks.dao.exceptions import DataStoreError, ShareLinkNotFoundError, TokenSpaceExhaustedError
from sharelinks.services import ShareLinkService
from sharelinks.utils import ShareSettings
from sharelinks.utils.tokens import ALPHABET


TARGET_URL = 'https://example.edu/course/cs101'


class BlindReadDAO(ShareLinkMemoryDAO):
    """Memory DAO whose reads never see existing records (stale check before insert)."""

    def get(self, token: str, **kwargs) -> ShareLinkModel | None:
        return None


def fixed_tokens(*tokens: str):
    iterator = iter(tokens)
    return lambda length: next(iterator)


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao() -> ShareLinkMemoryDAO:
    return ShareLinkMemoryDAO()


@pytest.fixture
def service(dao) -> ShareLinkService:
    return ShareLinkService(dao)


# -------------------------------
# 1. Creation
# -------------------------------


def test_create_returns_token_and_share_url(dao):
    service = ShareLinkService(dao, token_generator=fixed_tokens('aZ3kQ9'))

    token, url = service.create(TARGET_URL)

    assert token == 'aZ3kQ9'
    assert url == 'https://beyondsyllabus.in/share/aZ3kQ9'
    assert dao.get('aZ3kQ9').target == TARGET_URL


def test_create_uses_configured_settings(dao):
    settings = ShareSettings(token_length=10, ttl_seconds=120, base_url='https://short.test/s/')
    service = ShareLinkService(dao, settings)

    with freeze_time('2026-10-19 12:00:00'):
        token, url = service.create(TARGET_URL)
        share_link = dao.get(token)

    assert len(token) == 10
    assert url == f'https://short.test/s/{token}'
    assert share_link.expires_at == datetime(2026, 10, 19, 12, 2, 0, tzinfo=UTC)


def test_create_draws_again_on_collision(dao):
    dao.insert(ShareLinkModel(target='https://example.edu/existing', token='taken'), ttl=60)
    service = ShareLinkService(dao, token_generator=fixed_tokens('taken', 'taken', 'fresh'))

    token, _ = service.create(TARGET_URL)

    assert token == 'fresh'
    assert dao.get('taken').target == 'https://example.edu/existing'


def test_create_draws_again_when_insert_race_is_lost():
    dao = BlindReadDAO()
    service = ShareLinkService(dao, token_generator=fixed_tokens('dup', 'dup', 'fresh'))

    first, _ = service.create('https://example.edu/first')
    second, _ = service.create('https://example.edu/second')

    assert first == 'dup'
    assert second == 'fresh'
    assert ShareLinkMemoryDAO.get(dao, 'dup').target == 'https://example.edu/first'


def test_create_inserts_exactly_once(dao):
    spy = MagicMock(wraps=dao)
    service = ShareLinkService(spy, token_generator=fixed_tokens('aZ3kQ9'))

    service.create(TARGET_URL)

    spy.insert.assert_called_once_with(ShareLinkModel(target=TARGET_URL, token='aZ3kQ9'), ttl=604800)


def test_create_rejects_empty_url(service):
    with pytest.raises(ValueError):
        service.create('')


def test_create_rejects_non_string_url(service):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        service.create(None)


# -------------------------------
# 2. Resolution
# -------------------------------


@pytest.mark.parametrize(
    'target_url',
    [
        TARGET_URL,
        'https://example.edu/search?q=linear+algebra&page=2#results',
        'not even a url',
    ],
)
def test_round_trip(service, target_url):
    token, _ = service.create(target_url)
    assert service.resolve(token) == target_url


def test_resolve_unknown_token(service):
    with pytest.raises(ShareLinkNotFoundError, match="Share link with token 'doesnotexist' not found or has expired."):
        service.resolve('doesnotexist')


def test_resolve_rejects_empty_token(service):
    with pytest.raises(ValueError):
        service.resolve('')


def test_resolve_is_idempotent_and_read_only(dao):
    token, _ = ShareLinkService(dao).create(TARGET_URL)
    spy = MagicMock(wraps=dao)
    service = ShareLinkService(spy)

    results = [service.resolve(token) for _ in range(5)]

    assert results == [TARGET_URL] * 5
    assert spy.get.call_count == 5
    spy.insert.assert_not_called()
    assert len(dao) == 1


# -------------------------------
# 3. Expiry boundary
# -------------------------------


def test_expiry_boundary(dao):
    service = ShareLinkService(dao, ShareSettings(ttl_seconds=60))

    with freeze_time('2026-10-19 12:00:00') as frozen:
        token, _ = service.create(TARGET_URL)

        frozen.tick(timedelta(seconds=59, milliseconds=999))
        assert service.resolve(token) == TARGET_URL

        frozen.tick(timedelta(milliseconds=2))
        with pytest.raises(ShareLinkNotFoundError):
            service.resolve(token)


def test_expired_token_can_be_issued_again(dao):
    service = ShareLinkService(dao, ShareSettings(ttl_seconds=60), token_generator=fixed_tokens('aZ3kQ9', 'aZ3kQ9'))

    with freeze_time('2026-10-19 12:00:00') as frozen:
        service.create('https://example.edu/old')
        frozen.tick(timedelta(seconds=61))
        token, _ = service.create('https://example.edu/new')

        assert token == 'aZ3kQ9'
        assert service.resolve(token) == 'https://example.edu/new'


# -------------------------------
# 4. Concurrency
# -------------------------------


def test_concurrent_creates_yield_distinct_tokens(service):
    urls = [f'https://example.edu/course/{i}' for i in range(200)]

    with ThreadPoolExecutor(max_workers=16) as executor:
        results = list(executor.map(service.create, urls))

    tokens = [token for token, _ in results]
    assert len(set(tokens)) == len(urls)
    for token, url in zip(tokens, urls):
        assert service.resolve(token) == url


def test_concurrent_creates_under_contention(dao):
    # Every thread competes for a two-character token space (4096 tokens)
    service = ShareLinkService(dao, ShareSettings(token_length=2, max_generation_attempts=500))
    urls = [f'https://example.edu/lesson/{i}' for i in range(300)]

    with ThreadPoolExecutor(max_workers=16) as executor:
        results = list(executor.map(service.create, urls))

    tokens = [token for token, _ in results]
    assert len(set(tokens)) == len(urls)
    assert {service.resolve(token) for token in tokens} == set(urls)


# -------------------------------
# 5. Failure modes
# -------------------------------


def test_exhausted_token_space(dao):
    for character in ALPHABET:
        dao.insert(ShareLinkModel(target=f'https://example.edu/{character}', token=character), ttl=60)
    spy = MagicMock(wraps=dao)
    service = ShareLinkService(spy, ShareSettings(token_length=1, max_generation_attempts=50))

    with pytest.raises(TokenSpaceExhaustedError, match='after 50 attempts'):
        service.create(TARGET_URL)

    assert spy.get.call_count == 50
    spy.insert.assert_not_called()


def test_store_unavailable_propagates_without_retry():
    dao = MagicMock()
    dao.get.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")
    service = ShareLinkService(dao)

    with pytest.raises(DataStoreError):
        service.create(TARGET_URL)
    with pytest.raises(DataStoreError):
        service.resolve('aZ3kQ9')

    assert dao.get.call_count == 2
    dao.insert.assert_not_called()


def test_store_unavailable_on_insert_propagates():
    dao = MagicMock()
    dao.get.return_value = None
    dao.insert.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")
    service = ShareLinkService(dao)

    with pytest.raises(DataStoreError):
        service.create(TARGET_URL)

    dao.insert.assert_called_once()
