from __future__ import annotations

import pytest

from shortlink.model import Shorten, URLExistsError, URLNotFoundError
from shortlink.repository import SQLiteRepository
from shortlink.service import NotFoundError, URLService
from shortlink.shortener import DEFAULT_LENGTH, URL_SAFE_CHARS
from shortlink.storage import Storage


@pytest.fixture
def repo():
    storage = Storage(":memory:")
    repository = SQLiteRepository(storage)
    yield repository
    repository.close()


class _CollidingRepo:
    def __init__(self, collisions: int) -> None:
        self.collisions = collisions
        self.attempts: list[str] = []
        self.saved: list[Shorten] = []

    def save(self, shorten: Shorten) -> None:
        self.attempts.append(shorten.short_url)
        if len(self.attempts) <= self.collisions:
            raise URLExistsError()
        self.saved.append(shorten)

    def find(self, short: str) -> Shorten:
        raise URLNotFoundError()

    def inc_visits(self, short: str) -> None:
        raise URLNotFoundError()

    def close(self) -> None:
        pass


class _BrokenRepo:
    def save(self, shorten: Shorten) -> None:
        raise RuntimeError("disk full")

    def find(self, short: str) -> Shorten:
        raise RuntimeError("disk full")

    def inc_visits(self, short: str) -> None:
        raise RuntimeError("disk full")

    def close(self) -> None:
        pass


class _NoCountRepo:
    def find(self, short: str) -> Shorten:
        return Shorten(short_url=short, original_url="https://example.com/a")

    def inc_visits(self, short: str) -> None:
        raise RuntimeError("counter unavailable")

    def save(self, shorten: Shorten) -> None:
        pass

    def close(self) -> None:
        pass


def test_create_stores_code_of_requested_length(repo):
    service = URLService(repo, 6)
    shorten = service.create("https://example.com/page")
    assert len(shorten.short_url) == 6
    assert set(shorten.short_url) <= set(URL_SAFE_CHARS)
    assert shorten.original_url == "https://example.com/page"
    assert repo.find(shorten.short_url).original_url == "https://example.com/page"


def test_create_with_non_positive_length_uses_default(repo):
    service = URLService(repo, 0)
    shorten = service.create("https://example.com")
    assert len(shorten.short_url) == DEFAULT_LENGTH


def test_create_retries_after_collision():
    fake = _CollidingRepo(collisions=2)
    service = URLService(fake, 5)
    shorten = service.create("https://example.com")
    assert len(fake.attempts) == 3
    assert fake.saved == [shorten]
    assert shorten.short_url == fake.attempts[-1]


def test_create_propagates_other_errors():
    service = URLService(_BrokenRepo(), 6)
    with pytest.raises(RuntimeError):
        service.create("https://example.com")


def test_resolve_returns_original_and_counts_visit(repo):
    service = URLService(repo, 6)
    shorten = service.create("https://example.com/x")
    assert service.resolve(shorten.short_url) == "https://example.com/x"
    assert service.resolve(shorten.short_url) == "https://example.com/x"
    assert service.get_stat(shorten.short_url).visits == 2


def test_resolve_unknown_raises_not_found(repo):
    service = URLService(repo, 6)
    with pytest.raises(NotFoundError):
        service.resolve("nothere")


def test_resolve_ignores_visit_counter_failure():
    service = URLService(_NoCountRepo(), 6)
    assert service.resolve("abc") == "https://example.com/a"


def test_resolve_propagates_other_errors():
    service = URLService(_BrokenRepo(), 6)
    with pytest.raises(RuntimeError):
        service.resolve("abc")


def test_get_stat_returns_record(repo):
    service = URLService(repo, 6)
    shorten = service.create("https://example.com/s")
    stat = service.get_stat(shorten.short_url)
    assert stat.short_url == shorten.short_url
    assert stat.original_url == "https://example.com/s"
    assert stat.visits == 0
    assert stat.created_at is not None and stat.updated_at is not None


def test_get_stat_unknown_raises_not_found(repo):
    service = URLService(repo, 6)
    with pytest.raises(NotFoundError):
        service.get_stat("missing")