"""Business logic for creating and resolving short links."""

from __future__ import annotations

from shortlink.model import Shorten, URLExistsError, URLNotFoundError
from shortlink.repository import URLRepository
from shortlink.shortener import random_url


class NotFoundError(LookupError):
    """No link exists for the requested short code."""

    def __init__(self, message: str = "url not found") -> None:
        super().__init__(message)


class ExistsError(Exception):
    """The link already exists."""

    def __init__(self, message: str = "url already exists") -> None:
        super().__init__(message)


class URLService:
    """Creates short codes, resolves them and reports their statistics."""

    def __init__(self, repo: URLRepository, id_len: int) -> None:
        self._repo = repo
        self._id_len = id_len

    def create(self, original: str) -> Shorten:
        """Store ``original`` under a fresh random code, retrying on collisions."""
        shorten = Shorten(original_url=original)
        while True:
            shorten.short_url = random_url(self._id_len)
            try:
                self._repo.save(shorten)
            except URLExistsError:
                continue
            return shorten

    def resolve(self, short: str) -> str:
        """Return the URL behind ``short`` and count the visit."""
        try:
            shorten = self._repo.find(short)
        except URLNotFoundError as exc:
            raise NotFoundError() from exc
        try:
            self._repo.inc_visits(short)
        except Exception:
            # A failed visit counter must not prevent the redirect.
            pass
        return shorten.original_url

    def get_stat(self, short: str) -> Shorten:
        """Return the stored record for ``short``."""
        try:
            return self._repo.find(short)
        except URLNotFoundError as exc:
            raise NotFoundError() from exc