"""Repository layer translating storage errors into model errors."""

from __future__ import annotations

from typing import Protocol

from shortlink.model import Shorten, URLExistsError, URLNotFoundError
from shortlink.storage import NoRowsUpdatedError, NotFoundError, Storage, UniqueError


class URLRepository(Protocol):
    """Persistence operations the URL service relies on."""

    def save(self, shorten: Shorten) -> None: ...

    def find(self, short: str) -> Shorten: ...

    def inc_visits(self, short: str) -> None: ...

    def close(self) -> None: ...


class SQLiteRepository:
    """A :class:`URLRepository` backed by :class:`Storage`."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    def save(self, shorten: Shorten) -> None:
        """Store ``shorten``; raise URLExistsError if its code is taken."""
        try:
            self._storage.save(shorten)
        except UniqueError as exc:
            raise URLExistsError() from exc

    def find(self, short: str) -> Shorten:
        """Return the record for ``short``; raise URLNotFoundError if absent."""
        try:
            return self._storage.get_stats(short)
        except NotFoundError as exc:
            raise URLNotFoundError() from exc

    def inc_visits(self, short: str) -> None:
        """Count one visit; raise URLNotFoundError if ``short`` is unknown."""
        try:
            self._storage.inc_visits(short)
        except (NoRowsUpdatedError, NotFoundError) as exc:
            raise URLNotFoundError() from exc

    def close(self) -> None:
        """Close the underlying storage."""
        self._storage.close()