"""SQLite persistence for shortened links."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timezone

from shortlink.model import Shorten

DEFAULT_PATH = "url-shortener.db"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS urls (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    short_url TEXT NOT NULL UNIQUE,
    original_url TEXT NOT NULL,
    visits INTEGER DEFAULT 0,
    created_at DATETIME,
    updated_at DATETIME
);
CREATE INDEX IF NOT EXISTS urls_short_url_idx ON urls(short_url);
"""


class StorageError(Exception):
    """Base class for storage failures."""


class UniqueError(StorageError):
    """The short code is already stored."""


class NotFoundError(StorageError):
    """No row exists for the short code."""


class NoRowsUpdatedError(StorageError):
    """An update matched no row."""


def _format_time(moment: datetime) -> str:
    return moment.isoformat(sep=" ")


def _parse_time(value: str | None) -> datetime | None:
    if value is None:
        return None
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        # CURRENT_TIMESTAMP is written in UTC without an offset.
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class Storage:
    """A SQLite database holding the ``urls`` table."""

    def __init__(self, path: str = DEFAULT_PATH) -> None:
        try:
            conn = sqlite3.connect(path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StorageError(f"failed to open database: {exc}") from exc
        try:
            conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            conn.close()
            raise StorageError(f"failed to create table: {exc}") from exc
        self._conn: sqlite3.Connection | None = conn
        self._lock = threading.Lock()

    def __enter__(self) -> Storage:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("storage is closed")
        return self._conn

    def close(self) -> None:
        """Close the database connection; closing twice is harmless."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def save(self, shorten: Shorten) -> None:
        """Insert ``shorten``, stamping its creation and update times."""
        if shorten is None:
            raise StorageError("shorten model is None")
        now = datetime.now(timezone.utc)
        shorten.created_at = now
        shorten.updated_at = now
        stamp = _format_time(now)
        with self._lock:
            conn = self._connection()
            try:
                with conn:
                    conn.execute(
                        "INSERT INTO urls(short_url, original_url, visits, created_at, updated_at)"
                        " VALUES (?, ?, ?, ?, ?)",
                        (shorten.short_url, shorten.original_url, shorten.visits, stamp, stamp),
                    )
            except sqlite3.IntegrityError as exc:
                if "UNIQUE" in str(exc):
                    raise UniqueError(f"short URL already exists: {shorten.short_url}") from exc
                raise StorageError(f"failed to execute statement: {exc}") from exc
            except sqlite3.Error as exc:
                raise StorageError(f"failed to execute statement: {exc}") from exc

    def inc_visits(self, short_url: str) -> None:
        """Add one visit to ``short_url`` and refresh its update time."""
        if not short_url:
            raise StorageError("short URL is empty")
        with self._lock:
            conn = self._connection()
            try:
                with conn:
                    cursor = conn.execute(
                        "UPDATE urls SET visits = visits + 1, updated_at = CURRENT_TIMESTAMP"
                        " WHERE short_url = ?",
                        (short_url,),
                    )
            except sqlite3.Error as exc:
                raise StorageError(f"failed to execute statement: {exc}") from exc
        if cursor.rowcount == 0:
            raise NoRowsUpdatedError(f"no rows updated for short URL: {short_url}")

    def get_stats(self, short_url: str) -> Shorten:
        """Return the stored record for ``short_url``."""
        if not short_url:
            raise StorageError("short URL is empty")
        with self._lock:
            conn = self._connection()
            try:
                row = conn.execute(
                    "SELECT id, short_url, original_url, visits, created_at, updated_at"
                    " FROM urls WHERE short_url = ?",
                    (short_url,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"failed to query row: {exc}") from exc
        if row is None:
            raise NotFoundError(f"short URL not found: {short_url}")
        row_id, short, original, visits, created_at, updated_at = row
        return Shorten(
            short_url=short,
            original_url=original,
            visits=visits or 0,
            created_at=_parse_time(created_at),
            updated_at=_parse_time(updated_at),
            id=row_id,
        )