"""Domain model for shortened links."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


class URLNotFoundError(LookupError):
    """Raised when no link exists for a short code."""

    def __init__(self, message: str = "url not found") -> None:
        super().__init__(message)


class URLExistsError(Exception):
    """Raised when a short code is already taken."""

    def __init__(self, message: str = "url exists") -> None:
        super().__init__(message)


@dataclass
class Shorten:
    """A short code together with the URL it points to and its statistics."""

    short_url: str = ""
    original_url: str = ""
    visits: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    id: int = 0