"""Random short-code generation."""

from __future__ import annotations

import secrets

URL_SAFE_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
DEFAULT_LENGTH = 8


def random_url(length: int) -> str:
    """Return a random code of ``length`` URL-safe characters (8 if not positive)."""
    if length <= 0:
        length = DEFAULT_LENGTH
    return "".join(secrets.choice(URL_SAFE_CHARS) for _ in range(length))