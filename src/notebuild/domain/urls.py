"""Absolute URL detection used to classify link targets."""

from __future__ import annotations

from urllib.parse import SplitResult, urlsplit, uses_netloc

# Schemes that only make sense with an authority (``scheme://host``).
# ``file:///path`` legitimately has an empty authority.
_NETWORK_SCHEMES = frozenset(uses_netloc) - {"", "file"}


class InvalidUrlError(ValueError):
    """Raised when a string is not an absolute URL."""


def parse_absolute_url(value: str) -> SplitResult:
    """Parse *value* as an absolute URL.

    A URL is absolute when it carries a scheme. Network schemes
    (``http``, ``https``, ``ftp``, ...) additionally require an authority,
    so ``http:foo`` is rejected while ``mailto:me@example.com`` is accepted.

    Raises:
        InvalidUrlError: If *value* has no scheme, lacks a required
            authority, or cannot be split at all.
    """
    candidate = value.strip()
    try:
        parts = urlsplit(candidate)
    except ValueError as exc:
        msg = f"Invalid URL: {value!r}"
        raise InvalidUrlError(msg) from exc

    if not parts.scheme:
        msg = f"URL has no scheme: {value!r}"
        raise InvalidUrlError(msg)
    if parts.scheme in _NETWORK_SCHEMES and not parts.netloc:
        msg = f"URL has no authority: {value!r}"
        raise InvalidUrlError(msg)
    return parts


def is_absolute_url(value: str) -> bool:
    """Return True when *value* parses as an absolute URL."""
    try:
        parse_absolute_url(value)
    except InvalidUrlError:
        return False
    return True
