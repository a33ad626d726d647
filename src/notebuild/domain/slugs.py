"""Slug normalization for permalinks and internal link targets."""

from __future__ import annotations

import re
import unicodedata

from pymdownx.slugs import slugify as _md_slugify

# Pre-configured once; pymdownx returns a ``(text, sep)`` callable.
_slugify_lower = _md_slugify(case="lower")

_SEPARATOR = "-"
_REPEATED_SEPARATORS = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Convert *text* to a lowercase, hyphenated, URL-safe slug.

    Unicode is transliterated to ASCII first (``"Café"`` -> ``"cafe"``),
    characters outside ``[a-z0-9_-]`` are dropped, whitespace becomes a
    hyphen, and repeated or trailing hyphens are cleaned up.

    Examples:
        >>> slugify("Hello World")
        'hello-world'
        >>> slugify("My Note")
        'my-note'
        >>> slugify("")
        ''
    """
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    normalized = re.sub(r"\s+", " ", normalized).strip()
    slug = _slugify_lower(normalized, _SEPARATOR)
    slug = _REPEATED_SEPARATORS.sub(_SEPARATOR, slug)
    return slug.strip(_SEPARATOR)
