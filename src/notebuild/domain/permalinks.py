"""Permalink derivation for note metadata.

INVARIANT: An existing ``permalink`` is never changed, not even its type.
Otherwise the permalink is ``/{slug(title)}/``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from notebuild.domain.slugs import slugify


class MissingTitleError(ValueError):
    """Raised when a permalink must be derived but no usable title exists."""


def derive_permalink(metadata: Mapping[str, Any]) -> Any:
    """Return the permalink for *metadata*.

    A truthy ``permalink`` already in *metadata* is returned as-is.

    Raises:
        MissingTitleError: If there is no permalink and the title is
            absent, blank, or slugs to an empty string.
    """
    existing = metadata.get("permalink")
    if existing:
        return existing

    title = metadata.get("title")
    if title is None or not str(title).strip():
        msg = "Document has neither a permalink nor a title"
        raise MissingTitleError(msg)

    slug = slugify(str(title))
    if not slug:
        msg = f"Title {title!r} does not produce a usable permalink"
        raise MissingTitleError(msg)
    return f"/{slug}/"


def with_permalink(metadata: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *metadata* with ``permalink`` set."""
    return {**metadata, "permalink": derive_permalink(metadata)}
