"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, notebuild.toml only contains
overrides. An empty (or missing) file builds ``notes/**/*.md`` into
``src/_data/notes.json``.
"""

from __future__ import annotations

from pydantic import BaseModel

from notebuild.domain.links import EXTERNAL_LINK_ATTRIBUTES, EXTERNAL_LINK_MARKER, RewriteOptions


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    source: str = "notes/**/*.md"
    output: str = "src/_data/notes.json"
    include_source: bool = False


class LinksConfig(BaseModel):
    """[links] section."""

    model_config = {"frozen": True}

    external_marker: str = EXTERNAL_LINK_MARKER
    external_attributes: str = EXTERNAL_LINK_ATTRIBUTES
    wikilinks: bool = False

    def rewrite_options(self, *, wikilinks: bool | None = None) -> RewriteOptions:
        """Build :class:`RewriteOptions`, optionally overriding *wikilinks*."""
        return RewriteOptions(
            external_marker=self.external_marker,
            external_attributes=self.external_attributes,
            wikilinks=self.wikilinks if wikilinks is None else wikilinks,
        )
