"""Markdown link location and rewriting to HTML anchors.

Pure functions, no infrastructure dependencies. The build service
calls :func:`markdown_links_to_html` once per document body.

Two steps per link:

- **Locate**: scan the body left to right for ``[text](target "title")``
  (and, optionally, ``[[Target|Display]]``) without overlap.
- **Rewrite**: classify the target as external (absolute URL) or internal
  (relative reference to another note) and compose an ``<a>`` tag.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePosixPath

from notebuild.domain.slugs import slugify
from notebuild.domain.urls import InvalidUrlError, parse_absolute_url

# [text](target) or [text](target "title") / [text](target 'title').
# Display text excludes brackets, so nesting resolves to the innermost link.
# Images (``![alt](src)``) and escaped brackets (``\[x](y)``) are skipped
# by the lookbehind. Targets are either ``<...>`` or may hold one level of
# balanced parentheses, as in ``Foo_(bar)``.
_MARKDOWN_LINK_PATTERN = re.compile(
    r"""(?<![!\\])
    \[(?P<text>[^\[\]]*)\]
    \(
        (?P<target><[^<>\n]*>|(?:[^()"\n]|\([^()"\n]*\))*?)
        (?:\s+(?:"(?P<dq_title>[^"\n]*)"|'(?P<sq_title>[^'\n]*)'))?
        \s*
    \)""",
    re.VERBOSE,
)

# [[Title]] or [[Title|Display Text]].
_WIKILINK_PATTERN = re.compile(r"\[\[(?P<wiki>[^\[\]]+)\]\]")

_COMBINED_PATTERN = re.compile(
    f"{_WIKILINK_PATTERN.pattern}|{_MARKDOWN_LINK_PATTERN.pattern}",
    re.VERBOSE,
)

EXTERNAL_LINK_MARKER = "&#x2197;"
EXTERNAL_LINK_ATTRIBUTES = 'rel="noreferrer" target="_blank"'


class LinkKind(StrEnum):
    EXTERNAL = "external"
    INTERNAL = "internal"


@dataclass(frozen=True)
class MarkdownLink:
    """A link parsed out of a matched substring."""

    raw: str  # the full matched text
    text: str
    target: str
    title: str | None = None


@dataclass(frozen=True)
class RewriteOptions:
    """Knobs for :func:`rewrite_link` and :func:`markdown_links_to_html`."""

    external_marker: str = EXTERNAL_LINK_MARKER
    external_attributes: str = EXTERNAL_LINK_ATTRIBUTES
    wikilinks: bool = False


DEFAULT_OPTIONS = RewriteOptions()


# ---------------------------------------------------------------------------
# Locate
# ---------------------------------------------------------------------------


def _pattern_for(wikilinks: bool) -> re.Pattern[str]:
    return _COMBINED_PATTERN if wikilinks else _MARKDOWN_LINK_PATTERN


def iter_link_matches(body: str, *, wikilinks: bool = False) -> Iterator[re.Match[str]]:
    """Yield every link match in *body*, left to right, non-overlapping."""
    return _pattern_for(wikilinks).finditer(body)


def find_links(body: str, *, wikilinks: bool = False) -> list[str]:
    """Return the raw text of every link in *body*.

    Returns an empty list if no links are found.
    """
    return [match.group(0) for match in iter_link_matches(body, wikilinks=wikilinks)]


# ---------------------------------------------------------------------------
# Parse + classify
# ---------------------------------------------------------------------------


def _link_from_match(match: re.Match[str]) -> MarkdownLink:
    groups = match.groupdict()
    wiki = groups.get("wiki")
    if wiki is not None:
        parts = wiki.split("|", 1)
        target = parts[0].strip()
        text = parts[1].strip() if len(parts) > 1 else target
        return MarkdownLink(raw=match.group(0), text=text, target=target)

    title = groups["dq_title"] if groups["dq_title"] is not None else groups["sq_title"]
    target = groups["target"].strip()
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1]
    return MarkdownLink(raw=match.group(0), text=groups["text"], target=target, title=title)


def parse_link(raw: str) -> MarkdownLink:
    """Destructure a single link string into text, target, and title.

    Accepts both ``[text](target "title")`` and ``[[Target|Display]]``.

    Raises:
        ValueError: If *raw* is not exactly one well-formed link.
    """
    match = _COMBINED_PATTERN.fullmatch(raw)
    if match is None:
        msg = f"Not a link: {raw!r}"
        raise ValueError(msg)
    return _link_from_match(match)


def extract_links(body: str, *, wikilinks: bool = False) -> list[MarkdownLink]:
    """Parse every link in *body*, in document order."""
    return [_link_from_match(match) for match in iter_link_matches(body, wikilinks=wikilinks)]


def classify_target(target: str) -> LinkKind:
    """Classify *target* as external (absolute URL) or internal."""
    try:
        parse_absolute_url(target)
    except InvalidUrlError:
        return LinkKind.INTERNAL
    return LinkKind.EXTERNAL


def internal_href(target: str) -> str:
    """Map a relative note reference to its site path.

    ``./sub/My Note.md`` -> ``/my-note/``. Directory and extension are
    dropped; an empty slug maps to ``/``.
    """
    name = PurePosixPath(target.replace("\\", "/")).stem
    slug = slugify(name)
    return f"/{slug}/" if slug else "/"


# ---------------------------------------------------------------------------
# Compose
# ---------------------------------------------------------------------------


def compose_anchor(href: str, text: str, *, attributes: str = "") -> str:
    """Compose an ``<a>`` tag. *attributes* is raw, pre-rendered HTML."""
    if attributes:
        return f'<a href="{href}" {attributes}>{text}</a>'
    return f'<a href="{href}">{text}</a>'


def rewrite_parsed_link(
    link: MarkdownLink, *, options: RewriteOptions = DEFAULT_OPTIONS
) -> tuple[LinkKind, str]:
    """Return ``(kind, html)`` for an already parsed link."""
    kind = classify_target(link.target)
    if kind is LinkKind.EXTERNAL:
        text = f"{link.text} {options.external_marker}" if options.external_marker else link.text
        html = compose_anchor(link.target, text, attributes=options.external_attributes)
    else:
        html = compose_anchor(internal_href(link.target), link.text)
    return kind, html


def rewrite_link(raw: str, *, options: RewriteOptions = DEFAULT_OPTIONS) -> str:
    """Rewrite one matched link string into an HTML anchor."""
    _kind, html = rewrite_parsed_link(parse_link(raw), options=options)
    return html


def markdown_links_to_html(body: str, *, options: RewriteOptions = DEFAULT_OPTIONS) -> str:
    """Replace every link in *body* with its HTML anchor in one pass.

    Text outside link matches is left untouched. Bodies without links
    are returned unchanged.
    """

    def _replace(match: re.Match[str]) -> str:
        _kind, html = rewrite_parsed_link(_link_from_match(match), options=options)
        return html

    return _pattern_for(options.wikilinks).sub(_replace, body)


def count_links(body: str, *, wikilinks: bool = False) -> dict[LinkKind, int]:
    """Count external and internal links in *body*."""
    counts = {LinkKind.EXTERNAL: 0, LinkKind.INTERNAL: 0}
    for link in extract_links(body, wikilinks=wikilinks):
        counts[classify_target(link.target)] += 1
    return counts
