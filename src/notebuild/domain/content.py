"""Document model and front matter parsing.

A :class:`Document` is one markdown note: its body text plus the
metadata from its YAML front matter. :func:`transform_document` is the
per-document build step (link rewriting + permalink merge).

Pure parsing utilities live here so that the dependency direction stays
clean: infrastructure -> domain, never the reverse.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field
from ruamel.yaml import YAML

from notebuild.domain.links import DEFAULT_OPTIONS, RewriteOptions, markdown_links_to_html
from notebuild.domain.permalinks import with_permalink

_FRONTMATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful, so each parse gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    return y


class Document(BaseModel):
    """One markdown note.

    Attributes:
        body: Markdown body (everything after the front matter).
        metadata: Front matter keys and values, JSON-compatible.
        source: Path of the source file relative to the project root,
            or None for documents built in memory.
    """

    model_config = {"frozen": True}

    body: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    source: str | None = None

    def to_record(self, *, include_source: bool = False) -> dict[str, Any]:
        """Return the exported ``{"body", "metadata"}`` object."""
        record: dict[str, Any] = {"body": self.body, "metadata": self.metadata}
        if include_source and self.source is not None:
            record["source"] = self.source
        return record


# ---------------------------------------------------------------------------
# Front matter
# ---------------------------------------------------------------------------


def to_plain(value: Any) -> Any:
    """Convert ruamel.yaml round-trip values to plain JSON-compatible types.

    Dates and datetimes become ISO 8601 strings.
    """
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, str):
        return str(value)
    return value


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter and body from markdown content.

    Expects the file to start with ``---`` on the first line. The second
    ``---`` closes the YAML block. Everything after is the body.

    Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If no valid
        front matter delimiters are found, returns ``({}, content)``.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    if body.startswith("\n"):
        body = body[1:]

    loaded = _new_yaml().load(yaml_block) or {}
    if not isinstance(loaded, Mapping):
        msg = "Front matter must be a YAML mapping"
        raise ValueError(msg)
    return to_plain(loaded), body


# ---------------------------------------------------------------------------
# Build step
# ---------------------------------------------------------------------------


def transform_document(document: Document, *, options: RewriteOptions = DEFAULT_OPTIONS) -> Document:
    """Rewrite links in the body and merge the permalink into metadata.

    Raises:
        MissingTitleError: If the document has neither permalink nor title.
    """
    return document.model_copy(
        update={
            "body": markdown_links_to_html(document.body, options=options),
            "metadata": with_permalink(document.metadata),
        }
    )
