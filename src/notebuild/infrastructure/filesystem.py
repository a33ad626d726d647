"""Filesystem operations for note discovery, reading, and export.

Pure parsing lives in :mod:`notebuild.domain.content`. This module
handles actual file I/O, glob expansion, and path bookkeeping.
"""

from __future__ import annotations

import glob
import json
from pathlib import Path
from typing import Any

from notebuild.domain.content import Document, parse_frontmatter

# Directories to skip when expanding source globs.
_SKIP_DIRS = frozenset({".git", ".obsidian", "node_modules"})


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_markdown_files(pattern: str, *, root: Path) -> list[Path]:
    """Expand *pattern* relative to *root* into a sorted list of files.

    ``**`` matches any number of directories. Hidden directories and
    :data:`_SKIP_DIRS` are never descended into. Absolute patterns
    ignore *root*.
    """
    results: set[Path] = set()
    for match in glob.glob(pattern, root_dir=root, recursive=True):
        path = root / match
        if not path.is_file():
            continue
        if any(part in _SKIP_DIRS for part in Path(match).parts):
            continue
        results.add(path)
    return sorted(results)


def relative_source(path: Path, root: Path) -> str:
    """Return *path* relative to *root* (``..`` allowed) as a POSIX string."""
    try:
        return path.resolve().relative_to(root.resolve(), walk_up=True).as_posix()
    except ValueError:
        return path.as_posix()


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_document(path: Path, *, root: Path) -> Document:
    """Read a markdown file into a :class:`Document`."""
    content = path.read_text(encoding="utf-8")
    metadata, body = parse_frontmatter(content)
    return Document(body=body, metadata=metadata, source=relative_source(path, root))


def write_json(path: Path, payload: Any) -> None:
    """Serialize *payload* as pretty-printed UTF-8 JSON.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    path.write_text(text + "\n", encoding="utf-8")
