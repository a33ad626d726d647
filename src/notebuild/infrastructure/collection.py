"""NoteCollection — load, transform, and export a set of notes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from notebuild.domain.content import Document
from notebuild.infrastructure.filesystem import find_markdown_files, read_document, write_json

logger = logging.getLogger(__name__)


class NoteCollection:
    """An ordered set of :class:`Document` records backed by files.

    Usage::

        notes = NoteCollection(root).load("notes/**/*.md")
        notes.transform(transform_document)
        notes.export(root / "src/_data/notes.json")
    """

    def __init__(self, root: Path, *, include_source: bool = False) -> None:
        self._root = root
        self._include_source = include_source
        self._documents: list[Document] = []

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._documents)

    def load(self, pattern: str) -> NoteCollection:
        """Replace the collection with every file matching *pattern*."""
        paths = find_markdown_files(pattern, root=self._root)
        logger.debug("Matched %d files for %s", len(paths), pattern)
        self._documents = [read_document(path, root=self._root) for path in paths]
        return self

    def transform(self, fn: Callable[[Document], Document]) -> NoteCollection:
        """Replace each document with ``fn(document)``."""
        self._documents = [fn(document) for document in self._documents]
        return self

    def export(self, path: Path) -> Path:
        """Write the collection to *path* as a JSON array."""
        records = [doc.to_record(include_source=self._include_source) for doc in self._documents]
        write_json(path, records)
        logger.debug("Wrote %d documents to %s", len(records), path)
        return path
