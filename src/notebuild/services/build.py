"""BuildService — notes folder to JSON data file.

Pipeline per build: load (glob + front matter) -> transform (link
rewriting + permalink merge) -> export (JSON array).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from notebuild.domain.content import Document, transform_document
from notebuild.domain.links import LinkKind, count_links, extract_links, rewrite_parsed_link
from notebuild.domain.permalinks import MissingTitleError, derive_permalink
from notebuild.infrastructure.collection import NoteCollection
from notebuild.infrastructure.filesystem import read_document
from notebuild.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from notebuild.config.settings import NotebuildSettings

log = structlog.get_logger(__name__)


class BuildService:
    """Build and preview operations over a notes project."""

    def __init__(self, settings: NotebuildSettings) -> None:
        self._settings = settings

    def build(
        self,
        source: str | None = None,
        output: str | Path | None = None,
        *,
        wikilinks: bool | None = None,
    ) -> ServiceResult:
        """Rewrite every note matching *source* and export them to *output*.

        Arguments left as None fall back to the ``[build]`` and ``[links]``
        config sections.
        """
        op = "build_notes"
        settings = self._settings
        pattern = source or settings.build.source
        output_path = settings.resolve_path(output or settings.build.output)
        options = settings.links.rewrite_options(wikilinks=wikilinks)

        log.info("building notes", source=pattern, root=str(settings.project_root))

        notes = NoteCollection(
            settings.project_root,
            include_source=settings.build.include_source,
        ).load(pattern)
        if not notes:
            return ServiceResult.failure(
                op,
                ErrorCode.NO_DOCUMENTS,
                f"No markdown files match {pattern!r}",
                source=pattern,
                root=str(settings.project_root),
            )

        link_counts = {LinkKind.EXTERNAL: 0, LinkKind.INTERNAL: 0}
        missing_title: list[str] = []

        def _transform(document: Document) -> Document:
            for kind, count in count_links(document.body, wikilinks=options.wikilinks).items():
                link_counts[kind] += count
            try:
                return transform_document(document, options=options)
            except MissingTitleError:
                missing_title.append(document.source or "<unknown>")
                return document

        notes.transform(_transform)

        if missing_title:
            return ServiceResult.failure(
                op,
                ErrorCode.MISSING_TITLE,
                f"{len(missing_title)} document(s) have neither a title nor a permalink",
                sources=missing_title,
            )

        try:
            notes.export(output_path)
        except OSError as exc:
            return ServiceResult.failure(
                op,
                ErrorCode.WRITE_FAILED,
                f"Could not write {output_path}: {exc}",
                output=str(output_path),
            )

        log.info("done", documents=len(notes), output=str(output_path))

        return ServiceResult.success(
            op,
            {
                "source": pattern,
                "output": str(output_path),
                "document_count": len(notes),
                "links": {kind.value: count for kind, count in link_counts.items()},
            },
        )

    def preview(self, path: str | Path, *, wikilinks: bool | None = None) -> ServiceResult:
        """Show how the links of a single note would be rewritten.

        Nothing is written. A missing title is reported as a warning
        instead of an error so the links can still be inspected.
        """
        op = "preview_links"
        settings = self._settings
        file_path = settings.resolve_path(path)
        if not file_path.is_file():
            return ServiceResult.failure(op, ErrorCode.NOT_FOUND, f"No such file: {file_path}")

        options = settings.links.rewrite_options(wikilinks=wikilinks)
        document = read_document(file_path, root=settings.project_root)

        warnings: list[str] = []
        permalink: Any
        try:
            permalink = derive_permalink(document.metadata)
        except MissingTitleError as exc:
            permalink = None
            warnings.append(str(exc))

        links = []
        for link in extract_links(document.body, wikilinks=options.wikilinks):
            kind, html = rewrite_parsed_link(link, options=options)
            links.append({"raw": link.raw, "kind": kind.value, "html": html})

        return ServiceResult.success(
            op,
            {
                "source": document.source,
                "permalink": permalink,
                "links": links,
            },
            warnings=warnings,
        )
