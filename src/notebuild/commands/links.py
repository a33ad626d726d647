"""Command: preview link rewriting for a single note."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from notebuild.commands._base import NoteCommand

if TYPE_CHECKING:
    from notebuild.cli import AppContext


@click.command(
    cls=NoteCommand,
    examples=[
        ("notebuild links notes/my-note.md", "each link with its kind and HTML"),
        ("notebuild --json links notes/my-note.md --wikilinks", "include [[wikilinks]]"),
    ],
)
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--wikilinks/--no-wikilinks",
    default=None,
    help="Also rewrite [[wikilinks]] as internal links.",
)
@click.pass_obj
def links(app: AppContext, file: str, wikilinks: bool | None) -> None:
    """Show each link in FILE with its kind and rewritten HTML."""
    from notebuild.services.build import BuildService

    app.emit(BuildService(app.settings).preview(Path(file).resolve(), wikilinks=wikilinks))
