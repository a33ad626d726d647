"""Command: build the notes JSON data file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from notebuild.commands._base import NoteCommand

if TYPE_CHECKING:
    from notebuild.cli import AppContext


@click.command(
    cls=NoteCommand,
    examples=[
        ("notebuild build", "use [build] from notebuild.toml"),
        (
            "notebuild build --source '../notes/**/*.md' --output src/_data/notes.json",
            "notes kept outside the site",
        ),
        ("notebuild --json build --wikilinks", "also rewrite [[wikilinks]], JSON summary"),
    ],
)
@click.option("--source", default=None, help="Glob of markdown files (default from config).")
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file to write (default from config).",
)
@click.option(
    "--wikilinks/--no-wikilinks",
    default=None,
    help="Also rewrite [[wikilinks]] as internal links.",
)
@click.pass_obj
def build(
    app: AppContext,
    source: str | None,
    output: str | None,
    wikilinks: bool | None,
) -> None:
    """Rewrite links in every note and export the collection as JSON."""
    from notebuild.services.build import BuildService

    app.emit(BuildService(app.settings).build(source, output, wikilinks=wikilinks))
