"""Click command class shared by the notebuild subcommands."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

# (command line, what it does)
Example = tuple[str, str]


class NoteCommand(click.Command):
    """A command that can list worked examples with ``--examples``.

    ``--help`` stays short; ``notebuild build --examples`` prints each
    example command line next to a one-line description and exits.
    """

    def __init__(self, *args: Any, examples: Sequence[Example] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples and exit.",
                )
            )

    def format_examples(self) -> str:
        width = max(len(line) for line, _ in self.examples)
        return "\n".join(f"  {line:<{width}}  # {what}" for line, what in self.examples)

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(self.format_examples())
        ctx.exit()
