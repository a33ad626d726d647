"""notebuild command line.

The root group turns global flags into :class:`NotebuildSettings`, sets
up logging, and hands an :class:`AppContext` to the subcommands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from notebuild import __version__
from notebuild.commands import register_commands
from notebuild.config.logging import configure_logging
from notebuild.config.settings import NotebuildSettings
from notebuild.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from notebuild.services.result import ServiceResult


class AppContext:
    """Settings plus result output for one invocation (``click.pass_obj``)."""

    def __init__(self, settings: NotebuildSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(json_output=settings.json_output, quiet=settings.quiet)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result ends the process with status 1.

        Results go to stdout and failures to stderr. Warnings are printed
        to stderr too, except in JSON mode where they are part of the payload.
        """
        click.echo(format_result(result, settings=self.output), err=not result.ok)
        if not result.ok:
            click.get_current_context().exit(1)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="notebuild")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the OK/ERROR line.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs on stderr.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Read this TOML file instead of searching for notebuild.toml.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """notebuild: markdown notes to a JSON data file for static sites."""
    settings = NotebuildSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
