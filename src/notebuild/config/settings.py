"""notebuild settings: CLI flags over ``NOTEBUILD_*`` env vars over TOML.

The TOML file is ``--config`` when given, else ``$NOTEBUILD_CONFIG``, else
the nearest ``notebuild.toml`` in the start directory or one of its
parents. Its directory becomes the project root, which is what relative
``[build]`` paths are resolved against.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    TomlConfigSettingsSource,
)

from notebuild.config.models import BuildConfig, LinksConfig

CONFIG_FILENAME = "notebuild.toml"
CONFIG_ENV_VAR = "NOTEBUILD_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate the config file for a project rooted at or above *start*.

    ``$NOTEBUILD_CONFIG`` wins when set, even if it names a missing file
    (then None is returned rather than falling back to the search).
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class NotebuildSettings(BaseSettings):
    """Everything a build needs, frozen after construction.

    Attributes:
        project_root: Base directory for relative source and output paths.
        config_path: The TOML file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NOTEBUILD_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    build: BuildConfig = Field(default_factory=BuildConfig)
    links: LinksConfig = Field(default_factory=LinksConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # The TOML file to read travels in as the ``config_path`` init kwarg.
        config_path = None
        if isinstance(init_settings, InitSettingsSource):
            config_path = init_settings.init_kwargs.get("config_path")
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        if config_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=config_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> NotebuildSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* that does not exist is ignored. Without
        *project_root*, the config file's directory (or the CWD) is used.

        Raises:
            click.ClickException: If the TOML file cannot be parsed.
        """
        toml_path = Path(config_path) if config_path else find_config(project_root)
        if toml_path is not None and not toml_path.is_file():
            toml_path = None

        root = project_root or (toml_path.parent if toml_path else Path.cwd())
        try:
            return cls(project_root=root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

    def resolve_path(self, value: str | Path) -> Path:
        """Resolve *value* against :attr:`project_root` unless absolute."""
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.project_root / path
