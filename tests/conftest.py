"""Shared pytest fixtures and test helpers for notebuild tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from notebuild.config.settings import NotebuildSettings


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory with an empty ``notes/`` folder."""
    monkeypatch.delenv("NOTEBUILD_CONFIG", raising=False)
    (tmp_path / "notes").mkdir()
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> NotebuildSettings:
    """Settings rooted at the temporary project."""
    return NotebuildSettings.from_cli(project_root=project_root)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI builds it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_note(root: Path, rel_path: str, body: str, **frontmatter: str) -> Path:
    """Write a markdown note with simple ``key: value`` front matter."""
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    if frontmatter:
        header = "\n".join(f"{key}: {value}" for key, value in frontmatter.items())
        content = f"---\n{header}\n---\n{body}"
    else:
        content = body
    path.write_text(content, encoding="utf-8")
    return path
