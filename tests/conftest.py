"""Shared fixtures that build throwaway git repositories."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Optional

import pytest

from gitrelease.utils import configure_logging

BASE_TIME = 1_700_000_000


class RepoBuilder:
    """Create commits and tags in a scratch repository with fixed timestamps."""

    def __init__(self, path: Path, home: Path) -> None:
        self.path = path
        self._env = dict(os.environ)
        self._env.update(
            {
                "HOME": str(home),
                "GIT_CONFIG_NOSYSTEM": "1",
                "GIT_AUTHOR_NAME": "Test User",
                "GIT_AUTHOR_EMAIL": "test@example.com",
                "GIT_COMMITTER_NAME": "Test User",
                "GIT_COMMITTER_EMAIL": "test@example.com",
            }
        )
        self._clock = BASE_TIME

    def git(self, *args: str, timestamp: Optional[int] = None) -> str:
        env = dict(self._env)
        if timestamp is not None:
            env["GIT_AUTHOR_DATE"] = f"@{timestamp} +0000"
            env["GIT_COMMITTER_DATE"] = f"@{timestamp} +0000"
        result = subprocess.run(
            ["git", *args],
            cwd=self.path,
            env=env,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()

    def write(self, relative: str, content: str) -> None:
        target = self.path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def commit(
        self,
        message: str,
        files: Optional[dict[str, str]] = None,
        *,
        timestamp: Optional[int] = None,
    ) -> str:
        """Commit ``files`` (or nothing) and return the new commit id."""
        if timestamp is None:
            self._clock += 100
            timestamp = self._clock
        for relative, content in (files or {}).items():
            self.write(relative, content)
            self.git("add", relative)
        self.git("commit", "--allow-empty", "--no-gpg-sign", "-m", message, timestamp=timestamp)
        return self.git("rev-parse", "HEAD")

    def tag(self, name: str, target: str = "HEAD", *, annotated: bool = False) -> None:
        if annotated:
            self.git("tag", "-a", name, "-m", f"Release {name}", target)
        else:
            self.git("tag", name, target)


@pytest.fixture(autouse=True)
def _reset_logging() -> None:
    configure_logging(debug=False)


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    home = tmp_path / "home"
    home.mkdir()
    builder = RepoBuilder(repo_dir, home)
    builder.git("init")
    builder.git("config", "user.email", "test@example.com")
    builder.git("config", "user.name", "Test User")
    builder.git("config", "commit.gpgsign", "false")
    builder.git("config", "tag.gpgsign", "false")
    builder.git("remote", "add", "origin", "git@github.com:owner/repo.git")
    return builder
