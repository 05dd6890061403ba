"""Python-friendly facade for invoking gitrelease functionality."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

from .categories import CategoryTable, categorize
from .cli import CLIContext, create_cli_context
from .commits import commits_in_range
from .git import CommitRecord
from .notes import compose_release_notes, release_version
from .tags import ReleaseTag, find_last_release
from .version import SemanticVersion


class GitRelease:
    """High-level helper that mirrors the CLI for Python callers."""

    def __init__(
        self,
        *,
        root: Path | str | None = None,
        subdir: Optional[str] = None,
        submodule: Optional[str] = None,
        remote: Optional[str] = None,
        config: Path | str | None = None,
        debug: bool = False,
    ) -> None:
        resolved_config = Path(config) if config is not None else None
        self._ctx = create_cli_context(
            root=root,
            config=resolved_config,
            remote=remote,
            subdir=subdir,
            submodule=submodule,
            debug=debug,
        )

    @property
    def context(self) -> CLIContext:
        """Expose the underlying CLIContext for advanced scenarios."""

        return self._ctx

    def last_release(self) -> Optional[ReleaseTag]:
        """Return the most recent release tag in the configured folder scope."""
        return find_last_release(self._ctx.repo, self._ctx.folder)

    def commits(self) -> list[CommitRecord]:
        """Return the commits made since the last release, newest first."""
        tag = self.last_release()
        if tag is None:
            return []
        repo = self._ctx.repo
        return commits_in_range(repo, repo.head_commit(), tag.commit_id)

    def categories(self) -> CategoryTable:
        """Return the commits since the last release grouped by category."""
        return categorize(self.commits(), self._ctx.submodule)

    def next_version(self) -> Optional[SemanticVersion]:
        """Return the version the next release should carry."""
        tag = self.last_release()
        if tag is None:
            return None
        return release_version(tag, self.categories())

    def notes(self, *, today: Optional[date] = None) -> Optional[str]:
        """Return the release notes, or None when nothing has been released yet."""
        return compose_release_notes(
            self._ctx.repo,
            self._ctx.repo_url(),
            folder=self._ctx.folder,
            submodule=self._ctx.submodule,
            today=today,
        )
