"""Commit range extraction and title filters."""

from __future__ import annotations

from typing import Iterable

from .git import CommitRecord, GitRepository
from .utils import log_debug

RELEASE_TITLE_PREFIX = "Release"


def commits_in_range(repo: GitRepository, start: str, end: str) -> list[CommitRecord]:
    """Return commits reachable from ``start`` but not from ``end``, newest first.

    ``start`` is included and ``end`` is excluded, so ``start == end`` yields
    an empty list.
    """
    commit_ids = repo.walk_range(start, end)
    commits: list[CommitRecord] = []
    for commit_id, record in zip(commit_ids, repo.read_commits(commit_ids)):
        if record is None:
            raise RuntimeError(f"git failed to read commit {commit_id}.")
        commits.append(record)
    log_debug(f"found {len(commits)} commit(s) between {end} and {start}")
    return commits


def commit_title(commit: CommitRecord) -> str:
    return commit.title


def is_release_commit(title: str) -> bool:
    """Return True for release-marker commits, which never show up in notes."""
    return title.startswith(RELEASE_TITLE_PREFIX)


def matches_submodule(title: str, submodule: str = "") -> bool:
    """Return True when ``title`` mentions ``(submodule)`` or no filter is set."""
    if not submodule:
        return True
    return f"({submodule})" in title


def filter_commits(commits: Iterable[CommitRecord], submodule: str = "") -> list[CommitRecord]:
    """Drop release commits and commits outside the submodule filter."""
    selected: list[CommitRecord] = []
    for commit in commits:
        title = commit_title(commit)
        if is_release_commit(title):
            continue
        if matches_submodule(title, submodule):
            selected.append(commit)
    return selected
