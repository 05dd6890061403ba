"""Release tag discovery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .git import GitRepository
from .utils import log_debug

DEFAULT_TAG_PATTERN = "v*"


@dataclass(frozen=True)
class ReleaseTag:
    """A tag marking a previous release and the commit it points to."""

    name: str
    author_time: int
    commit_id: str


def tag_pattern(folder: str = "") -> str:
    """Return the tag glob for a folder scope (``v*`` when unscoped)."""
    if not folder:
        return DEFAULT_TAG_PATTERN
    return f"{folder}/*"


def find_last_release(repo: GitRepository, folder: str = "") -> Optional[ReleaseTag]:
    """Return the matching tag whose commit has the latest author time.

    Tags that do not resolve to a commit are skipped. On equal author times
    the tag enumerated first wins. Returns None when nothing matches.
    """
    pattern = tag_pattern(folder)
    log_debug(f"looking for release tags matching '{pattern}'")

    names = repo.tag_names(pattern)
    commits = repo.read_commits([f"refs/tags/{name}^{{commit}}" for name in names])

    latest: Optional[ReleaseTag] = None
    for name, commit in zip(names, commits):
        if commit is None:
            log_debug(f"skipping tag {name}: it does not point to a commit")
            continue
        if latest is None or commit.author_time > latest.author_time:
            latest = ReleaseTag(name=name, author_time=commit.author_time, commit_id=commit.id)

    if latest is None:
        log_debug(f"no release tag matches '{pattern}'")
    else:
        log_debug(f"last release tag: {latest.name} ({latest.commit_id})")
    return latest
