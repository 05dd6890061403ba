"""Conventional-commit classification."""

from __future__ import annotations

from typing import Iterable, Optional

from .commits import commit_title, filter_commits
from .git import CommitRecord

CategoryTable = dict[str, list[str]]

# Category key -> (display name, included in the release notes).
CATEGORY_DISPLAY: dict[str, tuple[str, bool]] = {
    "feat": ("Features", True),
    "fix": ("Bug Fixes", True),
    "docs": ("Documentation", True),
    "style": ("Styles", False),
    "refactor": ("Code Refactoring", False),
    "test": ("Test Refactoring", False),
    "chore": ("Miscellaneous Chores", False),
    "perf": ("Performance Improvements", True),
}
OTHER_CATEGORY = ("Other", False)

DISPLAY_ORDER: tuple[str, ...] = ("feat", "fix", "docs", "perf")


def split_category(title: str) -> Optional[tuple[str, str]]:
    """Split ``type(scope): description`` into ``(type, description)``.

    Returns None when the title has no colon. The key ends at the first
    ``(`` if it comes before the first ``:``.
    """
    colon = title.find(":")
    if colon < 0:
        return None
    paren = title.find("(", 0, colon)
    key_end = paren if paren >= 0 else colon
    return title[:key_end], title[colon + 1 :].strip()


def categorize(commits: Iterable[CommitRecord], submodule: str = "") -> CategoryTable:
    """Group commit descriptions by category key in traversal order."""
    table: CategoryTable = {}
    for commit in filter_commits(commits, submodule):
        parts = split_category(commit_title(commit))
        if parts is None:
            continue
        key, description = parts
        table.setdefault(key, []).append(description)
    return table


def category_display(key: str) -> tuple[str, bool]:
    """Return the display name and inclusion flag of a category key."""
    return CATEGORY_DISPLAY.get(key, OTHER_CATEGORY)


def included_categories(table: CategoryTable) -> list[tuple[str, list[str]]]:
    """Return ``(display name, descriptions)`` for displayed categories in fixed order."""
    sections: list[tuple[str, list[str]]] = []
    for key in DISPLAY_ORDER:
        descriptions = table.get(key)
        if not descriptions:
            continue
        name, included = category_display(key)
        if included:
            sections.append((name, descriptions))
    return sections
