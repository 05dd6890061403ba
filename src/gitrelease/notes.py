"""Release-note composition."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from .categories import CategoryTable, categorize, included_categories
from .commits import commit_title, commits_in_range, filter_commits
from .git import CommitRecord, GitRepository
from .tags import ReleaseTag, find_last_release
from .utils import log_debug
from .version import (
    BUMP_MINOR,
    BUMP_PATCH,
    SemanticVersion,
    bump_version,
    format_version,
    parse_version,
    strip_version_label,
)

HEADER_TEMPLATE = (
    ":robot: I have created a release \\*beep\\* \\*boop\\*\n"
    "---\n"
    "### {version} / {date}\n\n"
)
COMMITS_HEADING = "### Commits since last release:\n\n"
EDITED_FILES_HEADING = "### Files edited since last release:\n\n"
FOOTER = (
    "\n\n\nThis PR was generated with "
    "[GitRelease](https://github.com/hengfengli/gitrelease).\n"
)


@dataclass
class ReleaseData:
    """Everything gathered from the repository for one set of release notes."""

    tag: ReleaseTag
    head: str
    repo_url: str
    commits: list[CommitRecord] = field(default_factory=list)
    changed_paths: list[str] = field(default_factory=list)


def select_bump_type(table: CategoryTable) -> str:
    """Features bump the minor version, anything else bumps the patch."""
    if table.get("feat"):
        return BUMP_MINOR
    return BUMP_PATCH


def release_version(tag: ReleaseTag, table: CategoryTable) -> SemanticVersion:
    """Return the version following ``tag`` given the categorized commits."""
    label = strip_version_label(tag.name)
    version = parse_version(label)
    if version is None:
        raise ValueError(f"tag '{tag.name}' does not contain a valid version (got '{label}').")
    bump_type = select_bump_type(table)
    log_debug(f"bumping {format_version(version)} ({bump_type})")
    bump_version(version, bump_type)
    return version


def render_header(tag: ReleaseTag, table: CategoryTable, today: Optional[date] = None) -> str:
    version = release_version(tag, table)
    day = today or date.today()
    return HEADER_TEMPLATE.format(version=format_version(version), date=day.strftime("%Y-%m-%d"))


def render_categorized_changes(table: CategoryTable) -> str:
    """Render the displayed categories, each followed by one bullet per change."""
    lines: list[str] = []
    for name, descriptions in included_categories(table):
        lines.append(f"#### {name}\n\n")
        lines.extend(f"* {text}\n" for text in descriptions)
        lines.append("\n")
    lines.append("---\n")
    return "".join(lines)


def render_commit_list(commits: Iterable[CommitRecord], repo_url: str, submodule: str = "") -> str:
    lines = [COMMITS_HEADING]
    for commit in filter_commits(commits, submodule):
        lines.append(f"* [{commit_title(commit)}]({repo_url}/commit/{commit.id})\n")
    lines.append("\n\n")
    return "".join(lines)


def render_edited_files(paths: Iterable[str], folder: str = "") -> str:
    """Render changed paths inside a preformatted block, limited to ``folder``."""
    prefix = f"{folder}/" if folder else ""
    lines = [EDITED_FILES_HEADING, "<pre><code>"]
    lines.extend(f"{path}\n" for path in paths if path.startswith(prefix))
    lines.append("</code></pre>\n")
    return "".join(lines)


def render_compare_link(repo_url: str, commit_id: str) -> str:
    return f"[Compare Changes]({repo_url}/compare/{commit_id}...HEAD)"


def render_footer() -> str:
    return FOOTER


def gather_release_data(
    repo: GitRepository,
    repo_url: str,
    *,
    folder: str = "",
) -> Optional[ReleaseData]:
    """Collect the last release tag, the commits since then and the edited paths.

    Returns None when no release tag exists yet.
    """
    tag = find_last_release(repo, folder)
    if tag is None:
        return None
    head = repo.head_commit()
    commits = commits_in_range(repo, head, tag.commit_id)
    changed_paths = repo.changed_paths(tag.commit_id, head)
    return ReleaseData(
        tag=tag,
        head=head,
        repo_url=repo_url,
        commits=commits,
        changed_paths=changed_paths,
    )


def render_release_notes(
    data: ReleaseData,
    *,
    folder: str = "",
    submodule: str = "",
    today: Optional[date] = None,
) -> str:
    """Render every section of the release notes for already gathered data."""
    table = categorize(data.commits, submodule)
    sections = [
        render_header(data.tag, table, today),
        render_categorized_changes(table),
        render_commit_list(data.commits, data.repo_url, submodule),
        render_edited_files(data.changed_paths, folder),
        render_compare_link(data.repo_url, data.tag.commit_id),
        render_footer(),
    ]
    return "".join(sections)


def compose_release_notes(
    repo: GitRepository,
    repo_url: str,
    *,
    folder: str = "",
    submodule: str = "",
    today: Optional[date] = None,
) -> Optional[str]:
    """Build the complete release-note document, or None without a prior release.

    The document is assembled in memory so nothing is emitted when a later
    stage fails.
    """
    data = gather_release_data(repo, repo_url, folder=folder)
    if data is None:
        return None
    return render_release_notes(data, folder=folder, submodule=submodule, today=today)
