"""Thin git backend driven through the ``git`` executable."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .utils import log_debug

GITHUB_URL_PATTERN = re.compile(r"^git@([\w.]*):([\w/-]*)\.git$")


@dataclass(frozen=True)
class CommitRecord:
    """A commit read from the repository."""

    id: str
    author_time: int
    message: bytes

    @property
    def title(self) -> str:
        """Return the first line of the commit message."""
        text = self.message.decode("utf-8", errors="replace")
        return text.split("\n", 1)[0].rstrip("\r")


def normalize_remote_url(url: str) -> str:
    """Turn a remote URL into the https base URL used for links.

    ``https://`` URLs pass through unchanged; ``git@host:owner/repo.git``
    becomes ``https://host/owner/repo``.
    """
    if url.startswith("https://"):
        return url
    match = GITHUB_URL_PATTERN.match(url)
    if match is None:
        raise ValueError(f"unsupported remote url '{url}'; expected https:// or git@host:path.git.")
    host, path = match.groups()
    return f"https://{host}/{path}"


def _parse_commit_object(commit_id: str, raw: bytes) -> CommitRecord:
    header, separator, message = raw.partition(b"\n\n")
    if not separator:
        message = b""
    author_time: Optional[int] = None
    for line in header.split(b"\n"):
        if line.startswith(b"author "):
            # author Name <email> 1700000000 +0000
            fields = line.rsplit(b" ", 2)
            if len(fields) == 3 and fields[1].isdigit():
                author_time = int(fields[1])
            break
    if author_time is None:
        raise RuntimeError(f"failed to parse commit object {commit_id}.")
    return CommitRecord(id=commit_id, author_time=author_time, message=message)


def _parse_batch_output(revisions: Sequence[str], output: bytes) -> list[Optional[CommitRecord]]:
    """Split ``git cat-file --batch`` output into one entry per requested revision.

    Each object arrives as ``<id> <type> <size>\\n<content>\\n``. Names git
    cannot resolve come back as ``<name> missing`` (or ``ambiguous``) and
    map to None.
    """
    records: list[Optional[CommitRecord]] = []
    offset = 0
    for revision in revisions:
        newline = output.find(b"\n", offset)
        if newline < 0:
            raise RuntimeError(f"git returned truncated output while reading {revision}.")
        header = output[offset:newline].decode("utf-8", errors="replace").split(" ")
        offset = newline + 1
        if len(header) != 3:
            records.append(None)
            continue
        object_id, object_type, size = header
        content = output[offset : offset + int(size)]
        offset += int(size) + 1
        if object_type != "commit":
            records.append(None)
            continue
        records.append(_parse_commit_object(object_id, content))
    return records


class GitRepository:
    """Read-only queries against a local git repository."""

    def __init__(self, root: Path) -> None:
        self.root = root

    @classmethod
    def open(cls, path: Path | str) -> "GitRepository":
        """Open the repository containing ``path``."""
        candidate = Path(path)
        if not candidate.is_dir():
            raise RuntimeError(f"repository path {candidate} is not a directory.")
        repo = cls(candidate)
        result = repo._run(
            ["rev-parse", "--show-toplevel"], action=f"open repository at {candidate}"
        )
        repo.root = Path(result.stdout.decode("utf-8").strip())
        log_debug(f"opened repository at {repo.root}")
        return repo

    def _run(
        self,
        args: Sequence[str],
        *,
        action: str,
        stdin: Optional[bytes] = None,
    ) -> subprocess.CompletedProcess[bytes]:
        command = ["git", *args]
        log_debug(f"running {' '.join(command)}")
        try:
            return subprocess.run(
                command,
                cwd=str(self.root),
                check=True,
                capture_output=True,
                input=stdin,
            )
        except FileNotFoundError as exc:
            raise RuntimeError(f"git is required to {action} but was not found in PATH.") from exc
        except subprocess.CalledProcessError as exc:
            stderr = exc.stderr.decode("utf-8", errors="replace").strip() if exc.stderr else ""
            detail = f": {stderr}" if stderr else f" (exit status {exc.returncode})"
            raise RuntimeError(f"git failed to {action}{detail}") from exc

    def head_commit(self) -> str:
        """Return the id of the commit HEAD points to."""
        result = self._run(["rev-parse", "--verify", "HEAD^{commit}"], action="resolve HEAD")
        return result.stdout.decode("ascii").strip()

    def remote_url(self, name: str = "origin") -> str:
        """Return the URL configured for remote ``name``, without ``insteadOf`` rewriting."""
        result = self._run(
            ["config", "--get", f"remote.{name}.url"],
            action=f"read the url of remote '{name}'",
        )
        return result.stdout.decode("utf-8").strip()

    def tag_names(self, pattern: str) -> list[str]:
        """Return tag names matching a glob ``pattern``, sorted by refname.

        Column layout and ``tag.sort`` from the user's git config are
        overridden so the output is always one name per line in refname order.
        """
        result = self._run(
            ["tag", "--list", "--no-column", "--sort=refname", pattern],
            action=f"list tags matching '{pattern}'",
        )
        lines = result.stdout.decode("utf-8").splitlines()
        return [line.strip() for line in lines if line.strip()]

    def read_commits(self, revisions: Sequence[str]) -> list[Optional[CommitRecord]]:
        """Read several commits through a single ``git cat-file --batch`` process.

        Revisions may be any name git resolves, such as ``refs/tags/v1^{commit}``.
        The result is aligned with ``revisions``; an entry is None when the
        name does not resolve to a commit.
        """
        if not revisions:
            return []
        request = "".join(f"{revision}\n" for revision in revisions).encode("utf-8")
        result = self._run(
            ["cat-file", "--batch"],
            action=f"read {len(revisions)} commit object(s)",
            stdin=request,
        )
        return _parse_batch_output(revisions, result.stdout)

    def read_commit(self, commit_id: str) -> CommitRecord:
        """Read the commit object ``commit_id``."""
        (record,) = self.read_commits([commit_id])
        if record is None:
            raise RuntimeError(f"git failed to read commit {commit_id}: not a commit.")
        return record

    def walk_range(self, start: str, end: str) -> list[str]:
        """Return ids reachable from ``start`` but not from ``end``, newest first."""
        result = self._run(
            ["rev-list", start, f"^{end}", "--"],
            action=f"walk commits in {end}..{start}",
        )
        return [line for line in result.stdout.decode("ascii").splitlines() if line]

    def changed_paths(self, old_commit: str, new_commit: str) -> list[str]:
        """Return the paths that differ between the trees of two commits."""
        result = self._run(
            ["diff", "--name-only", "--no-renames", "-z", old_commit, new_commit, "--"],
            action=f"diff {old_commit} against {new_commit}",
        )
        return [path for path in result.stdout.decode("utf-8").split("\0") if path]
