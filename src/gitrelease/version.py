"""Semantic version parsing and bumping."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

BUMP_MAJOR = "major"
BUMP_MINOR = "minor"
BUMP_PATCH = "patch"
BUMP_SNAPSHOT = "snapshot"

SNAPSHOT_SUFFIX = "-SNAPSHOT"

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(-\w+)?(-SNAPSHOT)?$")


@dataclass
class SemanticVersion:
    """A mutable semantic version.

    ``extra`` holds a pre-release suffix (including its leading dash) and is
    rendered verbatim. ``parse_version`` never fills it in, so it is only set
    by callers that construct versions directly.
    """

    major: int
    minor: int
    patch: int
    extra: str = ""
    snapshot: bool = False

    def __str__(self) -> str:
        return format_version(self)


def parse_version(text: str) -> Optional[SemanticVersion]:
    """Parse ``MAJOR.MINOR.PATCH`` with optional ``-suffix`` and ``-SNAPSHOT``.

    Returns None when the text does not match. The suffix groups are matched
    but not carried into the result: ``extra`` is always empty and
    ``snapshot`` is always False. Callers strip any leading ``v`` first.
    """
    match = VERSION_PATTERN.fullmatch(text)
    if match is None:
        return None
    major, minor, patch, _extra, _snapshot = match.groups()
    return SemanticVersion(major=int(major), minor=int(minor), patch=int(patch))


def bump_version(version: SemanticVersion, bump_type: str) -> None:
    """Bump ``version`` in place. Unknown bump types leave it untouched."""
    if bump_type == BUMP_MAJOR:
        version.major += 1
        version.minor = 0
        version.patch = 0
        version.snapshot = False
    elif bump_type == BUMP_MINOR:
        version.minor += 1
        version.patch = 0
        version.snapshot = False
    elif bump_type == BUMP_PATCH:
        version.patch += 1
        version.snapshot = False
    elif bump_type == BUMP_SNAPSHOT:
        version.patch += 1
        version.snapshot = True


def format_version(version: SemanticVersion) -> str:
    """Render ``version`` as ``MAJOR.MINOR.PATCH{extra}[-SNAPSHOT]``."""
    snapshot = SNAPSHOT_SUFFIX if version.snapshot else ""
    return f"{version.major}.{version.minor}.{version.patch}{version.extra}{snapshot}"


def strip_version_label(tag_name: str) -> str:
    """Return the version part of a tag name such as ``v1.2.3`` or ``pkg/v1.2.3``."""
    label = tag_name.split("/")[-1]
    if label.startswith("v"):
        return label[1:]
    return label
