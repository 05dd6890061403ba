"""Configuration helpers for gitrelease."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import MutableMapping, Optional

import yaml

from .utils import log_warning

CONFIG_FILENAME = ".gitrelease.yaml"
CONFIG_OPTIONS = ("remote", "subdir", "submodule")
DEFAULT_REMOTE = "origin"


def default_config_path(repo_root: Path) -> Path:
    """Return the default config path for a repository root."""
    return repo_root / CONFIG_FILENAME


@dataclass(frozen=True)
class Config:
    """Settings that select which part of a repository is released."""

    remote: str = DEFAULT_REMOTE
    subdir: str = ""
    submodule: str = ""


def _string_option(raw: MutableMapping[str, object], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"Config option '{key}' must be a string.")
    return value.strip()


def load_config(path: Path) -> Config:
    """Load the configuration from disk."""
    with path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, MutableMapping):
        raise ValueError("Config root must be a mapping")
    for key in raw:
        if key not in CONFIG_OPTIONS:
            log_warning(f"ignoring unknown config option '{key}' in {path}.")

    remote = _string_option(raw, "remote", DEFAULT_REMOTE)
    if not remote:
        raise ValueError("Config option 'remote' cannot be empty.")

    return Config(
        remote=remote,
        subdir=_string_option(raw, "subdir", "").rstrip("/"),
        submodule=_string_option(raw, "submodule", ""),
    )


def load_project_config(repo_root: Path, config_path: Optional[Path] = None) -> Config:
    """Load an explicit config file, the repository default, or built-in defaults."""
    if config_path is not None:
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return load_config(config_path)

    path = default_config_path(repo_root)
    if path.is_file():
        return load_config(path)
    return Config()


def merge_cli_overrides(
    config: Config,
    *,
    remote: Optional[str] = None,
    subdir: Optional[str] = None,
    submodule: Optional[str] = None,
) -> Config:
    """Return ``config`` with explicitly passed command-line values applied."""
    overrides: dict[str, str] = {}
    if remote is not None:
        overrides["remote"] = remote
    if subdir is not None:
        overrides["subdir"] = subdir.rstrip("/")
    if submodule is not None:
        overrides["submodule"] = submodule
    return replace(config, **overrides)
