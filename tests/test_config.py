"""Unit tests for configuration helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from gitrelease.config import (
    Config,
    load_config,
    load_project_config,
    merge_cli_overrides,
)
from gitrelease.utils import configure_logging


def write_yaml(path: Path, content: object) -> None:
    path.write_text(yaml.safe_dump(content, sort_keys=False), encoding="utf-8")


def test_load_config_reads_all_options(tmp_path: Path) -> None:
    config_path = tmp_path / "gitrelease.yaml"
    write_yaml(config_path, {"remote": "upstream", "subdir": "packages/core/", "submodule": "core"})

    config = load_config(config_path)

    assert config == Config(remote="upstream", subdir="packages/core", submodule="core")


def test_load_config_defaults_for_empty_file(tmp_path: Path) -> None:
    config_path = tmp_path / "gitrelease.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path) == Config()


def test_load_config_warns_about_unknown_keys(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    configure_logging()
    config_path = tmp_path / "gitrelease.yaml"
    write_yaml(config_path, {"subdir": "core", "colour": "blue"})

    assert load_config(config_path) == Config(subdir="core")
    assert "unknown config option 'colour'" in capsys.readouterr().err


def test_load_config_requires_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "gitrelease.yaml"
    write_yaml(config_path, ["remote", "origin"])

    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(config_path)


def test_load_config_rejects_non_string_options(tmp_path: Path) -> None:
    config_path = tmp_path / "gitrelease.yaml"
    write_yaml(config_path, {"submodule": 3})

    with pytest.raises(ValueError, match="'submodule' must be a string"):
        load_config(config_path)


def test_load_config_rejects_empty_remote(tmp_path: Path) -> None:
    config_path = tmp_path / "gitrelease.yaml"
    write_yaml(config_path, {"remote": "  "})

    with pytest.raises(ValueError, match="'remote' cannot be empty"):
        load_config(config_path)


def test_load_project_config_without_file(tmp_path: Path) -> None:
    assert load_project_config(tmp_path) == Config()


def test_load_project_config_uses_default_file(tmp_path: Path) -> None:
    write_yaml(tmp_path / ".gitrelease.yaml", {"submodule": "api"})

    assert load_project_config(tmp_path).submodule == "api"


def test_load_project_config_requires_explicit_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_project_config(tmp_path, tmp_path / "missing.yaml")


def test_merge_cli_overrides_only_replaces_given_values() -> None:
    config = Config(remote="upstream", subdir="core", submodule="core")

    merged = merge_cli_overrides(config, subdir="cli/", submodule="")

    assert merged == Config(remote="upstream", subdir="cli", submodule="")
    assert merge_cli_overrides(config) == config
