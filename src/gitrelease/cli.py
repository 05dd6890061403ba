"""Command-line interface for gitrelease."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import date
from importlib.metadata import PackageNotFoundError, version as metadata_version
from pathlib import Path
from typing import Optional

import click
from rich.table import Table
from rich.text import Text

from .categories import CategoryTable, categorize, category_display
from .config import Config, load_project_config, merge_cli_overrides
from .git import GitRepository, normalize_remote_url
from .notes import (
    ReleaseData,
    gather_release_data,
    release_version,
    render_release_notes,
    select_bump_type,
)
from .utils import (
    abort_on_user_interrupt,
    configure_logging,
    console,
    emit_output,
    log_debug,
)
from .version import format_version

NAME = "gitrelease"


def installed_version() -> str:
    """Return the installed distribution version, or 0.0.0 from a source checkout."""
    try:
        return metadata_version(NAME)
    except PackageNotFoundError:
        return "0.0.0"


@dataclass
class CLIContext:
    """Repository handle plus the effective configuration for one run."""

    repo: GitRepository
    config: Config

    @property
    def folder(self) -> str:
        return self.config.subdir

    @property
    def submodule(self) -> str:
        return self.config.submodule

    def repo_url(self) -> str:
        """Return the https base URL of the configured remote."""
        url = self.repo.remote_url(self.config.remote)
        normalized = normalize_remote_url(url)
        log_debug(f"using repository url {normalized}")
        return normalized


def create_cli_context(
    *,
    root: Path | str | None = None,
    config: Optional[Path] = None,
    remote: Optional[str] = None,
    subdir: Optional[str] = None,
    submodule: Optional[str] = None,
    debug: bool = False,
) -> CLIContext:
    """Open the repository and resolve configuration like the CLI entry point."""

    configure_logging(debug)
    repo = GitRepository.open(Path(root) if root is not None else Path("."))
    file_config = load_project_config(repo.root, config)
    effective = merge_cli_overrides(file_config, remote=remote, subdir=subdir, submodule=submodule)
    log_debug(
        f"effective config: remote={effective.remote!r}, subdir={effective.subdir!r}, "
        f"submodule={effective.submodule!r}"
    )
    return CLIContext(repo=repo, config=effective)


def render_summary(data: ReleaseData, table: CategoryTable) -> None:
    """Print an overview of the upcoming release to stderr."""
    overview = Table(title="Release summary", show_header=False, box=None)
    overview.add_column("Field", style="bold")
    overview.add_column("Value")
    overview.add_row("Last release", data.tag.name)
    overview.add_row("Range", f"{data.tag.commit_id[:12]}..{data.head[:12]}")
    overview.add_row("Commits", str(len(data.commits)))
    overview.add_row("Bump", select_bump_type(table))
    overview.add_row("Next version", format_version(release_version(data.tag, table)))
    console.print(overview)

    if not table:
        return
    categories = Table(title="Categories")
    categories.add_column("Type")
    categories.add_column("Section")
    categories.add_column("Changes", justify="right")
    for key in sorted(table):
        name, included = category_display(key)
        section = Text(name) if included else Text("hidden", style="dim")
        categories.add_row(key, section, str(len(table[key])))
    console.print(categories)


def generate_release_notes(
    ctx: CLIContext,
    *,
    today: Optional[date] = None,
    summary: bool = False,
) -> Optional[str]:
    """Return the release notes for ``ctx``, or None if there is no prior release."""
    repo_url = ctx.repo_url()
    data = gather_release_data(ctx.repo, repo_url, folder=ctx.folder)
    if data is None:
        log_debug("no previous release found; nothing to report.")
        return None
    notes = render_release_notes(data, folder=ctx.folder, submodule=ctx.submodule, today=today)
    if summary:
        render_summary(data, categorize(data.commits, ctx.submodule))
    return notes


@click.command(name=NAME, context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--dir",
    "repo_dir",
    type=click.Path(path_type=Path, exists=True, file_okay=False),
    help="Repository root (defaults to the current directory).",
)
@click.option("--subdir", help="Folder scope for release tags and edited files.")
@click.option("--submodule", help="Only include commits whose title contains '(NAME)'.")
@click.option("--remote", help="Remote used for commit and compare links.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Path to an explicit gitrelease config YAML file.",
)
@click.option("--summary", is_flag=True, help="Print a release summary table to stderr.")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging.")
@click.version_option(
    installed_version(),
    "-v",
    "--version",
    prog_name=NAME,
    message="%(prog)s %(version)s",
)
def cli(
    repo_dir: Optional[Path],
    subdir: Optional[str],
    submodule: Optional[str],
    remote: Optional[str],
    config_path: Optional[Path],
    summary: bool,
    debug: bool,
) -> None:
    """Generate a summary of a git release."""

    try:
        ctx = create_cli_context(
            root=repo_dir,
            config=config_path,
            remote=remote,
            subdir=subdir,
            submodule=submodule,
            debug=debug,
        )
        notes = generate_release_notes(ctx, summary=summary)
    except (RuntimeError, ValueError, OSError) as error:
        raise click.ClickException(str(error)) from error

    if notes is not None:
        emit_output(notes, newline=False)


def main(argv: list[str] | None = None) -> int:
    """Entry point for console_scripts."""
    args = list(argv) if argv is not None else list(sys.argv[1:])

    try:
        result = cli.main(args=args, prog_name=NAME, standalone_mode=False)
    except click.ClickException as exc:
        exc.show(file=sys.stderr)
        exit_code = getattr(exc, "exit_code", 1)
        return exit_code if isinstance(exit_code, int) else 1
    except (KeyboardInterrupt, click.exceptions.Abort) as exc:
        try:
            abort_on_user_interrupt(exc)
        except click.exceptions.Exit as exit_exc:
            exit_code = getattr(exit_exc, "exit_code", 130)
            return exit_code if isinstance(exit_code, int) else 130
    return result if isinstance(result, int) else 0
