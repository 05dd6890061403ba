"""Draft release notes from the conventional commits since the last release tag."""

from .api import GitRelease
from .cli import create_cli_context, installed_version

__version__ = installed_version()

__all__ = ["GitRelease", "__version__", "create_cli_context"]
