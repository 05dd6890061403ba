"""Logging and output helpers.

Diagnostics go to stderr through the ``gitrelease`` logger; the release-note
document is the only thing written to stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

import click
from rich.console import Console

LOGGER_NAME = "gitrelease"

LEVEL_GLYPHS = {
    logging.DEBUG: "\033[95m◆\033[0m",
    logging.WARNING: "○",
    logging.ERROR: "\033[31m✘\033[0m",
}

logger = logging.getLogger(LOGGER_NAME)
console = Console(stderr=True)


class GlyphFormatter(logging.Formatter):
    """Prefix every line of a record with the glyph of its level."""

    def format(self, record: logging.LogRecord) -> str:
        glyph = LEVEL_GLYPHS.get(record.levelno, "")
        lines = record.getMessage().splitlines() or [""]
        return "\n".join(f"{glyph} {line}" if line else glyph for line in lines)


def configure_logging(debug: bool = False) -> logging.Logger:
    """Send ``gitrelease`` records to the current stderr, DEBUG and up with ``debug``."""
    level = logging.DEBUG if debug else logging.INFO
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(GlyphFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def log_error(message: str) -> None:
    logger.error(message)


def log_warning(message: str) -> None:
    logger.warning(message)


def log_debug(message: str) -> None:
    logger.debug(message)


def abort_on_user_interrupt(exc: BaseException | None = None) -> NoReturn:
    """Report a Ctrl+C and leave with the conventional exit status 130."""
    log_error("interrupted; no release notes were written.")
    raise click.exceptions.Exit(130) from exc


def emit_output(content: str, *, newline: bool = True) -> None:
    """Write ``content`` to stdout."""
    click.echo(content, nl=newline)
