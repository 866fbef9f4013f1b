"""Shared utilities for CLI commands.

This module contains utilities used by multiple CLI command modules.
"""

import asyncio
import logging
import sys
from collections.abc import Coroutine
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.logging import RichHandler

from coursefork.core.chapter import Chapter
from coursefork.core.errors import CourseforkError, NotAChapterDirectoryError
from coursefork.core.log_context import LogContext
from coursefork.core.path_classifier import ChapterLayout
from coursefork.core.repository import Repository
from coursefork.core.workflows import current_chapter
from coursefork.infrastructure.config import CourseforkConfig, get_config
from coursefork.infrastructure.filesystem import LocalFileSystem
from coursefork.infrastructure.git import GitClient
from coursefork.infrastructure.logging.log_paths import get_main_log_path as get_log_file_path

T = TypeVar("T")

# Shared console for log output - uses stderr to keep stdout for results
cli_console = Console(file=sys.stderr)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = logging.getLogger(__name__)


def setup_logging(log_level_name: str, console_logging: bool = False):
    """Configure logging for coursefork.

    By default, logs go to a file in the system-appropriate log directory.
    Console logging is enabled by --verbose.

    Args:
        log_level_name: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_logging: If True, also log to console via Rich
    """
    log_level = logging.getLevelName(log_level_name.upper())
    log_file = get_log_file_path()

    # Clear any existing handlers and close them properly
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    # File handler with rotation (10 MB max, keep 3 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    if console_logging:
        console_handler = RichHandler(
            console=cli_console,
            rich_tracebacks=True,
            show_path=False,
        )
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)

    root_logger.setLevel(logging.DEBUG)  # Let handlers filter
    logging.getLogger("coursefork").setLevel(log_level)


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a command's coroutine, turning user errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except CourseforkError as e:
        logger.debug("Command failed", exc_info=e)
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from e


def layout_from_config(config: CourseforkConfig) -> ChapterLayout:
    return ChapterLayout(
        chapters_dir=config.layout.chapters_dir,
        solution_file=config.layout.solution_file,
        tests_file=config.layout.tests_file,
        bundle_file=config.layout.bundle_file,
    )


async def open_repository(
    path: Path | None = None, config: CourseforkConfig | None = None, verbose: bool = False
) -> Repository:
    """Open the repository containing `path` (default: the current directory).

    Raises:
        NotARepositoryError: If `path` is not inside a git working tree
    """
    config = config or get_config()
    path = Path.cwd() if path is None else Path(path)
    logger.debug(f"Looking for repository at {path}")

    git = GitClient(path, executable=config.git.executable, timeout=config.git.timeout)
    return await Repository.open(
        git,
        LocalFileSystem(),
        layout=layout_from_config(config),
        origin=config.remotes.origin,
        upstream=config.remotes.upstream,
        upstream_url=config.remotes.upstream_url,
        log=LogContext(enabled=verbose),
    )


async def require_current_chapter(repository: Repository, cwd: Path | None = None) -> Chapter:
    """Return the chapter at `cwd`.

    Raises:
        NotAChapterDirectoryError: If `cwd` is not a chapter directory
    """
    cwd = Path.cwd() if cwd is None else Path(cwd)
    lookup = await current_chapter(repository, cwd)
    if not lookup.found:
        raise NotAChapterDirectoryError(cwd)
    logger.debug(f"Chapter {lookup.chapter.id} found in {cwd}")
    return lookup.chapter


def is_verbose(ctx: click.Context) -> bool:
    obj = ctx.find_root().obj or {}
    return bool(obj.get("VERBOSE", False))
