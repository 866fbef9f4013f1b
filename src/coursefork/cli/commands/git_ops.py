"""Git operations for a student's fork of the course repository.

These commands move solutions from the working tree to the student's fork
(origin) and course updates from the shared repository (upstream) into it.
"""

import asyncio
import logging
from pathlib import Path

import click

from coursefork.cli.commands.shared import (
    is_verbose,
    open_repository,
    require_current_chapter,
    run_async,
)
from coursefork.core.errors import GitOperationError
from coursefork.core.workflows import (
    commit_all_modified,
    commit_chapter,
    modified_chapters,
    push_to_origin,
    sync_with_upstream,
)
from coursefork.infrastructure.config import get_config
from coursefork.infrastructure.git import GitClient

logger = logging.getLogger(__name__)


@click.command()
@click.argument("url")
@click.option(
    "-d",
    "--directory",
    type=click.Path(file_okay=False, path_type=Path),
    help="Target directory (default: algoritmisch-denken).",
)
def initialize(url: str, directory: Path | None):
    """Fetch a student repository.

    Clones URL and adds the course repository as 'upstream' remote.

    Examples:
        coursefork initialize https://github.com/me/course
        coursefork initialize https://github.com/me/course -d my-course
    """
    config = get_config()
    target = directory or Path(config.layout.default_clone_directory)

    click.echo(f"Cloning repository at {url} to {target}")
    try:
        git = asyncio.run(
            GitClient.clone(
                url, target, executable=config.git.executable, timeout=config.git.timeout
            )
        )
    except GitOperationError as e:
        logger.error(f"Clone failed: {e}")
        click.echo("An error occurred while cloning.", err=True)
        click.echo("Check the url or ask for help.", err=True)
        raise SystemExit(1) from e

    if config.remotes.upstream_url:
        click.echo(f"Adding remote {config.remotes.upstream}")
        run_async(git.add_remote(config.remotes.upstream, config.remotes.upstream_url))
    else:
        click.echo(
            "Warning: no upstream URL configured; add it later with "
            f"'git remote add {config.remotes.upstream} <url>'",
            err=True,
        )
    click.echo("Done!")


@click.command()
@click.option("-a", "--all", "all_chapters", is_flag=True, help="Upload all modified chapters.")
@click.pass_context
def upload(ctx, all_chapters: bool):
    """Upload solutions.

    Commits the solution of the current chapter (or of every modified
    chapter with --all) and pushes the current branch to origin.

    Examples:
        coursefork upload
        coursefork upload --all
    """
    verbose = is_verbose(ctx)

    async def _upload():
        repository = await open_repository(verbose=verbose)
        if all_chapters:
            outcomes = await commit_all_modified(
                await modified_chapters(repository),
                progress=lambda chapter, i, n: click.echo(
                    f"Uploading chapter {chapter.id} ({i} out of {n})"
                ),
            )
        else:
            chapter = await require_current_chapter(repository)
            click.echo(f"Uploading solutions for chapter {chapter.id}...")
            outcomes = [await commit_chapter(chapter)]

        for outcome in outcomes:
            if not outcome.committed:
                click.echo(f"  {outcome.chapter_id}: nothing to commit")
        branch = await push_to_origin(repository)
        click.echo(f"Pushed to {repository.origin}/{branch}")

    run_async(_upload())
    click.echo("Done!")


@click.command()
@click.pass_context
def sync(ctx):
    """Pull course updates from upstream and push them to origin.

    Fails if the upstream remote is missing or points to an unexpected URL.

    Examples:
        coursefork sync
    """
    verbose = is_verbose(ctx)

    async def _sync():
        repository = await open_repository(verbose=verbose)
        return repository, await sync_with_upstream(repository)

    repository, outcome = run_async(_sync())
    click.echo(f"Pulled {outcome.branch} from {repository.upstream} ({outcome.upstream_url})")
    click.echo(f"Pushed to {repository.origin}/{outcome.branch}")
    click.echo("Done!")


@click.command(name="git-status")
@click.pass_context
def git_status(ctx):
    """Show git status."""
    verbose = is_verbose(ctx)

    async def _status():
        repository = await open_repository(verbose=verbose)
        return await repository.git.raw_status()

    click.echo(run_async(_status()), nl=False)
