"""Command-line interface for coursefork.

This module provides the main CLI entry point. Commands are organized
into separate modules under coursefork.cli.commands for maintainability.
"""

import click

from coursefork.__version__ import __version__
from coursefork.cli.commands.shared import LOG_LEVELS, setup_logging
from coursefork.infrastructure.config import get_config


@click.group()
@click.version_option(version=__version__, prog_name="coursefork")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log to the console and trace chapter discovery.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: from configuration, usually INFO).",
)
@click.pass_context
def cli(ctx, verbose, log_level):
    """coursefork - Work on the chapters of a course fork.

    Run tests for the chapters you are working on, upload your solutions
    to your fork and pull course updates from the shared repository.
    """
    ctx.ensure_object(dict)
    ctx.obj["VERBOSE"] = verbose
    if log_level is None:
        log_level = "DEBUG" if verbose else get_config().logging.log_level
    ctx.obj["LOG_LEVEL"] = log_level.upper()
    setup_logging(ctx.obj["LOG_LEVEL"], console_logging=verbose)


@cli.command()
@click.pass_context
def help(ctx):
    """Show this help message."""
    click.echo(ctx.parent.get_help())


# These imports must come after cli is defined, hence noqa: E402
from coursefork.cli.commands.chapters import chapters, test  # noqa: E402
from coursefork.cli.commands.config import config  # noqa: E402
from coursefork.cli.commands.git_ops import (  # noqa: E402
    git_status,
    initialize,
    sync,
    upload,
)
from coursefork.cli.commands.updates import check_update  # noqa: E402

cli.add_command(initialize)
cli.add_command(chapters)
cli.add_command(test)
cli.add_command(upload)
cli.add_command(sync)
cli.add_command(git_status)
cli.add_command(check_update)

cli.add_command(config)


if __name__ == "__main__":
    cli()
