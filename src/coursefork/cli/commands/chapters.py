"""Chapter listing and test commands."""

import logging

import click

from coursefork.cli.commands.shared import (
    is_verbose,
    open_repository,
    require_current_chapter,
    run_async,
)
from coursefork.core.report import format_score
from coursefork.core.workflows import (
    ChapterTestOutcome,
    list_chapters,
    run_all_tests,
    run_chapter_tests,
    summarize,
)
from coursefork.infrastructure.config import get_config

logger = logging.getLogger(__name__)


@click.command(name="chapters")
@click.option("-m", "--modified", is_flag=True, help="Show only modified chapters.")
@click.pass_context
def chapters(ctx, modified: bool):
    """List chapters.

    Modified chapters are marked with '*', the others with '.'.

    Examples:
        coursefork chapters
        coursefork chapters --modified
    """
    verbose = is_verbose(ctx)

    async def _list():
        repository = await open_repository(verbose=verbose)
        return await list_chapters(repository, only_modified=modified)

    for listing in run_async(_list()):
        prefix = "*" if listing.is_modified else "."
        click.echo(f"{prefix} {listing.id}")


def print_test_results(outcome: ChapterTestOutcome, chapter_total: bool = False):
    for section, score in outcome.report.sections.items():
        click.echo(f"{outcome.chapter_id}/{section} {format_score(score)}")
    if chapter_total:
        click.echo(f"{outcome.chapter_id} {format_score(outcome.report.total)}")


@click.command(name="test")
@click.option("-a", "--all", "all_chapters", is_flag=True, help="Run tests from all chapters.")
@click.option("-s", "--summary", is_flag=True, help="Print chapter and overall totals.")
@click.pass_context
def test(ctx, all_chapters: bool, summary: bool):
    """Run tests.

    Without --all, runs the tests of the chapter in the current directory.
    Each line of output has the form '<chapter>/<section> <grade> <maximum>'.

    Examples:
        coursefork test
        coursefork test --all --summary
    """
    from coursefork.infrastructure.browser import browser_session

    verbose = is_verbose(ctx)
    browser_config = get_config().browser

    def print_outcome(outcome):
        print_test_results(outcome, chapter_total=summary and all_chapters)

    async def _test():
        repository = await open_repository(verbose=verbose)
        if not all_chapters:
            chapter = await require_current_chapter(repository)

        async with browser_session(
            headless=browser_config.headless,
            test_expression=browser_config.test_expression,
            timeout=browser_config.timeout,
        ) as runner:
            if all_chapters:
                logger.info("Running all tests")
                return await run_all_tests(repository, runner, on_outcome=print_outcome)
            logger.info(f"Running tests of chapter {chapter.id}")
            outcome = await run_chapter_tests(chapter, runner)
            print_outcome(outcome)
            return [outcome]

    outcomes = run_async(_test())
    if summary:
        click.echo(f"total {format_score(summarize(outcomes))}")
