"""Operations offered to the command line interface.

Bulk operations handle one chapter at a time and wait for it to finish
before starting the next; concurrent git commands on one working tree are
not safe. Each returns the list of per-chapter outcomes.
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from attrs import frozen

from coursefork.core.chapter import Chapter
from coursefork.core.collaborators import TestRunner
from coursefork.core.lookup import ChapterLookup
from coursefork.core.report import Score, TestReport, total_score
from coursefork.core.repository import Repository

logger = logging.getLogger(__name__)


@frozen
class ChapterListing:
    id: str
    is_modified: bool


@frozen
class ChapterTestOutcome:
    chapter_id: str
    report: TestReport


@frozen
class CommitOutcome:
    chapter_id: str
    committed: bool


@frozen
class SyncOutcome:
    upstream_url: str
    branch: str


async def list_chapters(repository: Repository, only_modified: bool = False) -> list[ChapterListing]:
    """List chapters sorted by id, with their modification status.

    Git is asked for the modified files once for the whole listing.
    """
    chapters = await repository.chapters()
    modified = await repository.modified_absolute_paths()
    listings = []
    for chapter in sorted(chapters, key=lambda c: c.id):
        is_modified = await chapter.is_modified(modified)
        if is_modified or not only_modified:
            listings.append(ChapterListing(chapter.id, is_modified))
    return listings


async def current_chapter(repository: Repository, cwd: Path | None = None) -> ChapterLookup:
    cwd = Path.cwd() if cwd is None else Path(cwd)
    logger.debug(f"Getting chapter associated with directory {cwd}")
    return await repository.chapter_from_path(cwd)


async def all_chapters(repository: Repository) -> list[Chapter]:
    return sorted(await repository.chapters(), key=lambda c: c.id)


async def run_chapter_tests(chapter: Chapter, runner: TestRunner) -> ChapterTestOutcome:
    return ChapterTestOutcome(chapter.id, await chapter.test(runner))


async def run_all_tests(
    repository: Repository,
    runner: TestRunner,
    on_outcome: Callable[[ChapterTestOutcome], None] | None = None,
) -> list[ChapterTestOutcome]:
    """Test every chapter in id order.

    `on_outcome` is called with each chapter's outcome as soon as it is
    available, so results survive a later chapter failing.
    """
    outcomes = []
    for chapter in await all_chapters(repository):
        outcome = await run_chapter_tests(chapter, runner)
        if on_outcome is not None:
            on_outcome(outcome)
        outcomes.append(outcome)
    return outcomes


def summarize(outcomes: Iterable[ChapterTestOutcome]) -> Score:
    return total_score(outcome.report.total for outcome in outcomes)


async def commit_chapter(chapter: Chapter) -> CommitOutcome:
    return CommitOutcome(chapter.id, await chapter.commit_solution())


async def modified_chapters(repository: Repository) -> list[Chapter]:
    modified = await repository.modified_absolute_paths()
    return [c for c in await all_chapters(repository) if await c.is_modified(modified)]


async def commit_all_modified(
    chapters: Iterable[Chapter],
    progress: Callable[[Chapter, int, int], None] | None = None,
) -> list[CommitOutcome]:
    """Commit the given chapters one after the other.

    `progress` is called before each commit with the chapter, its 1-based
    position and the number of chapters.
    """
    chapters = list(chapters)
    outcomes = []
    for i, chapter in enumerate(chapters, start=1):
        if progress is not None:
            progress(chapter, i, len(chapters))
        outcomes.append(await commit_chapter(chapter))
    return outcomes


async def push_to_origin(repository: Repository) -> str:
    return await repository.push()


async def sync_with_upstream(repository: Repository) -> SyncOutcome:
    """Bring the latest course material into the fork.

    Verifies the upstream remote, pulls the current branch from it and
    pushes the result to origin.
    """
    upstream_url = await repository.verify_upstream()
    branch = await repository.pull_upstream()
    await repository.push(branch)
    return SyncOutcome(upstream_url, branch)
