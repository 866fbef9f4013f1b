import logging
from pathlib import Path
from typing import TYPE_CHECKING

from attrs import field, frozen

from coursefork.core.collaborators import TestRunner
from coursefork.core.modification_tracker import is_member
from coursefork.core.report import TestReport

if TYPE_CHECKING:
    from coursefork.core.repository import Repository

logger = logging.getLogger(__name__)


@frozen
class Chapter:
    """A single exercise, stored in ``<root>/chapters/<id>``."""

    repository: "Repository" = field(repr=False)
    id: str

    @property
    def commit_message(self) -> str:
        return f"{self.id}/{self.repository.layout.solution_file}"

    async def absolute_path(self) -> Path:
        return await self.repository.chapter_directory(self.id)

    async def file_path(self, filename: str) -> Path:
        return await self.absolute_path() / filename

    async def solution_path(self) -> Path:
        return await self.file_path(self.repository.layout.solution_file)

    async def tests_path(self) -> Path:
        return await self.file_path(self.repository.layout.tests_file)

    async def is_modified(self, modified: frozenset[Path] | None = None) -> bool:
        """Whether git lists this chapter's solution file as modified.

        Args:
            modified: A snapshot of `Repository.modified_absolute_paths()` to
                reuse. If None, git is queried again.
        """
        log = self.repository.log
        with log.scope(f"Checking if chapter {self.id} is modified"):
            solution = await self.solution_path()
            if modified is None:
                modified = await self.repository.modified_absolute_paths()

            log.log(f"Checking if {solution} has been modified according to git")
            result = is_member(solution, modified)
            log.log(f"Chapter {self.id} {'has' if result else 'has not'} been modified")
            return result

    async def test(self, runner: TestRunner) -> TestReport:
        with self.repository.log.scope(f"Running tests for chapter {self.id}"):
            tests_path = await self.tests_path()
            self.repository.log.log(f"Path of html: {tests_path}")
            raw = await runner.run(tests_path)
            return TestReport.from_raw(raw)

    async def commit_solution(self) -> bool:
        """Stage and commit the solution file if it is modified.

        Returns:
            True if a commit was made, False if there was nothing to commit
        """
        log = self.repository.log
        with log.scope(f"Committing chapter {self.id}"):
            if not await self.is_modified():
                log.log(f"No need to commit {self.id}")
                return False

            solution = await self.solution_path()
            log.log(f"Git-adding {solution}")
            await self.repository.git.add(solution)

            log.log(f"Git-committing with message {self.commit_message}")
            await self.repository.git.commit(self.commit_message)
            logger.info(f"Committed solution of chapter {self.id}")
            return True
