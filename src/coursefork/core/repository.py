import logging
import os
from pathlib import Path

from attrs import Factory, define, field

from coursefork.core.chapter import Chapter
from coursefork.core.collaborators import FileSystem, VersionControl
from coursefork.core.errors import (
    ChaptersDirectoryError,
    MissingUpstreamRemoteError,
    NotARepositoryError,
    WrongUpstreamUrlError,
)
from coursefork.core.log_context import LogContext
from coursefork.core.lookup import ChapterLookup, Found, NotFound
from coursefork.core.modification_tracker import to_absolute_paths
from coursefork.core.path_classifier import (
    DEFAULT_LAYOUT,
    ChapterLayout,
    chapter_id_from_path,
    is_chapter_directory,
    relative_git_path,
)

logger = logging.getLogger(__name__)


def normalize_remote_url(url: str) -> str:
    url = url.strip().rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url.rstrip("/").lower()


def urls_match(actual: str, expected: str) -> bool:
    return normalize_remote_url(actual) == normalize_remote_url(expected)


@define(eq=False)
class Repository:
    """A student's working tree of the course repository.

    The root directory is asked from git once and cached; the working tree
    does not move while the program runs.
    """

    git: VersionControl
    fs: FileSystem
    layout: ChapterLayout = DEFAULT_LAYOUT
    origin: str = "origin"
    upstream: str = "upstream"
    upstream_url: str = ""
    log: LogContext = Factory(LogContext)
    _root_directory: Path | None = field(default=None, init=False)
    _chapters_directory: Path | None = field(default=None, init=False)

    @classmethod
    async def open(cls, git: VersionControl, fs: FileSystem, **kwargs) -> "Repository":
        """Create a repository if `git` is bound to a working tree.

        Raises:
            NotARepositoryError: If there is no working tree at git's location
        """
        if not await git.is_inside_work_tree():
            raise NotARepositoryError(getattr(git, "working_dir", Path.cwd()))
        return cls(git=git, fs=fs, **kwargs)

    async def root_directory(self) -> Path:
        if self._root_directory is None:
            with self.log.scope("Looking for repository's root directory"):
                toplevel = await self.git.show_toplevel()
                self._root_directory = Path(os.path.normpath(os.path.abspath(toplevel)))
                self.log.log(f"Root directory found: {self._root_directory}")
        return self._root_directory

    async def chapters_directory(self) -> Path:
        if self._chapters_directory is None:
            self._chapters_directory = await self.root_directory() / self.layout.chapters_dir
        return self._chapters_directory

    async def chapter_directory(self, chapter_id: str) -> Path:
        return await self.chapters_directory() / chapter_id

    def create_chapter(self, chapter_id: str) -> Chapter:
        return Chapter(repository=self, id=chapter_id)

    async def is_chapter_directory(self, path: Path) -> bool:
        return await is_chapter_directory(
            Path(path), await self.root_directory(), self.fs, self.layout, self.log
        )

    async def chapters(self) -> list[Chapter]:
        """All chapters, in the order the filesystem lists them."""
        chapters_directory = await self.chapters_directory()
        with self.log.scope(f"Looking for chapters in {chapters_directory}"):
            try:
                candidates = await self.fs.subdirectories(chapters_directory)
            except FileNotFoundError:
                self.log.log(f"{chapters_directory} does not exist")
                return []
            except OSError as e:
                raise ChaptersDirectoryError(chapters_directory, e.strerror or str(e)) from e

            result = []
            for candidate in candidates:
                if await self.is_chapter_directory(chapters_directory / candidate):
                    result.append(self.create_chapter(candidate))
            return result

    async def chapter_from_path(self, path: Path) -> ChapterLookup:
        """Resolve the chapter stored at `path`.

        Raises:
            InvalidChapterPathError: If `path` is classified as a chapter but
                no valid id can be derived from it
        """
        path = Path(path)
        with self.log.scope(f"Trying to deduce chapter from path {path}"):
            if not await self.is_chapter_directory(path):
                self.log.log(f"{path} is not a chapter directory")
                return NotFound(path)

            chapter_id = chapter_id_from_path(path, await self.root_directory(), self.layout)
            self.log.log(f"Chapter with git path {await self.git_path(path)} has id {chapter_id}")
            return Found(self.create_chapter(chapter_id))

    async def git_path(self, path: Path) -> str | None:
        return relative_git_path(path, await self.root_directory())

    async def modified_absolute_paths(self) -> frozenset[Path]:
        with self.log.scope("Determining absolute paths of files modified according to git"):
            status = await self.git.status()
            result = to_absolute_paths(await self.root_directory(), status.modified)
            for path in sorted(result):
                self.log.log(f"Modified: {path}")
            return result

    async def push(self, branch: str | None = None) -> str:
        """Push `branch` (default: the current branch) to origin.

        Returns:
            The name of the pushed branch
        """
        branch = branch or await self.git.current_branch()
        self.log.log(f"Pushing {branch} to {self.origin}")
        await self.git.push(self.origin, branch)
        return branch

    async def pull_upstream(self, branch: str | None = None) -> str:
        branch = branch or await self.git.current_branch()
        self.log.log(f"Pulling {branch} from {self.upstream}")
        await self.git.pull(self.upstream, branch)
        return branch

    async def verify_upstream(self) -> str:
        """Check that the upstream remote exists and points to the course.

        Returns:
            The URL of the upstream remote

        Raises:
            MissingUpstreamRemoteError: If there is no upstream remote
            WrongUpstreamUrlError: If an upstream URL is configured and the
                remote points elsewhere
        """
        remotes = await self.git.remotes()
        if self.upstream not in remotes:
            raise MissingUpstreamRemoteError(self.upstream)
        actual_url = remotes[self.upstream]
        if self.upstream_url and not urls_match(actual_url, self.upstream_url):
            raise WrongUpstreamUrlError(self.upstream, actual_url, self.upstream_url)
        return actual_url
