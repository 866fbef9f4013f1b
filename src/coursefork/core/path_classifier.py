"""Deciding which directories are chapters.

A chapter directory sits exactly one level below the chapters directory of
the repository (``chapters/<id>``) and contains all three marker files. A
directory missing any marker is simply not a chapter; this keeps
half-initialized chapters invisible instead of breaking discovery.
"""

import logging
import os
import re
from pathlib import Path

from attrs import frozen

from coursefork.core.collaborators import FileSystem
from coursefork.core.errors import InvalidChapterPathError
from coursefork.core.log_context import LogContext

logger = logging.getLogger(__name__)


@frozen
class ChapterLayout:
    chapters_dir: str = "chapters"
    solution_file: str = "student.js"
    tests_file: str = "tests.html"
    bundle_file: str = "bundle.js"

    @property
    def marker_files(self) -> tuple[str, str, str]:
        return self.solution_file, self.tests_file, self.bundle_file

    @property
    def chapter_path_regex(self) -> re.Pattern:
        return re.compile(rf"^{re.escape(self.chapters_dir)}[\\/]([^\\/]+)$")


DEFAULT_LAYOUT = ChapterLayout()


def relative_git_path(candidate: Path | str, root: Path | str) -> str | None:
    """Path of `candidate` relative to `root`, or None if it is on another drive."""
    try:
        return os.path.relpath(os.path.abspath(candidate), os.path.abspath(root))
    except ValueError:
        return None


def has_chapter_shape(git_path: str | None, layout: ChapterLayout = DEFAULT_LAYOUT) -> bool:
    return git_path is not None and layout.chapter_path_regex.match(git_path) is not None


async def is_chapter_directory(
    candidate: Path,
    root: Path,
    fs: FileSystem,
    layout: ChapterLayout = DEFAULT_LAYOUT,
    log: LogContext | None = None,
) -> bool:
    log = log or LogContext.disabled()
    with log.scope(f"Checking if {candidate} is a chapter directory"):
        git_path = relative_git_path(candidate, root)
        if not has_chapter_shape(git_path, layout):
            log.log(
                f"Git path {git_path} does not have the required "
                f"{layout.chapters_dir}/<id> pattern"
            )
            return False

        for marker in layout.marker_files:
            try:
                exists = await fs.file_exists(Path(candidate) / marker)
            except OSError as e:
                logger.debug(f"Could not check {marker} in {candidate}: {e}")
                exists = False
            if not exists:
                log.log(f"Chapter NOT found at {candidate}: {marker} is missing")
                return False

        log.log(f"Chapter found at {candidate}")
        return True


def chapter_id_from_path(
    candidate: Path, root: Path, layout: ChapterLayout = DEFAULT_LAYOUT
) -> str:
    """Extract the chapter id from a chapter directory.

    Raises:
        InvalidChapterPathError: If the path relative to `root` is not of the
            form ``chapters/<id>`` with a single-segment id
    """
    git_path = relative_git_path(candidate, root)
    match = layout.chapter_path_regex.match(git_path) if git_path is not None else None
    if not match:
        raise InvalidChapterPathError(str(git_path if git_path is not None else candidate))
    return match.group(1)
