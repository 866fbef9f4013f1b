"""Result of resolving a chapter from a directory.

Running a chapter command outside of a chapter directory is an ordinary
situation, so it is represented as a value instead of an exception.
"""

from pathlib import Path
from typing import ClassVar

from attrs import frozen

from coursefork.core.chapter import Chapter


@frozen
class Found:
    chapter: Chapter
    found: ClassVar[bool] = True


@frozen
class NotFound:
    path: Path
    found: ClassVar[bool] = False


ChapterLookup = Found | NotFound
