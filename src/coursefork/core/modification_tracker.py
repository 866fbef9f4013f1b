"""Mapping of git's modified files to absolute paths.

Git reports paths relative to the repository root with forward slashes.
Chapters compute their paths from the same root. Both sides go through
`normalize_path` before they are compared, so that slash direction, trailing
separators and case on case-insensitive filesystems never cause a mismatch.
"""

import os
from collections.abc import Iterable
from pathlib import Path, PurePosixPath


def normalize_path(path: Path | str) -> Path:
    return Path(os.path.normcase(os.path.normpath(os.path.abspath(path))))


def to_absolute_path(root: Path, git_path: str) -> Path:
    return normalize_path(Path(root).joinpath(*PurePosixPath(git_path).parts))


def to_absolute_paths(root: Path, git_paths: Iterable[str]) -> frozenset[Path]:
    return frozenset(to_absolute_path(root, git_path) for git_path in git_paths)


def is_member(path: Path, modified: frozenset[Path]) -> bool:
    return normalize_path(path) in modified
