"""Interfaces of the services the core relies on.

Implementations live in `coursefork.infrastructure`; tests substitute fakes.
"""

from pathlib import Path
from typing import Any, Protocol

from attrs import Factory, frozen


@frozen
class GitStatus:
    """Working tree status, all paths relative to the repository root.

    Paths use forward slashes, exactly as git reports them.
    """

    modified: frozenset[str] = Factory(frozenset)
    added: frozenset[str] = Factory(frozenset)
    deleted: frozenset[str] = Factory(frozenset)
    renamed: frozenset[str] = Factory(frozenset)
    untracked: frozenset[str] = Factory(frozenset)


class VersionControl(Protocol):
    async def is_inside_work_tree(self) -> bool: ...

    async def show_toplevel(self) -> Path: ...

    async def status(self) -> GitStatus: ...

    async def remotes(self) -> dict[str, str]: ...

    async def current_branch(self) -> str: ...

    async def add(self, path: Path | str) -> None: ...

    async def commit(self, message: str) -> None: ...

    async def push(self, remote: str, branch: str) -> None: ...

    async def pull(self, remote: str, branch: str) -> None: ...


class FileSystem(Protocol):
    async def file_exists(self, path: Path) -> bool:
        """Return whether a file exists at `path`; never raises for absence."""
        ...

    async def subdirectories(self, path: Path) -> list[str]:
        """Return the names of the immediate subdirectories of `path`."""
        ...


class TestRunner(Protocol):
    async def run(self, test_file: Path) -> dict[str, Any]:
        """Execute an HTML test file and return the raw results.

        The result has the shape ``{"results": {section: {"grade": g, "maximum": m}}}``.
        """
        ...
