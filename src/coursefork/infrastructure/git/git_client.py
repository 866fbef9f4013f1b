"""Asynchronous access to the git command line client.

Every operation runs one git process in the working directory the client is
bound to. A non-zero exit code is turned into a `GitOperationError`; nothing
is retried.
"""

import logging
from pathlib import Path

from coursefork.core.collaborators import GitStatus
from coursefork.core.errors import GitOperationError
from coursefork.infrastructure.services.subprocess_tools import (
    DEFAULT_TIMEOUT,
    SubprocessError,
    SubprocessResult,
    run_subprocess,
)

logger = logging.getLogger(__name__)


def parse_porcelain_status(output: str) -> GitStatus:
    """Parse the output of `git status --porcelain=v1 -z`."""
    modified: set[str] = set()
    added: set[str] = set()
    deleted: set[str] = set()
    renamed: set[str] = set()
    untracked: set[str] = set()

    entries = output.split("\0")
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        xy, path = entry[:2], entry[3:]
        if xy == "??":
            untracked.add(path)
            continue
        if "R" in xy or "C" in xy:
            # The source path of a rename or copy follows as a separate entry
            i += 1
            if "R" in xy:
                renamed.add(path)
        if xy[0] == "A":
            added.add(path)
        if "D" in xy:
            deleted.add(path)
        if "M" in xy:
            modified.add(path)

    return GitStatus(
        modified=frozenset(modified),
        added=frozenset(added),
        deleted=frozenset(deleted),
        renamed=frozenset(renamed),
        untracked=frozenset(untracked),
    )


def parse_remotes(output: str) -> dict[str, str]:
    """Parse `git remote -v` into a mapping from remote name to fetch URL."""
    remotes: dict[str, str] = {}
    for line in output.splitlines():
        parts = line.split()
        if len(parts) >= 3 and parts[2] == "(fetch)":
            remotes[parts[0]] = parts[1]
    return remotes


class GitClient:
    """Runs git commands in a fixed working directory."""

    def __init__(
        self,
        working_dir: Path,
        executable: str = "git",
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.working_dir = Path(working_dir)
        self.executable = executable
        self.timeout = timeout

    def __repr__(self):
        return f"GitClient({str(self.working_dir)!r})"

    async def run(self, *args: str, check: bool = True) -> SubprocessResult:
        """Run a git command in the working directory.

        Raises:
            GitOperationError: If git cannot be run, or if it fails and
                `check` is true
        """
        result = await _run_git(self.executable, list(args), self.working_dir, self.timeout)
        if check and not result.ok:
            raise GitOperationError(list(args), result.return_code, result.stderr)
        return result

    async def is_inside_work_tree(self) -> bool:
        try:
            result = await self.run("rev-parse", "--is-inside-work-tree", check=False)
        except GitOperationError as e:
            logger.debug(f"Could not query git: {e}")
            return False
        return result.ok and result.stdout.strip() == "true"

    async def show_toplevel(self) -> Path:
        result = await self.run("rev-parse", "--show-toplevel")
        return Path(result.stdout.strip())

    async def status(self) -> GitStatus:
        result = await self.run("status", "--porcelain=v1", "-z")
        return parse_porcelain_status(result.stdout)

    async def raw_status(self) -> str:
        result = await self.run("status")
        return result.stdout

    async def remotes(self) -> dict[str, str]:
        result = await self.run("remote", "-v")
        return parse_remotes(result.stdout)

    async def current_branch(self) -> str:
        result = await self.run("rev-parse", "--abbrev-ref", "HEAD")
        branch = result.stdout.strip()
        if not branch or branch == "HEAD":
            raise GitOperationError(
                ["rev-parse", "--abbrev-ref", "HEAD"],
                result.return_code,
                "HEAD is detached; check out a branch first",
            )
        return branch

    async def add(self, path: Path | str) -> None:
        await self.run("add", "--", str(path))

    async def commit(self, message: str) -> None:
        await self.run("commit", "-m", message)

    async def push(self, remote: str, branch: str) -> None:
        await self.run("push", remote, branch)

    async def pull(self, remote: str, branch: str) -> None:
        await self.run("pull", remote, branch)

    async def add_remote(self, name: str, url: str) -> None:
        await self.run("remote", "add", name, url)

    @classmethod
    async def clone(
        cls,
        url: str,
        target: Path,
        executable: str = "git",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "GitClient":
        """Clone `url` into `target` and return a client bound to the clone."""
        args = ["clone", url, str(target)]
        result = await _run_git(executable, args, None, timeout)
        if not result.ok:
            raise GitOperationError(args, result.return_code, result.stderr)
        return cls(target, executable=executable, timeout=timeout)


async def _run_git(
    executable: str, args: list[str], cwd: Path | None, timeout: float
) -> SubprocessResult:
    try:
        return await run_subprocess([executable, *args], cwd=cwd, timeout=timeout)
    except SubprocessError as e:
        raise GitOperationError(args, -1, str(e)) from e
