"""Errors raised by the coursefork core.

Absence of a chapter is not an error; see `coursefork.core.lookup`.
"""


class CourseforkError(Exception):
    """Base class for all errors reported to the user."""

    pass


class NotARepositoryError(CourseforkError):
    """Raised when the current location is not inside a git working tree."""

    def __init__(self, path):
        super().__init__(f"No git repository found at current location {path}")
        self.path = path


class InvalidChapterPathError(CourseforkError):
    """Raised when a path looks like a chapter but yields no usable chapter id."""

    def __init__(self, git_path: str):
        super().__init__(f"Git path {git_path} cannot be used as chapter id")
        self.git_path = git_path


class UpstreamRemoteError(CourseforkError):
    """Problems with the shared upstream remote."""

    pass


class MissingUpstreamRemoteError(UpstreamRemoteError):
    def __init__(self, remote_name: str):
        super().__init__(
            f"Remote '{remote_name}' is not configured. "
            f"Run 'git remote add {remote_name} <url>' first."
        )
        self.remote_name = remote_name


class WrongUpstreamUrlError(UpstreamRemoteError):
    def __init__(self, remote_name: str, actual_url: str, expected_url: str):
        super().__init__(
            f"Remote '{remote_name}' points to {actual_url}, expected {expected_url}"
        )
        self.remote_name = remote_name
        self.actual_url = actual_url
        self.expected_url = expected_url


class GitOperationError(CourseforkError):
    """Raised when a git command fails.

    Attributes:
        command: The git arguments that were executed
        return_code: The exit code of git
        stderr: Whatever git printed on stderr
    """

    def __init__(self, command: list[str], return_code: int, stderr: str = ""):
        message = f"git {' '.join(command)} failed with exit code {return_code}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)
        self.command = command
        self.return_code = return_code
        self.stderr = stderr


class ChapterTestError(CourseforkError):
    """Raised when the tests of a chapter cannot be executed."""

    def __init__(self, test_file, reason: str):
        super().__init__(f"Could not run tests in {test_file}: {reason}")
        self.test_file = test_file
        self.reason = reason


class NotAChapterDirectoryError(CourseforkError):
    """Raised by commands that need a chapter when the lookup found none.

    The core itself reports absence as `coursefork.core.lookup.NotFound`.
    """

    def __init__(self, path):
        super().__init__(f"Current directory {path} is not a chapter directory")
        self.path = path


class ChaptersDirectoryError(CourseforkError):
    """Raised when the chapters directory exists but cannot be listed."""

    def __init__(self, path, reason: str):
        super().__init__(f"Cannot list chapters in {path}: {reason}")
        self.path = path
        self.reason = reason
