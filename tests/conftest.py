"""Pytest configuration and fixtures.

Most tests run the core against a real directory tree in `tmp_path` and a
`FakeGit` that records the git commands it receives instead of running them.
Tests marked `integration` use the real git executable.
"""

import shutil

import pytest
from fakes import FakeGit, FakeTestRunner, make_chapter

from coursefork.core.log_context import LogContext
from coursefork.core.repository import Repository
from coursefork.infrastructure.filesystem import LocalFileSystem


@pytest.fixture
def course_root(tmp_path):
    """A course working tree with two complete chapters and one draft.

    Layout:
        chapters/02-loops      complete
        chapters/01-intro      complete
        chapters/03-draft      bundle.js missing
        chapters/README.md     plain file
    """
    root = tmp_path / "course"
    make_chapter(root, "02-loops")
    make_chapter(root, "01-intro")
    make_chapter(root, "03-draft", markers=("student.js", "tests.html"))
    (root / "chapters" / "README.md").write_text("# Chapters\n")
    return root


@pytest.fixture
def fake_git(course_root):
    return FakeGit(course_root)


@pytest.fixture
def repository(fake_git):
    return Repository(git=fake_git, fs=LocalFileSystem(), log=LogContext())


@pytest.fixture
def fake_runner():
    return FakeTestRunner()


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when git is not installed."""
    if shutil.which("git"):
        return
    skip_git = pytest.mark.skip(reason="git executable not available")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_git)
