"""
Shared fixtures and configuration for CLI tests.
"""

from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from coursefork.infrastructure.config import CourseforkConfig


@pytest.fixture(autouse=True)
def no_log_files():
    """Keep CLI tests from configuring logging and writing log files."""
    with patch("coursefork.cli.main.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def cli_config():
    return CourseforkConfig(remotes={"upstream_url": "https://github.com/teacher/course"})


@pytest.fixture(autouse=True)
def fixed_config(cli_config):
    """Use a default configuration regardless of files on the test machine."""
    with (
        patch("coursefork.cli.main.get_config", return_value=cli_config),
        patch("coursefork.cli.commands.chapters.get_config", return_value=cli_config),
        patch("coursefork.cli.commands.git_ops.get_config", return_value=cli_config),
        patch("coursefork.cli.commands.updates.get_config", return_value=cli_config),
    ):
        yield cli_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def use_repository(repository):
    """Make every command operate on the `repository` fixture."""

    async def open_repository(*args, **kwargs):
        return repository

    with (
        patch("coursefork.cli.commands.chapters.open_repository", new=open_repository),
        patch("coursefork.cli.commands.git_ops.open_repository", new=open_repository),
    ):
        yield repository


@pytest.fixture
def use_test_runner(fake_runner):
    """Replace the browser with `fake_runner`."""

    @asynccontextmanager
    async def browser_session(**kwargs):
        yield fake_runner

    with patch("coursefork.infrastructure.browser.browser_session", new=browser_session):
        yield fake_runner
