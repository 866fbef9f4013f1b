"""Tests for running test pages in the browser.

No browser is launched; the runner is given a mocked browser.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from coursefork.core.errors import ChapterTestError
from coursefork.infrastructure.browser import PlaywrightTestRunner


def runner_with_page(page):
    runner = PlaywrightTestRunner(test_expression="shell.runTests()", timeout=10)
    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    runner._browser = browser
    return runner


def make_page(result=None, error=None):
    page = MagicMock()
    page.goto = AsyncMock()
    page.evaluate = AsyncMock(return_value=result, side_effect=error)
    page.close = AsyncMock()
    return page


@pytest.mark.asyncio
async def test_run_returns_test_results(tmp_path):
    results = {"results": {"basics": {"grade": 1, "maximum": 1}}}
    page = make_page(result=results)
    runner = runner_with_page(page)

    assert await runner.run(tmp_path / "tests.html") == results
    page.goto.assert_awaited_once_with((tmp_path / "tests.html").as_uri(), timeout=10000)
    page.evaluate.assert_awaited_once_with("shell.runTests()")
    page.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_page_error_is_reported(tmp_path):
    page = make_page(error=PlaywrightError("shell is not defined"))
    runner = runner_with_page(page)

    with pytest.raises(ChapterTestError, match="shell is not defined"):
        await runner.run(tmp_path / "tests.html")
    page.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_unexpected_result(tmp_path):
    runner = runner_with_page(make_page(result=None))
    with pytest.raises(ChapterTestError, match="unexpected test result"):
        await runner.run(tmp_path / "tests.html")


@pytest.mark.asyncio
async def test_run_requires_started_browser(tmp_path):
    with pytest.raises(RuntimeError, match="async context manager"):
        await PlaywrightTestRunner().run(tmp_path / "tests.html")
