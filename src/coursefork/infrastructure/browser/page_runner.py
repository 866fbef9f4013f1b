"""Running chapter tests in a headless browser.

A chapter's `tests.html` loads the compiled bundle and exposes a global
`shell.runTests()` that returns the scores per test section.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from coursefork.core.errors import ChapterTestError

logger = logging.getLogger(__name__)


class PlaywrightTestRunner:
    """Runs test pages in a single Chromium instance.

    Use as an async context manager; each `run` opens and closes its own page.
    """

    __test__ = False

    def __init__(
        self,
        headless: bool = True,
        test_expression: str = "shell.runTests()",
        timeout: float = 30,
    ):
        self.headless = headless
        self.test_expression = test_expression
        self.timeout = timeout
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> "PlaywrightTestRunner":
        logger.debug("Launching headless browser")
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
        except PlaywrightError as e:
            await self._playwright.stop()
            self._playwright = None
            raise ChapterTestError("<browser>", f"could not launch browser: {e}") from e
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def run(self, test_file: Path) -> dict[str, Any]:
        if self._browser is None:
            raise RuntimeError("PlaywrightTestRunner must be used as an async context manager")

        url = Path(test_file).absolute().as_uri()
        logger.debug(f"Browsing to {url}")
        page = await self._browser.new_page()
        try:
            await page.goto(url, timeout=self.timeout * 1000)
            logger.debug(f"Evaluating {self.test_expression}")
            result = await page.evaluate(self.test_expression)
        except PlaywrightError as e:
            raise ChapterTestError(test_file, str(e)) from e
        finally:
            await page.close()

        if not isinstance(result, dict):
            raise ChapterTestError(test_file, f"unexpected test result {result!r}")
        return result


@asynccontextmanager
async def browser_session(
    headless: bool = True,
    test_expression: str = "shell.runTests()",
    timeout: float = 30,
) -> AsyncIterator[PlaywrightTestRunner]:
    async with PlaywrightTestRunner(headless, test_expression, timeout) as runner:
        yield runner
