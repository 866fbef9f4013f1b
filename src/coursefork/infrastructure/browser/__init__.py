from coursefork.infrastructure.browser.page_runner import PlaywrightTestRunner, browser_session

__all__ = ["PlaywrightTestRunner", "browser_session"]
