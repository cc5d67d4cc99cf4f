"""
Page automation handle shared by dispatch and extraction.

Both browser providers hand back an object with the same small surface:
selector waits, clicks, keystroke typing, presence checks and JavaScript
evaluation. Scripts passed to ``evaluate`` are function expressions such as
``"() => document.title"``.
"""

from __future__ import annotations

import time
from typing import Any, Protocol

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from selenium.common import exceptions as selenium_exceptions
from seleniumbase.common import exceptions as sb_exceptions

from errors import ElementNotFound

# SeleniumBase re-raises wait timeouts as its own exception classes, which do
# not subclass Selenium's. Raw driver calls still raise Selenium's.
SELECTOR_WAIT_ERRORS = (
    sb_exceptions.NoSuchElementException,
    sb_exceptions.ElementNotVisibleException,
    sb_exceptions.TimeoutException,
    selenium_exceptions.NoSuchElementException,
    selenium_exceptions.ElementNotVisibleException,
    selenium_exceptions.TimeoutException,
)


class PageHandle(Protocol):
    def goto(self, url: str, timeout: float = 60) -> None: ...

    def wait_for_selector(self, selector: str, visible: bool = True, timeout: float = 30) -> None: ...

    def click(self, selector: str) -> None: ...

    def type(self, selector: str, text: str, delay: float = 0.0) -> None: ...

    def query_selector(self, selector: str) -> bool: ...

    def evaluate(self, script: str) -> Any: ...

    def screenshot(self, path: str) -> None: ...


class SeleniumBasePage:
    """PageHandle over a SeleniumBase ``SB`` instance (local undetected Chrome)."""

    def __init__(self, sb):
        self.sb = sb

    def goto(self, url: str, timeout: float = 60) -> None:
        self.sb.driver.set_page_load_timeout(timeout)
        self.sb.open(url)

    def wait_for_selector(self, selector: str, visible: bool = True, timeout: float = 30) -> None:
        try:
            if visible:
                self.sb.wait_for_element_visible(selector, timeout=timeout)
            else:
                self.sb.wait_for_element_present(selector, timeout=timeout)
        except SELECTOR_WAIT_ERRORS as exc:
            raise ElementNotFound(selector, timeout) from exc

    def click(self, selector: str) -> None:
        self.sb.click(selector)

    def type(self, selector: str, text: str, delay: float = 0.0) -> None:
        if delay <= 0:
            self.sb.press_keys(selector, text)
            return
        for ch in text:
            self.sb.press_keys(selector, ch)
            time.sleep(delay)

    def query_selector(self, selector: str) -> bool:
        return bool(self.sb.is_element_present(selector))

    def evaluate(self, script: str) -> Any:
        return self.sb.execute_script(f"return ({script})();")

    def screenshot(self, path: str) -> None:
        self.sb.save_screenshot(path)


class PlaywrightPage:
    """PageHandle over a Playwright sync ``Page`` (remote CDP sessions)."""

    def __init__(self, page):
        self.page = page

    def goto(self, url: str, timeout: float = 60) -> None:
        self.page.goto(url, wait_until="networkidle", timeout=timeout * 1000)

    def wait_for_selector(self, selector: str, visible: bool = True, timeout: float = 30) -> None:
        state = "visible" if visible else "attached"
        try:
            self.page.wait_for_selector(selector, state=state, timeout=timeout * 1000)
        except PlaywrightTimeoutError as exc:
            raise ElementNotFound(selector, timeout) from exc

    def click(self, selector: str) -> None:
        self.page.click(selector)

    def type(self, selector: str, text: str, delay: float = 0.0) -> None:
        self.page.locator(selector).press_sequentially(text, delay=delay * 1000)

    def query_selector(self, selector: str) -> bool:
        return self.page.query_selector(selector) is not None

    def evaluate(self, script: str) -> Any:
        return self.page.evaluate(script)

    def screenshot(self, path: str) -> None:
        self.page.screenshot(path=path)

