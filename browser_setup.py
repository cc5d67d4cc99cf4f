"""Local browser setup: SeleniumBase undetected Chrome, plus shared navigation."""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from typing import Callable, Optional

from seleniumbase import SB

import chat_selectors
from errors import SessionSetupFailure
from log_utils import get_logger, log_error
from page_handle import PageHandle, SeleniumBasePage
from utils import sleep_dbg

logger = get_logger("BrowserSetup")


@dataclass
class BrowserHandles:
    page: PageHandle
    close: Callable[[], None]
    session_id: Optional[str] = None
    replay_url: Optional[str] = None


def setup_browser(settings) -> BrowserHandles:
    """Launch a local UC-mode Chrome through SeleniumBase."""
    logger.info("Initializing browser setup...")
    stack = ExitStack()
    try:
        sb = stack.enter_context(
            SB(
                uc=True,
                test=True,
                locale="en",
                headless=settings.headless,
                proxy=settings.proxy,
            )
        )
        sb.set_window_size(1920, 1080)
    except Exception as exc:
        stack.close()
        log_error(logger, "Failed to setup browser", exc)
        raise SessionSetupFailure(f"Local browser launch failed: {exc}") from exc

    logger.success(
        f"Browser launched successfully (headless={settings.headless} "
        f"proxy={'set' if settings.proxy else 'none'})"
    )
    return BrowserHandles(page=SeleniumBasePage(sb), close=stack.close)


def navigate_to_url(page: PageHandle, url: str) -> None:
    try:
        logger.info(f"Navigating to {url}...")
        page.goto(url, timeout=chat_selectors.NAVIGATION_TIMEOUT)
        sleep_dbg(1, 3, label="after_navigation")
        logger.success(f"Successfully navigated to {url}")
    except Exception as exc:
        log_error(logger, f"Failed to navigate to {url}", exc)
        raise


def close_browser(handles: BrowserHandles) -> None:
    try:
        logger.info("Closing browser...")
        handles.close()
        logger.success("Browser closed successfully")
    except Exception as exc:
        log_error(logger, "Failed to close browser", exc)
        raise
