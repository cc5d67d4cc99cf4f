"""Query submission: open the search composer, type the query, send it."""

import chat_selectors
from log_utils import get_logger, log_error, log_step
from utils import save_ss, sleep_dbg, typing_delay

logger = get_logger("QuerySubmission")


def click_search_button(page):
    try:
        log_step(logger, 1, "Looking for composer search button...")
        page.wait_for_selector(
            chat_selectors.SEARCH_BUTTON,
            visible=True,
            timeout=chat_selectors.SEARCH_BUTTON_TIMEOUT,
        )
        logger.success("Found composer search button")

        sleep_dbg(0.5, 1.0)
        page.click(chat_selectors.SEARCH_BUTTON)
        logger.success("Clicked composer search button")

        # Give the textarea time to appear.
        sleep_dbg(0.8, 1.5)
    except Exception as exc:
        save_ss(page, "search_button_failed")
        log_error(logger, "Failed to click search button", exc)
        raise


def type_query(page, query):
    try:
        log_step(logger, 2, f'Typing query: "{query}"')
        page.wait_for_selector(
            chat_selectors.PROMPT_TEXTAREA,
            visible=True,
            timeout=chat_selectors.PROMPT_TEXTAREA_TIMEOUT,
        )
        logger.success("Found prompt textarea")

        page.click(chat_selectors.PROMPT_TEXTAREA)
        sleep_dbg(0.3, 0.6)

        page.type(chat_selectors.PROMPT_TEXTAREA, query, delay=typing_delay())
        logger.success("Query typed successfully")

        sleep_dbg(0.5, 1.0)
    except Exception as exc:
        save_ss(page, "type_query_failed")
        log_error(logger, "Failed to type query", exc)
        raise


def submit_query(page):
    try:
        log_step(logger, 3, "Looking for submit button...")
        # Shows up as soon as the composer has text, so the wait is short.
        page.wait_for_selector(
            chat_selectors.SUBMIT_BUTTON,
            visible=True,
            timeout=chat_selectors.SUBMIT_BUTTON_TIMEOUT,
        )
        logger.success("Found submit button")

        sleep_dbg(0.3, 0.7)
        page.click(chat_selectors.SUBMIT_BUTTON)
        logger.success("Clicked submit button - query sent!")

        sleep_dbg(1.0, 2.0)
    except Exception as exc:
        save_ss(page, "submit_failed")
        log_error(logger, "Failed to submit query", exc)
        raise


def submit_query_workflow(page, query):
    """Search button, then typing, then submit. The first failure aborts the rest."""
    try:
        logger.info("Starting query submission workflow...")
        click_search_button(page)
        type_query(page, query)
        submit_query(page)
        logger.success("Query submission workflow completed successfully")
    except Exception as exc:
        log_error(logger, "Query submission workflow failed", exc)
        raise
