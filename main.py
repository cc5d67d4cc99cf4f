"""
ChatGPT web scraper - main orchestrator.

Usage: python main.py "Your query here"

Exit codes: 0 success, 1 any failure, 130 interrupted.
"""

import argparse
import sys
import time

import browser_setup
import browserbase_setup
import utils
from config import load_settings
from errors import SessionInterrupted
from is_pages.is_chat_ui import is_chat_ui_visible
from log_utils import get_logger, log_error, setup_logging
from query_submission import submit_query_workflow
from response_extraction import extract_and_save_response
from session import BrowserSession

logger = get_logger("Main")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

USAGE = (
    '\nUsage: python main.py "Your query here"\n'
    'Example: python main.py "How are you doing today?"\n'
)

PROVIDERS = {
    "browserbase": browserbase_setup.setup_browser,
    "local": browser_setup.setup_browser,
}


def _banner(lines):
    logger.info("=" * 80)
    for line in lines:
        logger.info(line)
    logger.info("=" * 80)


def _run_pipeline(page, query, settings):
    browser_setup.navigate_to_url(page, settings.chatgpt_url)
    if not is_chat_ui_visible(page):
        logger.warning("Chat composer not visible yet; continuing with dispatch timeouts")

    submit_query_workflow(page, query)
    return extract_and_save_response(
        page,
        query,
        check_interval=settings.check_interval,
        max_wait=settings.max_wait,
        output_dir=settings.output_dir,
    )


def _report(result, handles):
    text, links = result["text"], result["links"]
    logger.info("=" * 80)
    logger.success("SCRAPING COMPLETED SUCCESSFULLY!")
    logger.info("=" * 80)
    logger.info(f"Response length: {len(text)} characters")
    logger.info(f"Citation links found: {len(links)}")
    for index, link in enumerate(links, start=1):
        logger.info(f"  [{index}] {link}")
    logger.info(f"Saved to: {result['filepath']}")
    if handles.replay_url:
        logger.info(f"View session replay: {handles.replay_url}")
    logger.info("=" * 80)


def run_scraper(query, settings, providers=None):
    """Run one query end to end and return the process exit code."""
    if not query:
        logger.error("No query provided!")
        print(USAGE)
        return EXIT_FAILURE

    providers = providers or PROVIDERS
    _banner(["ChatGPT Web Scraper Started", f'Query: "{query}"'])

    exit_code = EXIT_OK
    try:
        handles = providers[settings.browser_provider](settings)
        if handles.session_id:
            logger.info(f"Browserbase Session ID: {handles.session_id}")
    except Exception as exc:
        log_error(logger, "Scraper failed with error", exc)
        return EXIT_FAILURE

    try:
        with BrowserSession(handles, browser_setup.close_browser) as session:
            try:
                result = _run_pipeline(session.page, query, settings)
                _report(result, handles)
                if settings.keep_open_secs:
                    logger.info(f"Keeping browser open for {settings.keep_open_secs:g} seconds...")
                    time.sleep(settings.keep_open_secs)
            except SessionInterrupted:
                raise
            except Exception as exc:
                log_error(logger, "Scraper failed with error", exc)
                exit_code = EXIT_FAILURE
    except SessionInterrupted:
        return EXIT_INTERRUPTED
    except Exception as exc:
        log_error(logger, "Error closing browser during cleanup", exc)
        exit_code = EXIT_FAILURE

    return exit_code


def build_parser():
    parser = argparse.ArgumentParser(
        prog="chatgpt-scraper",
        description="Send one query to ChatGPT in a browser and save the reply as JSON.",
    )
    parser.add_argument("query", nargs="?", help="Text to send to ChatGPT")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as exc:
        setup_logging("INFO")
        log_error(logger, f"Invalid configuration: {exc}")
        return EXIT_FAILURE

    setup_logging(settings.log_level)
    utils.configure(human_delays=settings.human_delays, screenshot_dir=settings.screenshot_dir)
    try:
        return run_scraper(args.query, settings)
    except KeyboardInterrupt:
        logger.warning("Interrupted before a browser session was opened")
        return EXIT_INTERRUPTED
    except Exception as exc:
        log_error(logger, "Unhandled error in scraper", exc)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
