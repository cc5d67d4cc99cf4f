"""
Response monitoring, text extraction and saving.

ChatGPT exposes no "done" event, so completion is inferred from the stop
button: while a reply streams, ``[data-testid="stop-button"]`` is on the page.
The poll loop has two states, GENERATING and COMPLETE. A missing stop button
is only trusted after a second look 0.5s later, because React sometimes
removes and re-creates the button mid-stream.
"""

import json
import time
from datetime import datetime, timezone
from pathlib import Path

import chat_selectors
from errors import (
    EMPTY_RESPONSE_TEXT,
    MISSING_ARTICLE_TEXT,
    CompletionTimeout,
    PersistenceFailure,
)
from log_utils import get_logger, log_error, log_step
from response_document import DomDocumentAdapter, normalize_response
from utils import sanitize_query, save_ss

logger = get_logger("ResponseExtraction")

GENERATING = "GENERATING"
COMPLETE = "COMPLETE"

FILE_PREFIX = "chatgpt_response"


def wait_for_response_complete(
    page,
    check_interval=chat_selectors.CHECK_INTERVAL,
    max_wait=None,
    sleep=None,
    clock=None,
):
    """Block until the stop button is gone (confirmed twice), then let the DOM settle.

    ``max_wait`` (seconds) bounds the wait and raises CompletionTimeout; the
    default None waits as long as the reply keeps generating. Returns the
    number of checks made.
    """
    sleep = sleep or time.sleep
    clock = clock or time.monotonic
    try:
        log_step(logger, 4, "Monitoring response generation...")
        logger.info(f"Checking for stop button every {int(check_interval * 1000)}ms")

        state = GENERATING
        check_count = 0
        t0 = clock()
        while state == GENERATING:
            check_count += 1
            if page.query_selector(chat_selectors.STOP_BUTTON):
                logger.debug(
                    f"Check #{check_count}: Stop button found - response still generating..."
                )
            else:
                sleep(chat_selectors.CONFIRM_GONE_DELAY)
                if not page.query_selector(chat_selectors.STOP_BUTTON):
                    logger.success("Stop button no longer found - response generation complete!")
                    state = COMPLETE
                    break
                logger.debug(f"Check #{check_count}: False negative, button still exists")

            waited = clock() - t0
            if max_wait is not None and waited >= max_wait:
                raise CompletionTimeout(waited, max_wait)
            sleep(check_interval)

        logger.debug(
            f"Waiting additional {chat_selectors.SETTLE_DELAY:g} seconds for content to fully render..."
        )
        sleep(chat_selectors.SETTLE_DELAY)
        logger.success("Response monitoring completed")
        return check_count
    except Exception as exc:
        log_error(logger, "Error during response monitoring", exc)
        raise


def extract_response_text(page):
    """Read text and citation links from the last conversation turn."""
    try:
        log_step(logger, 5, "Extracting response text and citation links...")
        page.wait_for_selector(
            chat_selectors.CONVERSATION_TURN,
            visible=False,
            timeout=chat_selectors.CONVERSATION_TURN_TIMEOUT,
        )
        logger.info("Looking for assistant response article...")

        adapter = DomDocumentAdapter.from_page(page)
        if not adapter.found():
            logger.warning("Conversation turn disappeared before it could be read")
            return {"text": MISSING_ARTICLE_TEXT, "links": []}

        result = normalize_response(adapter)
        if result["text"] == EMPTY_RESPONSE_TEXT:
            logger.warning("No text content extracted from response")
            return result

        text, links = result["text"], result["links"]
        logger.success(f"Successfully extracted {len(text)} characters of text")
        logger.success(f"Found {len(links)} citation link(s)")
        if links:
            logger.debug(f"Citation links: {', '.join(links)}")
        logger.debug(f"Text preview: {text[:100]}...")
        return result
    except Exception as exc:
        save_ss(page, "extract_failed")
        log_error(logger, "Failed to extract response text", exc)
        raise


def build_filename(query, timestamp, prefix=FILE_PREFIX):
    safe_ts = timestamp.replace(":", "-").replace(".", "-")
    return f"{prefix}_{sanitize_query(query)}_{safe_ts}.json"


def iso_timestamp(now=None):
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def save_to_file(text, links, query, output_dir="output", prefix=FILE_PREFIX, now=None):
    """Write ``{query, timestamp, text, links}`` as pretty JSON; returns the file path."""
    try:
        log_step(logger, 6, "Saving response to JSON file...")
        out_dir = Path(output_dir)
        timestamp = iso_timestamp(now)
        filepath = out_dir / build_filename(query, timestamp, prefix)
        record = {
            "query": query,
            "timestamp": timestamp,
            "text": text,
            "links": list(links),
        }
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            filepath.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise PersistenceFailure(f"Could not write {filepath}: {exc}") from exc

        logger.success(f"Response saved to: {filepath.resolve()}")
        logger.info(f"Saved {len(links)} citation link(s) and {len(text)} characters of text")
        return str(filepath)
    except Exception as exc:
        log_error(logger, "Failed to save response to file", exc)
        raise


def extract_and_save_response(
    page,
    query,
    check_interval=chat_selectors.CHECK_INTERVAL,
    max_wait=None,
    output_dir="output",
):
    try:
        logger.info("Starting response extraction workflow...")
        wait_for_response_complete(page, check_interval=check_interval, max_wait=max_wait)
        result = extract_response_text(page)
        filepath = save_to_file(result["text"], result["links"], query, output_dir=output_dir)
        logger.success("Response extraction workflow completed successfully")
        return {"text": result["text"], "links": result["links"], "filepath": filepath}
    except Exception as exc:
        log_error(logger, "Response extraction workflow failed", exc)
        raise
